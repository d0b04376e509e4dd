"""Markdown parsing, checking and table of contents services."""

from reviewguide.services.checker import DocumentChecker, check_paths, check_text
from reviewguide.services.parser import parse_document
from reviewguide.services.toc import build_toc, update_toc

__all__ = [
    "DocumentChecker",
    "build_toc",
    "check_paths",
    "check_text",
    "parse_document",
    "update_toc",
]
