"""Data models for review-guide."""

from .document import CodeFence, Directive, Heading, Link, MarkdownDocument, TocEntry
from .outputs import CheckReport, DocumentReport, Finding

__all__ = [
    "CheckReport",
    "CodeFence",
    "Directive",
    "DocumentReport",
    "Finding",
    "Heading",
    "Link",
    "MarkdownDocument",
    "TocEntry",
]
