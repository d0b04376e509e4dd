"""Utility functions and helpers."""

from .baseline import load_baseline, write_baseline
from .filters import collect_documents, is_markdown_file, should_check_file
from .logging import setup_observability
from .reporters import render

__all__ = [
    "collect_documents",
    "is_markdown_file",
    "load_baseline",
    "render",
    "setup_observability",
    "should_check_file",
    "write_baseline",
]
