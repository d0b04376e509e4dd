"""File filtering utilities for determining which documents to check."""

import fnmatch
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from re import Pattern

from reviewguide.models.outputs import normalize_path

logger = logging.getLogger(__name__)

# Patterns for files/directories that should never be checked
EXCLUDED_PATTERNS: list[Pattern[str]] = [
    # Dependencies
    re.compile(r"(^|/)node_modules/"),
    re.compile(r"(^|/)vendor/"),
    re.compile(r"(^|/)venv/"),
    re.compile(r"(^|/)\.venv/"),
    re.compile(r"(^|/)site-packages/"),
    # Build/dist directories
    re.compile(r"(^|/)dist/"),
    re.compile(r"(^|/)build/"),
    re.compile(r"(^|/)_site/"),
    re.compile(r"(^|/)site/"),
    re.compile(r"(^|/)\.tox/"),
    re.compile(r"(^|/)\.pytest_cache/"),
    # IDE files
    re.compile(r"(^|/)\.vscode/"),
    re.compile(r"(^|/)\.idea/"),
    # Git
    re.compile(r"(^|/)\.git/"),
]

MARKDOWN_EXTENSIONS = {
    ".md",
    ".markdown",
    ".mdown",
}


def is_markdown_file(file_path: str) -> bool:
    """Check if a file is a Markdown document based on extension.

    Args:
        file_path: Path to the file

    Returns:
        True if the file has a Markdown extension
    """
    return Path(file_path).suffix.lower() in MARKDOWN_EXTENSIONS


def should_check_file(file_path: str, exclude: Iterable[str] = ()) -> bool:
    """Determine if a file should be included in a check run.

    Args:
        file_path: Path to the file (relative or absolute)
        exclude: Extra glob patterns from project configuration

    Returns:
        True if the file should be checked, False if it should be excluded
    """
    normalized_path = Path(file_path).as_posix()

    if any(pattern.search(normalized_path) for pattern in EXCLUDED_PATTERNS):
        return False
    return not matches_any(normalized_path, exclude)


def matches_any(path: str, globs: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(path, glob) for glob in globs)


def collect_documents(
    paths: Iterable[str | Path], exclude: Iterable[str] = ()
) -> tuple[list[Path], list[str]]:
    """Expand paths into the Markdown files to check.

    Directories are walked recursively. Explicitly named files that are not
    Markdown are returned as skipped; excluded files found while walking are
    dropped silently. Paths that do not exist are returned as-is so that the
    caller can report them.

    Args:
        paths: Files or directories to check
        exclude: Extra glob patterns from project configuration

    Returns:
        Tuple of (documents to check, skipped paths), documents de-duplicated
        in discovery order
    """
    exclude = list(exclude)
    documents: list[Path] = []
    skipped: list[str] = []
    seen: set[Path] = set()

    def add(path: Path) -> None:
        key = path.resolve()
        if key not in seen:
            seen.add(key)
            documents.append(path)

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                # Built-in exclusions apply below the walked root; configured
                # globs also match the path from the working directory
                relative = candidate.relative_to(path).as_posix()
                if (
                    candidate.is_file()
                    and is_markdown_file(relative)
                    and should_check_file(relative, exclude)
                    and not matches_any(normalize_path(candidate), exclude)
                ):
                    add(candidate)
        elif path.exists() and not is_markdown_file(str(path)):
            logger.info(f"Skipping non-Markdown file: {path}")
            skipped.append(str(path))
        elif path.exists() and not should_check_file(normalize_path(path), exclude):
            logger.info(f"Skipping excluded file: {path}")
            skipped.append(str(path))
        else:
            add(path)

    return documents, skipped
