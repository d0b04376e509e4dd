"""Generate and refresh a document's table of contents."""

import logging
from collections.abc import Iterable

from reviewguide.models.document import MarkdownDocument
from reviewguide.services.anchors import strip_inline_markup
from reviewguide.services.parser import LIST_ITEM_RE, parse_document

logger = logging.getLogger(__name__)


def build_toc(document: MarkdownDocument, level: int = 2, max_level: int | None = None) -> str:
    """Render the table of contents for a document.

    Args:
        document: The parsed document
        level: Heading level listed at the top of the list
        max_level: Deepest heading level to include, nested under its parent;
            defaults to ``level``

    Returns:
        A Markdown bullet list, one ``- [Title](#anchor)`` line per heading
    """
    max_level = max_level or level
    if max_level < level:
        raise ValueError(f"max_level ({max_level}) must be >= level ({level})")

    lines = []
    for heading in document.headings:
        if document.is_toc_heading(heading) or not level <= heading.level <= max_level:
            continue
        indent = "  " * (heading.level - level)
        lines.append(f"{indent}- [{strip_inline_markup(heading.text)}](#{heading.anchor})")
    return "\n".join(lines)


def _list_span(lines: list[str], first: int, end: int) -> tuple[int, int]:
    """Return the first and last index of the list starting at ``first``.

    The list runs over items, indented continuation lines and the blank lines
    between them, and stops at the first other non-blank line.
    """
    last = first
    for i in range(first + 1, end):
        line = lines[i]
        if LIST_ITEM_RE.match(line) or (line.strip() and line.startswith((" ", "\t"))):
            last = i
        elif line.strip():
            break
    return first, last


def update_toc(
    text: str,
    level: int = 2,
    max_level: int | None = None,
    toc_titles: Iterable[str] | None = None,
) -> str:
    """Replace the list under the table of contents heading with a fresh one.

    Only the list holding the table of contents entries is replaced; prose
    and other lists in the section are kept. Text without a table of
    contents heading is returned unchanged.
    """
    document = parse_document(text, toc_titles=toc_titles)
    toc_heading = document.toc_heading
    if toc_heading is None:
        logger.info("No table of contents heading found, nothing to update")
        return text

    newline = "\r\n" if "\r\n" in text else "\n"
    lines = text.splitlines()
    start = toc_heading.end_line  # index of the line after the heading
    following = [h.line for h in document.headings if h.line > toc_heading.line]
    end = (following[0] - 1) if following else len(lines)

    generated = build_toc(document, level=level, max_level=max_level).splitlines()

    if document.toc:
        first, last = _list_span(lines, document.toc[0].line - 1, end)
        new_lines = lines[:first] + generated + lines[last + 1 :]
    elif not generated:
        return text
    else:
        new_lines = lines[:start] + [""] + generated + lines[start:]

    result = newline.join(new_lines)
    if text.endswith("\n"):
        result += newline
    return result
