"""Table of contents rules."""

import difflib
from collections.abc import Iterator

from reviewguide.models.document import MarkdownDocument
from reviewguide.rules.registry import RuleContext, Violation, registry


def suggest_anchor(anchor: str, anchors: set[str]) -> str:
    """Return a ``did you mean`` hint for an unresolved anchor, or ''."""
    lowered = anchor.lower()
    if lowered in anchors:
        return f" (did you mean '#{lowered}'?)"
    close = difflib.get_close_matches(anchor, sorted(anchors), n=1, cutoff=0.75)
    return f" (did you mean '#{close[0]}'?)" if close else ""


@registry.register(
    "RG001",
    "toc-anchor-unresolved",
    "Every table of contents entry links to an anchor that exists in the document.",
    severity="error",
)
def check_toc_anchors(document: MarkdownDocument, context: RuleContext) -> Iterator[Violation]:
    anchors = document.anchor_set()
    for entry in document.toc:
        anchor = entry.anchor
        if anchor is None or anchor in anchors:
            continue
        yield Violation(
            entry.line,
            f"Table of contents entry '{entry.title}' links to '#{anchor}' "
            f"but no heading renders that anchor{suggest_anchor(anchor, anchors)}",
        )


@registry.register(
    "RG005",
    "toc-section-missing",
    "Every section at the table of contents level is listed in the table of contents.",
    severity="warning",
)
def check_toc_complete(document: MarkdownDocument, context: RuleContext) -> Iterator[Violation]:
    if not document.has_toc:
        return
    listed = {entry.anchor for entry in document.toc if entry.anchor is not None}
    for heading in document.headings_at(context.toc_level):
        if document.is_toc_heading(heading) or heading.anchor in listed:
            continue
        if listed.intersection(heading.html_anchors):
            continue
        yield Violation(
            heading.line,
            f"Section '{heading.text}' is not listed in the table of contents",
        )


@registry.register(
    "RG007",
    "toc-order-mismatch",
    "Table of contents entries appear in the same order as the sections they link to.",
    severity="warning",
)
def check_toc_order(document: MarkdownDocument, context: RuleContext) -> Iterator[Violation]:
    heading_lines: dict[str, int] = {}
    for heading in document.headings:
        heading_lines[heading.anchor] = heading.line
        for anchor in heading.html_anchors:
            heading_lines.setdefault(anchor, heading.line)
    last_line = 0
    last_title = None
    for entry in document.toc:
        line = heading_lines.get(entry.anchor) if entry.anchor is not None else None
        if line is None:
            continue
        if line < last_line:
            yield Violation(
                entry.line,
                f"Table of contents entry '{entry.title}' is listed after "
                f"'{last_title}' but its section comes first",
            )
            continue
        last_line = line
        last_title = entry.title
