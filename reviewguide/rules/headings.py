"""Heading structure rules."""

from collections.abc import Iterator

from reviewguide.models.document import Heading, MarkdownDocument
from reviewguide.rules.registry import RuleContext, Violation, registry
from reviewguide.services.anchors import slugify


@registry.register(
    "RG003",
    "duplicate-heading",
    "No two headings at the same level render the same base anchor.",
    severity="error",
)
def check_duplicate_headings(
    document: MarkdownDocument, context: RuleContext
) -> Iterator[Violation]:
    seen: dict[tuple[int, str], Heading] = {}
    for heading in document.headings:
        key = (heading.level, slugify(heading.text))
        first = seen.get(key)
        if first is None:
            seen[key] = heading
            continue
        yield Violation(
            heading.line,
            f"Heading '{heading.text}' duplicates the level {heading.level} heading "
            f"on line {first.line}; it renders as '#{heading.anchor}' instead of "
            f"'#{first.anchor}'",
        )


@registry.register(
    "RG008",
    "heading-level-skipped",
    "Heading levels increase one step at a time.",
    severity="info",
)
def check_heading_increments(
    document: MarkdownDocument, context: RuleContext
) -> Iterator[Violation]:
    previous: Heading | None = None
    for heading in document.headings:
        if previous is not None and heading.level > previous.level + 1:
            yield Violation(
                heading.line,
                f"Heading '{heading.text}' jumps from level {previous.level} "
                f"to level {heading.level}",
            )
        previous = heading
