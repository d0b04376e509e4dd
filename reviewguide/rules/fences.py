"""Fenced code block rules."""

from collections.abc import Iterator

from reviewguide.models.document import MarkdownDocument
from reviewguide.rules.registry import RuleContext, Violation, registry


@registry.register(
    "RG002",
    "fence-unbalanced",
    "Every opening code fence has a matching closing fence.",
    severity="error",
)
def check_fences_closed(document: MarkdownDocument, context: RuleContext) -> Iterator[Violation]:
    for fence in document.fences:
        if fence.is_closed:
            continue
        marker = fence.fence_char * fence.fence_length
        yield Violation(
            fence.start_line,
            f"Code fence opened with {marker} is never closed; "
            "the rest of the document renders as code",
        )


@registry.register(
    "RG006",
    "fence-language-missing",
    "Every fenced code block declares a language tag.",
    severity="warning",
)
def check_fence_language(document: MarkdownDocument, context: RuleContext) -> Iterator[Violation]:
    for fence in document.fences:
        if fence.language is None:
            yield Violation(fence.start_line, "Code fence has no language tag")
