"""Internal link rules."""

import logging
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path
from urllib.parse import unquote

from reviewguide.models.document import MarkdownDocument
from reviewguide.rules.registry import RuleContext, Violation, registry
from reviewguide.rules.toc import suggest_anchor
from reviewguide.services.parser import parse_document
from reviewguide.utils.filters import is_markdown_file

logger = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def _anchors_of(path: Path, mtime_ns: int) -> frozenset[str] | None:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read link target {path}: {e}")
        return None
    return frozenset(parse_document(text, path=str(path)).anchor_set())


def anchors_in_file(path: Path) -> frozenset[str] | None:
    """Return the anchors of another Markdown file, cached per modification time."""
    return _anchors_of(path.resolve(), path.stat().st_mtime_ns)


@registry.register(
    "RG004",
    "internal-link-broken",
    "Every in-page link resolves to an anchor, and every relative link to an existing file.",
    severity="error",
)
def check_internal_links(document: MarkdownDocument, context: RuleContext) -> Iterator[Violation]:
    anchors = document.anchor_set()
    for link in document.links:
        if link.in_toc or link.is_external or not link.target:
            continue

        if link.is_internal:
            fragment = link.fragment or ""
            if fragment and fragment not in anchors:
                yield Violation(
                    link.line,
                    f"Link '{link.text}' points to '#{fragment}' which does not exist"
                    f"{suggest_anchor(fragment, anchors)}",
                )
            continue

        # Root-relative links depend on the hosting site
        if context.base_dir is None or link.path.startswith("/"):
            continue

        relative = unquote(link.path.split("?", 1)[0])
        target = context.base_dir / relative
        if not target.exists():
            yield Violation(link.line, f"Link '{link.text}' points to missing file '{relative}'")
            continue

        fragment = link.fragment
        if fragment and target.is_file() and is_markdown_file(str(target)):
            target_anchors = anchors_in_file(target)
            if target_anchors is not None and fragment not in target_anchors:
                yield Violation(
                    link.line,
                    f"Link '{link.text}' points to '#{fragment}' which does not exist "
                    f"in '{relative}'",
                )
