"""Line-based Markdown scanner.

Extracts the structure the integrity rules look at: headings with their
rendered anchors, the table of contents, fenced code blocks, links, explicit
HTML anchors and suppression directives. It is not a renderer; inline
formatting is only interpreted as far as anchor derivation needs it.
"""

import logging
import re
from collections.abc import Iterable

from reviewguide.models.document import (
    CodeFence,
    Directive,
    Heading,
    Link,
    MarkdownDocument,
    TocEntry,
)
from reviewguide.services.anchors import AnchorRegistry

logger = logging.getLogger(__name__)

DEFAULT_TOC_TITLES = ("Table of Contents", "Contents", "TOC")

FENCE_OPEN_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
ATX_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
ATX_CLOSING_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
SETEXT_UNDERLINE_RE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
LIST_ITEM_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+")
BLOCK_START_RE = re.compile(r"^\s*(?:[-*+]\s|\d+[.)]\s|>|<|\||#)")
CODE_SPAN_RE = re.compile(r"(`+).+?\1")
INLINE_LINK_RE = re.compile(
    r"(!?)\[((?:[^\[\]]|\[[^\[\]]*\])*)\]\(\s*<?([^)\s>]*)>?(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
REFERENCE_DEF_RE = re.compile(r"^ {0,3}\[([^\]]+)\]:\s*<?([^\s>]+)>?")
EXPLICIT_ANCHOR_RE = re.compile(
    r"<[A-Za-z][^>]*?\b(?:id|name)\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE
)
DIRECTIVE_RE = re.compile(
    r"<!--\s*reviewguide-(disable-next-line|disable-line|disable|enable)\b(.*?)-->",
    re.IGNORECASE,
)


def _mask_code_spans(line: str) -> str:
    """Blank out inline code so links inside it are not collected."""
    return CODE_SPAN_RE.sub(lambda m: " " * len(m.group(0)), line)


def _heading_text(raw: str | None) -> str:
    if not raw:
        return ""
    return ATX_CLOSING_RE.sub("", raw).strip()


def _parse_directive_ids(raw: str) -> list[str]:
    return [part for part in re.split(r"[\s,]+", raw.strip()) if part]


def _closes_fence(line: str, fence: CodeFence) -> bool:
    stripped = line.rstrip()
    indent = len(stripped) - len(stripped.lstrip(" "))
    if indent > 3:
        return False
    body = stripped.lstrip(" ")
    return (
        len(body) >= fence.fence_length
        and set(body) == {fence.fence_char}
    )


def _open_fence(line: str, line_number: int) -> CodeFence | None:
    match = FENCE_OPEN_RE.match(line)
    if not match:
        return None
    marker, info = match.group(2), match.group(3).strip()
    if marker[0] == "`" and "`" in info:
        return None
    return CodeFence(
        fence_char=marker[0],
        fence_length=len(marker),
        info=info,
        start_line=line_number,
    )


def _extract_links(line: str, line_number: int, in_toc: bool) -> list[Link]:
    masked = _mask_code_spans(line)
    links = []
    for match in INLINE_LINK_RE.finditer(masked):
        if match.group(1) == "!":
            continue
        links.append(
            Link(
                text=match.group(2),
                target=match.group(3),
                line=line_number,
                in_toc=in_toc,
            )
        )
    ref = REFERENCE_DEF_RE.match(masked)
    if ref:
        links.append(
            Link(text=ref.group(1), target=ref.group(2), line=line_number, in_toc=in_toc)
        )
    return links


class _HeadingTracker:
    """Assigns anchors and parents to headings in document order."""

    def __init__(self) -> None:
        self.registry = AnchorRegistry()
        self.headings: list[Heading] = []
        self._stack: list[Heading] = []

    def add(self, level: int, text: str, line: int, setext: bool = False) -> Heading:
        """Record a heading; ``text`` is the raw heading text, markup included."""
        while self._stack and self._stack[-1].level >= level:
            self._stack.pop()
        heading = Heading(
            level=level,
            text=text,
            line=line,
            anchor=self.registry.assign(text),
            parent_anchor=self._stack[-1].anchor if self._stack else None,
            setext=setext,
            html_anchors=EXPLICIT_ANCHOR_RE.findall(_mask_code_spans(text)),
        )
        self._stack.append(heading)
        self.headings.append(heading)
        return heading


def parse_document(
    text: str,
    path: str = "<string>",
    toc_titles: Iterable[str] | None = None,
) -> MarkdownDocument:
    """Scan Markdown text into a MarkdownDocument.

    Args:
        text: The Markdown source
        path: Path recorded on the document and used in findings
        toc_titles: Heading texts that introduce the table of contents

    Returns:
        The parsed document structure
    """
    titles = {t.strip().lower() for t in (toc_titles or DEFAULT_TOC_TITLES)}
    lines = text.splitlines()

    tracker = _HeadingTracker()
    fences: list[CodeFence] = []
    links: list[Link] = []
    toc: list[TocEntry] = []
    explicit_anchors: list[str] = []
    directives: list[Directive] = []

    open_fence: CodeFence | None = None
    in_html_comment = False
    toc_heading: Heading | None = None
    collecting_toc = False
    # Last line that could be the text of a setext heading
    paragraph_line: tuple[int, str] | None = None

    def on_heading(heading: Heading) -> None:
        nonlocal toc_heading, collecting_toc
        if collecting_toc:
            collecting_toc = False
        elif toc_heading is None and heading.text.lower() in titles:
            toc_heading = heading
            collecting_toc = True

    for number, line in enumerate(lines, start=1):
        if open_fence is not None:
            if _closes_fence(line, open_fence):
                open_fence.end_line = number
                open_fence = None
            continue

        masked = _mask_code_spans(line)
        for match in DIRECTIVE_RE.finditer(masked):
            directives.append(
                Directive(
                    action=match.group(1).lower(),
                    rule_ids=_parse_directive_ids(match.group(2)),
                    line=number,
                )
            )

        if in_html_comment:
            if "-->" in line:
                in_html_comment = False
            paragraph_line = None
            continue
        if masked.rfind("<!--") > masked.rfind("-->"):
            in_html_comment = True

        fence = _open_fence(line, number)
        if fence is not None:
            fences.append(fence)
            open_fence = fence
            paragraph_line = None
            continue

        explicit_anchors.extend(EXPLICIT_ANCHOR_RE.findall(masked))

        setext = SETEXT_UNDERLINE_RE.match(line)
        if setext and paragraph_line is not None:
            level = 1 if setext.group(1).startswith("=") else 2
            heading = tracker.add(
                level, _heading_text(paragraph_line[1]), paragraph_line[0], setext=True
            )
            on_heading(heading)
            paragraph_line = None
            continue

        atx = ATX_HEADING_RE.match(line)
        if atx:
            heading = tracker.add(len(atx.group(1)), _heading_text(atx.group(2)), number)
            on_heading(heading)
            links.extend(_extract_links(line, number, in_toc=False))
            paragraph_line = None
            continue

        is_list_item = bool(LIST_ITEM_RE.match(line))
        line_links = _extract_links(line, number, in_toc=collecting_toc and is_list_item)
        links.extend(line_links)
        if collecting_toc and is_list_item:
            toc.extend(
                TocEntry(title=link.text, target=link.target, line=number)
                for link in line_links
            )

        if not line.strip() or BLOCK_START_RE.match(line) or line.startswith("    "):
            paragraph_line = None
        else:
            paragraph_line = (number, line.strip())

    if open_fence is not None:
        logger.debug(f"{path}: fence opened on line {open_fence.start_line} never closes")

    return MarkdownDocument(
        path=path,
        lines=lines,
        headings=tracker.headings,
        toc_heading=toc_heading,
        toc=toc,
        fences=fences,
        links=links,
        explicit_anchors=explicit_anchors,
        directives=directives,
    )
