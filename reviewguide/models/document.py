"""Structural model of a parsed Markdown document."""

import re
from typing import Literal
from urllib.parse import unquote

from pydantic import BaseModel, Field

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


class Heading(BaseModel):
    """A section heading and the anchor a renderer derives from it."""

    level: int = Field(ge=1, le=6)
    text: str
    line: int
    anchor: str
    parent_anchor: str | None = None
    setext: bool = False
    html_anchors: list[str] = Field(default_factory=list)

    @property
    def end_line(self) -> int:
        """Return the last line of the heading, the underline for setext headings."""
        return self.line + 1 if self.setext else self.line


class TocEntry(BaseModel):
    """A single link item of the table of contents."""

    title: str
    target: str
    line: int

    @property
    def anchor(self) -> str | None:
        """Return the in-page fragment this entry points at, if any."""
        if not self.target.startswith("#"):
            return None
        return unquote(self.target[1:])


class CodeFence(BaseModel):
    """A fenced code block.

    ``end_line`` is None when the block is never closed.
    """

    fence_char: Literal["`", "~"]
    fence_length: int
    info: str = ""
    start_line: int
    end_line: int | None = None

    @property
    def language(self) -> str | None:
        """Return the language tag from the info string."""
        words = self.info.split()
        return words[0] if words else None

    @property
    def is_closed(self) -> bool:
        return self.end_line is not None


class Link(BaseModel):
    """An inline or reference-definition link found outside code."""

    text: str
    target: str
    line: int
    in_toc: bool = False

    @property
    def is_internal(self) -> bool:
        return self.target.startswith("#")

    @property
    def is_external(self) -> bool:
        return bool(_SCHEME_RE.match(self.target)) or self.target.startswith("//")

    @property
    def fragment(self) -> str | None:
        """Return the decoded ``#fragment`` part of the target, if present."""
        if "#" not in self.target:
            return None
        return unquote(self.target.split("#", 1)[1])

    @property
    def path(self) -> str:
        """Return the target without its fragment."""
        return self.target.split("#", 1)[0]


class Directive(BaseModel):
    """A suppression comment embedded in the document."""

    action: Literal["disable", "enable", "disable-next-line", "disable-line"]
    rule_ids: list[str] = Field(default_factory=list)
    line: int


class MarkdownDocument(BaseModel):
    """Everything the checker needs to know about one document."""

    path: str
    lines: list[str] = Field(default_factory=list)
    headings: list[Heading] = Field(default_factory=list)
    toc_heading: Heading | None = None
    toc: list[TocEntry] = Field(default_factory=list)
    fences: list[CodeFence] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)
    explicit_anchors: list[str] = Field(default_factory=list)
    directives: list[Directive] = Field(default_factory=list)

    @property
    def has_toc(self) -> bool:
        return self.toc_heading is not None and len(self.toc) > 0

    def is_toc_heading(self, heading: Heading) -> bool:
        return self.toc_heading is not None and heading.line == self.toc_heading.line

    def anchor_set(self) -> set[str]:
        """Return every anchor a renderer would emit for this document."""
        anchors = {heading.anchor for heading in self.headings}
        anchors.update(self.explicit_anchors)
        return anchors

    def headings_at(self, level: int) -> list[Heading]:
        return [heading for heading in self.headings if heading.level == level]
