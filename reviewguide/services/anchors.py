"""Heading anchor derivation compatible with GitHub's Markdown renderer."""

import re

# Inline markup that does not survive into rendered heading text
_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_REF_LINK_RE = re.compile(r"\[([^\]]*)\]\[[^\]]*\]")
_HTML_TAG_RE = re.compile(r"</?[A-Za-z][^>]*>")
_STAR_EMPHASIS_RE = re.compile(r"(\*{1,3}|~~)(?=\S)(.+?)(?<=\S)\1")
# Intraword underscores are literal (snake_case stays intact)
_UNDERSCORE_EMPHASIS_RE = re.compile(r"(?<!\w)(_{1,3})(?=\S)(.+?)(?<=\S)\1(?!\w)")
_DISALLOWED_RE = re.compile(r"[^\w\- ]", re.UNICODE)


def _strip_emphasis(text: str) -> str:
    previous = None
    while previous != text:
        previous = text
        text = _STAR_EMPHASIS_RE.sub(r"\2", text)
        text = _UNDERSCORE_EMPHASIS_RE.sub(r"\2", text)
    return text


def strip_inline_markup(text: str) -> str:
    """Return the visible text of a heading line."""
    text = _IMAGE_RE.sub(r"\1", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _REF_LINK_RE.sub(r"\1", text)

    # Code spans keep their content verbatim
    parts: list[str] = []
    position = 0
    for match in _CODE_SPAN_RE.finditer(text):
        parts.append(_strip_emphasis(_HTML_TAG_RE.sub("", text[position : match.start()])))
        parts.append(match.group(2).strip())
        position = match.end()
    parts.append(_strip_emphasis(_HTML_TAG_RE.sub("", text[position:])))
    return "".join(parts).strip()


def slugify(text: str) -> str:
    """Convert heading text into its base anchor.

    Lowercases, drops punctuation other than hyphens and underscores, and
    turns every space into a hyphen without collapsing runs.

    Args:
        text: Raw heading text, inline markup allowed

    Returns:
        The anchor without the leading ``#``
    """
    visible = strip_inline_markup(text).lower()
    return _DISALLOWED_RE.sub("", visible).replace(" ", "-")


class AnchorRegistry:
    """Hands out unique anchors in document order.

    The first heading with a given slug keeps it, later ones get ``-1``,
    ``-2`` and so on.
    """

    def __init__(self) -> None:
        self._taken: set[str] = set()
        self._counts: dict[str, int] = {}

    def assign(self, text: str) -> str:
        base = slugify(text)
        anchor = base
        count = self._counts.get(base, 0)
        while anchor in self._taken:
            count += 1
            anchor = f"{base}-{count}"
        self._counts[base] = count
        self._taken.add(anchor)
        return anchor

    def __contains__(self, anchor: str) -> bool:
        return anchor in self._taken
