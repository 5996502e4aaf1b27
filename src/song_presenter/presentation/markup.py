"""Markup-aware helpers for translation text.

Translations arrive as pre-formatted text that may mix literal line
breaks with inline HTML (``<br>``, ``<i>``, ``<span ...>``). Line counting
works on the stripped text; truncation works on a token stream so that
tags are never cut in half and the original markup is kept.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List

from bs4 import BeautifulSoup

# Whole tags, HTML comments, or a literal line break
_TOKEN_RE = re.compile(r"</?[a-zA-Z][^>]*>|<!--.*?-->|\n", re.DOTALL)
_BR_RE = re.compile(r"<br\b[^>]*>", re.IGNORECASE)
_TAG_NAME_RE = re.compile(r"<(/?)([a-zA-Z][\w-]*)")

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)


class TokenKind(Enum):
    TEXT = auto()
    BREAK = auto()
    TAG = auto()


@dataclass(frozen=True)
class MarkupToken:
    """A run of text, a line break marker, or a non-break tag.

    Attributes:
        kind: Token kind
        text: Original source text of the token
    """

    kind: TokenKind
    text: str


def tokenize(text: str) -> Iterator[MarkupToken]:
    """Split markup into alternating text runs, break markers and tags.

    Args:
        text: Text that may contain inline HTML

    Yields:
        Tokens in source order; concatenating their text gives back the input
    """
    cursor = 0
    for match in _TOKEN_RE.finditer(text):
        if match.start() > cursor:
            yield MarkupToken(TokenKind.TEXT, text[cursor : match.start()])

        token = match.group(0)
        if token == "\n" or _BR_RE.fullmatch(token):
            yield MarkupToken(TokenKind.BREAK, token)
        else:
            yield MarkupToken(TokenKind.TAG, token)
        cursor = match.end()

    if cursor < len(text):
        yield MarkupToken(TokenKind.TEXT, text[cursor:])


def strip_markup(text: str) -> str:
    """Remove markup, turning ``<br>`` tags into line breaks.

    Args:
        text: Text that may contain inline HTML

    Returns:
        Plain text with entities decoded
    """
    if not text:
        return ""

    soup = BeautifulSoup(text, "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    return soup.get_text()


def count_lines(text: str) -> int:
    """Count the lines of markup text once tags are stripped."""
    if not text:
        return 0
    return len(strip_markup(text).split("\n"))


def truncate_lines(text: str, max_lines: int) -> str:
    """Keep the first max_lines lines of markup text.

    Lines are delimited by literal line breaks and ``<br>`` tags. Text and
    tags are copied verbatim up to the cut; inline tags left open by the
    cut are closed so the result stays well formed.

    Args:
        text: Translation text that may contain inline HTML
        max_lines: Maximum number of lines to keep

    Returns:
        The original text when it fits, otherwise its first max_lines lines
    """
    if not text or count_lines(text) <= max_lines:
        return text

    pieces: List[str] = []
    open_tags: List[str] = []
    breaks = 0

    for token in tokenize(text):
        if token.kind is TokenKind.BREAK:
            breaks += 1
            if breaks >= max_lines:
                break
        elif token.kind is TokenKind.TAG:
            _track_tag(open_tags, token.text)
        pieces.append(token.text)

    pieces.extend(f"</{name}>" for name in reversed(open_tags))
    return "".join(pieces)


def _track_tag(open_tags: List[str], tag: str) -> None:
    match = _TAG_NAME_RE.match(tag)
    if not match:
        return

    closing, name = match.group(1) == "/", match.group(2).lower()
    if name in VOID_ELEMENTS or tag.rstrip(">").rstrip().endswith("/"):
        return

    if not closing:
        open_tags.append(name)
    elif name in open_tags:
        # Close the innermost matching tag
        last = len(open_tags) - 1 - open_tags[::-1].index(name)
        del open_tags[last]
