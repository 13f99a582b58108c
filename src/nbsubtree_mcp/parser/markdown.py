"""Markdown classification of notebook cells: headline detection and heading depth."""

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

MAX_HEADING_LEVEL = 6

MARKDOWN_KIND = "markdown"

# Leading blockquote / list markers that may precede heading text on its line
_BLOCK_PREFIX = r'[ \t>]*(?:(?:[-*+]|\d{1,9}[.)])[ \t]+[ \t>]*)*'
_ATX_PREFIX = re.compile(r'^(' + _BLOCK_PREFIX + r')(#{1,6})(?=[ \t]|$)')
_SETEXT_UNDERLINE = re.compile(r'^([ \t>]*)([=-]+)([ \t]*)$')
_CONTENT_PREFIX = re.compile(r'^(' + _BLOCK_PREFIX + r')')
# Same line breaks markdown-it normalizes, so token maps index these lines
_LINE_BREAK = re.compile(r'(\r\n|\r|\n)')


@dataclass(frozen=True)
class Cell:
    """A cell read from a notebook."""
    index: int
    kind: str
    source: str

    @property
    def is_markdown(self) -> bool:
        return self.kind == MARKDOWN_KIND


class CellClass(NamedTuple):
    """Classification of a cell for tree building."""
    is_headline: bool
    concluding_depth: int


_md = MarkdownIt("commonmark")


def _heading_tokens(text: str) -> list[tuple[Token, Optional[Token]]]:
    """Return (heading_open, inline) token pairs in document order."""
    tokens = _md.parse(text)
    headings = []
    for i, token in enumerate(tokens):
        if token.type == "heading_open":
            inline = tokens[i + 1] if i + 1 < len(tokens) and tokens[i + 1].type == "inline" else None
            headings.append((token, inline))
    return headings


def _token_level(token: Token) -> int:
    return int(token.tag[1:])


def concluding_markdown_level(text: str, starting_level: int = 0) -> int:
    """
    Determine the concluding heading level of a markdown text.

    Every heading in the text overrides the level seen so far, so the
    result is the level of the last heading, or ``starting_level`` when
    the text has no heading at all.
    """
    level = starting_level
    for token, _ in _heading_tokens(text):
        level = _token_level(token)
    return level


def is_headline_text(text: str) -> bool:
    """Check if markdown text contains at least one heading."""
    return bool(_heading_tokens(text))


def classify_cell(cell: Cell) -> CellClass:
    """Classify a cell. Only markdown cells can be headlines."""
    if not cell.is_markdown:
        return CellClass(False, 0)
    headings = _heading_tokens(cell.source)
    if not headings:
        return CellClass(False, 0)
    return CellClass(True, _token_level(headings[-1][0]))


def heading_title(text: str) -> str:
    """Title for a cell: its first heading, else its first non-empty line."""
    headings = _heading_tokens(text)
    if headings and headings[0][1] is not None:
        return headings[0][1].content.replace('\n', ' ').strip()
    for line in text.split('\n'):
        stripped = line.strip()
        if stripped:
            return stripped if len(stripped) <= 80 else stripped[:80] + '...'
    return ""


def _clamp_level(level: int) -> int:
    return max(1, min(level, MAX_HEADING_LEVEL))


def adjust_heading_levels(markdown: str, change: int) -> str:
    """
    Shift the level of every heading in ``markdown`` by ``change``.

    Levels are clamped to 1..6. ATX headings keep their text and get a new
    ``#`` run. Setext headings keep their underline when the new level is
    1 or 2 and are rewritten as ATX headings otherwise. All other lines are
    left exactly as they were, line breaks included.
    """
    parts = _LINE_BREAK.split(markdown)
    lines = parts[0::2]
    breaks = parts[1::2]

    # Bottom-up so that collapsing a setext heading does not shift later maps
    for token, inline in reversed(_heading_tokens(markdown)):
        if token.map is None:
            continue
        start, end = token.map
        new_level = _clamp_level(_token_level(token) + change)

        if token.markup.startswith('#'):
            lines[start] = _ATX_PREFIX.sub(
                lambda m: m.group(1) + '#' * new_level, lines[start], count=1
            )
            continue

        underline = end - 1
        if new_level <= 2:
            char = '=' if new_level == 1 else '-'
            lines[underline] = _SETEXT_UNDERLINE.sub(
                lambda m: m.group(1) + char * len(m.group(2)) + m.group(3), lines[underline], count=1
            )
        else:
            prefix = _CONTENT_PREFIX.match(lines[start]).group(1)
            title = inline.content.replace('\n', ' ').strip() if inline is not None else ''
            lines[start:end] = [f"{prefix}{'#' * new_level} {title}"]
            del breaks[start:underline]

    out = [lines[0]]
    for line_break, line in zip(breaks, lines[1:]):
        out.append(line_break)
        out.append(line)
    return ''.join(out)
