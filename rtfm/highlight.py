"""Styled text spans for the page viewer: syntax and search highlighting."""

from __future__ import annotations

from dataclasses import dataclass

YELLOW = "yellow"
GREEN = "green"
MAGENTA = "magenta"
BLUE = "blue"
RED = "red"
WHITE = "white"
BLACK = "black"
DARK_GRAY = "dark_gray"


@dataclass(frozen=True)
class Style:
    """Foreground, background and weight of a piece of text."""

    fg: str | None = None
    bg: str | None = None
    bold: bool = False


@dataclass(frozen=True)
class Span:
    """A run of text drawn in one style."""

    text: str
    style: Style = Style()


_HEADING = Style(fg=YELLOW, bold=True)
_LEADING_OPTION = Style(fg=GREEN, bold=True)
_OPTION = Style(fg=GREEN)
_OPTIONAL_ARG = Style(fg=MAGENTA)
_PLACEHOLDER = Style(fg=BLUE)
_CURRENT_MATCH = Style(fg=WHITE, bg=RED)
_OTHER_MATCH = Style(fg=BLACK, bg=DARK_GRAY)


def _word_style(word: str) -> Style:
    if word.startswith("-"):
        return _OPTION
    if word.startswith("[") and word.endswith("]"):
        return _OPTIONAL_ARG
    if word.startswith("<") and word.endswith(">"):
        return _PLACEHOLDER
    return Style()


def syntax_highlight(line: str) -> list[Span]:
    """Colour headings, options and argument placeholders of a page line.

    Words are re-joined with single spaces; a blank line is kept as is.
    """
    words = line.split()
    if not words:
        return [Span(line)]
    first, *rest = words
    if first.endswith(":"):
        spans = [Span(first, _HEADING)]
    elif first.startswith("-"):
        spans = [Span(first, _LEADING_OPTION)]
    else:
        spans = [Span(first)]
    for word in rest:
        spans.append(Span(" "))
        spans.append(Span(word, _word_style(word)))
    return spans


def search_highlight(line: str, query: str, current: bool) -> list[Span]:
    """Mark every occurrence of ``query`` in ``line``.

    Occurrences are found case-sensitively, left to right and without
    overlap. ``current`` selects the style of the line holding the
    active match.
    """
    if not query:
        return [Span(line)]
    style = _CURRENT_MATCH if current else _OTHER_MATCH
    *pieces, tail = line.split(query)
    spans: list[Span] = []
    for piece in pieces:
        spans.append(Span(piece))
        spans.append(Span(query, style))
    spans.append(Span(tail))
    return spans