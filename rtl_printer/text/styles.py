import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import List, NamedTuple, Tuple, Union

# Private-use sentinels delimiting style scopes. Never painted.
BOLD_START = "\uE000"
BOLD_END = "\uE001"
UNDERLINE_START = "\uE004"
UNDERLINE_END = "\uE005"
STRIKE_START = "\uE006"
STRIKE_END = "\uE007"
LTR_START = "\uE008"
LTR_END = "\uE009"

# Style family -> (start marker, end marker)
STYLE_MARKERS = {
    "bold": (BOLD_START, BOLD_END),
    "underline": (UNDERLINE_START, UNDERLINE_END),
    "strike": (STRIKE_START, STRIKE_END),
    "forced_ltr": (LTR_START, LTR_END),
}

_START_KINDS = {start: kind for kind, (start, _) in STYLE_MARKERS.items()}
_END_KINDS = {end: kind for kind, (_, end) in STYLE_MARKERS.items()}
ALL_MARKERS = "".join(_START_KINDS) + "".join(_END_KINDS)
MARKER_SPLIT_PATTERN = re.compile(f"([{ALL_MARKERS}])")


@dataclass(frozen=True)
class StyleVector:
    """Inline style state active at a point in the marker stream."""

    bold: bool = False
    underline: bool = False
    strike: bool = False
    forced_ltr: bool = False


PLAIN = StyleVector()


class Literal(NamedTuple):
    text: str


class StyleStart(NamedTuple):
    kind: str


class StyleEnd(NamedTuple):
    kind: str


Token = Union[Literal, StyleStart, StyleEnd]


class TextSegment(NamedTuple):
    """A maximal run of literal text painted with one style."""

    text: str
    style: StyleVector


def fold_style(style: StyleVector, token: Token) -> StyleVector:
    """Applies one marker token to a style vector and returns the new vector.

    START sets the family flag and END clears it; there is no depth counting.
    Literal tokens leave the vector unchanged.
    """
    if isinstance(token, StyleStart):
        return replace(style, **{token.kind: True})
    if isinstance(token, StyleEnd):
        return replace(style, **{token.kind: False})
    return style


@lru_cache(maxsize=4096)
def lex_word(word: str) -> Tuple[Token, ...]:
    """Splits a marker-laden word into literal and marker tokens."""
    tokens: List[Token] = []
    for part in MARKER_SPLIT_PATTERN.split(word):
        if not part:
            continue
        if part in _START_KINDS:
            tokens.append(StyleStart(_START_KINDS[part]))
        elif part in _END_KINDS:
            tokens.append(StyleEnd(_END_KINDS[part]))
        else:
            tokens.append(Literal(part))
    return tuple(tokens)


def parse_segments(
    word: str, style: StyleVector
) -> Tuple[List[TextSegment], StyleVector]:
    """
    Carves a word into styled text segments.

    Args:
        word (str): Word text, possibly containing style markers.
        style (StyleVector): Style active before the word's first character.

    Returns:
        Tuple[List[TextSegment], StyleVector]: Segments in reading order and the
            style that carries into the next word.
    """
    segments: List[TextSegment] = []
    for token in lex_word(word):
        if isinstance(token, Literal):
            segments.append(TextSegment(token.text, style))
        else:
            style = fold_style(style, token)
    return segments, style
