from dataclasses import dataclass, field
from typing import Iterator, List, Sequence

from .measurement import WordMeasurer
from .styles import PLAIN, StyleVector


@dataclass
class Line:
    """Words packed onto one visual line."""

    words: List[str] = field(default_factory=list)
    starting_style: StyleVector = PLAIN  # Style at the line's first character
    width: float = 0.0
    justify: bool = False


def break_lines(
    words: Sequence[str],
    measurer: WordMeasurer,
    max_width: float,
    justify: bool,
    style: StyleVector = PLAIN,
) -> Iterator[Line]:
    """
    Greedily packs a paragraph's words into lines.

    Lines are yielded lazily so the caller can check for page breaks and paint
    each line before the next one is laid out. The paragraph's final line is
    never justified. A first word wider than max_width still closes the empty
    starting line, so the paragraph opens with a blank line.

    Args:
        words (Sequence[str]): Tokenized paragraph.
        measurer (WordMeasurer): Style-aware width source.
        max_width (float): Usable line width, safety buffer already removed.
        justify (bool): Whether closed lines with several words are justified.
        style (StyleVector): Style active at the paragraph start.

    Yields:
        Line: Packed lines in reading order.
    """
    space_width = measurer.space_width()
    line = Line(starting_style=style)

    for word in words:
        space_to_use = space_width if line.words else 0.0
        word_width, next_style = measurer.measure(word, style)

        if line.width + word_width + space_to_use > max_width:
            line.justify = justify and len(line.words) > 1
            yield line
            line = Line(words=[word], starting_style=style, width=word_width)
        else:
            line.words.append(word)
            line.width += word_width + space_to_use
        style = next_style

    if line.words:
        yield line
