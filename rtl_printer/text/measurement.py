from contextlib import contextmanager
from typing import Iterable, Iterator, Tuple

from ..surface.base import DrawingSurface
from .digits import DigitLocalizer
from .markup import SPACE_CHAR
from .styles import StyleVector, TextSegment, parse_segments


@contextmanager
def preserved_font(surface: DrawingSurface) -> Iterator[None]:
    """Restores the surface's current font on exit, even if a query raises."""
    font_name, font_weight = surface.get_font()
    try:
        yield
    finally:
        surface.set_font(font_name, font_weight)


class WordMeasurer:
    """
    Measures marker-laden words segment by segment.

    printable_text() is the single place where a segment's text is transformed
    before reaching the surface; the renderer paints exactly what it returns,
    so measured and painted widths cannot diverge.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        font_name: str,
        digit_localizer: DigitLocalizer,
    ):
        self.surface = surface
        self.font_name = font_name
        self.digit_localizer = digit_localizer

    @staticmethod
    def font_weight(segment: TextSegment) -> str:
        return "bold" if segment.style.bold else "normal"

    def printable_text(self, segment: TextSegment) -> str:
        if segment.style.forced_ltr:
            return segment.text
        return self.digit_localizer.localize(segment.text)

    def segment_width(self, segment: TextSegment) -> float:
        """Width of a segment under its own weight. Caller owns font restore."""
        self.surface.set_font(self.font_name, self.font_weight(segment))
        return self.surface.measure_text_width(self.printable_text(segment))

    def measure(self, word: str, style: StyleVector) -> Tuple[float, StyleVector]:
        """
        Returns the painted width of a word and the style carried past it.

        Args:
            word (str): Word text, possibly containing style markers.
            style (StyleVector): Style active before the word.

        Returns:
            Tuple[float, StyleVector]: (width, next_style)
        """
        segments, next_style = parse_segments(word, style)
        width = 0.0
        with preserved_font(self.surface):
            for segment in segments:
                width += self.segment_width(segment)
        return width, next_style

    def words_width(self, words: Iterable[str], style: StyleVector) -> float:
        total = 0.0
        for word in words:
            width, style = self.measure(word, style)
            total += width
        return total

    def space_width(self) -> float:
        return self.surface.measure_text_width(SPACE_CHAR)
