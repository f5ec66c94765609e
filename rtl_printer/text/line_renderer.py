import re
from typing import List, Optional, Tuple

from utils.logging import log_message

from ..config import DECORATION_OVERLAP, PrinterConfig
from ..surface.base import DrawingSurface
from .line_breaker import Line
from .measurement import WordMeasurer, preserved_font
from .styles import StyleVector, TextSegment, parse_segments

RTL_CHAR_PATTERN = re.compile(r"[\u0600-\u06FF]")


def is_rtl_output(segment: TextSegment) -> bool:
    """Whether the surface should reorder this segment as a right-to-left run."""
    return not segment.style.forced_ltr and bool(RTL_CHAR_PATTERN.search(segment.text))


class LineRenderer:
    """
    Paints finished lines right-to-left, with decorations.

    Coordinates follow a right-anchored model: start_x is the line's right edge
    and the cursor moves left as words and gaps are painted.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        measurer: WordMeasurer,
        config: PrinterConfig,
    ):
        self.surface = surface
        self.measurer = measurer
        self.config = config
        self.max_width = config.effective_max_width

    def render(self, line: Line, start_x: float, y: float) -> None:
        if line.justify and self.config.align == "right":
            self._render_justified(line, start_x, y)
        else:
            self._render_regular(line, start_x, y)

    def _decoration_offsets(self) -> Tuple[float, float]:
        font_size = self.surface.get_font_size()
        return (
            font_size * self.config.underline_offset_ratio,
            font_size * self.config.strike_offset_ratio,
        )

    def _prepare_decoration_pen(self) -> None:
        self.surface.set_line_dash([0], 0)
        self.surface.set_draw_color(0, 0, 0)
        self.surface.set_line_width(self.config.decoration_line_width)

    def _draw_gap_decoration(
        self, style: StyleVector, right_x: float, gap_width: float, y: float
    ) -> None:
        """Continues underline/strike across an inter-word gap."""
        if not (style.underline or style.strike):
            return
        underline_offset, strike_offset = self._decoration_offsets()
        left_x = right_x - gap_width
        self._prepare_decoration_pen()
        if style.underline:
            self.surface.paint_line(right_x, y + underline_offset, left_x, y + underline_offset)
        if style.strike:
            self.surface.paint_line(right_x, y - strike_offset, left_x, y - strike_offset)

    def _render_words(
        self, line: Line, start_x: float, y: float, gap_width: float
    ) -> float:
        current_x = start_x
        style = line.starting_style
        last_index = len(line.words) - 1
        for i, word in enumerate(line.words):
            current_x, style = self.render_word(word, current_x, y, style)
            if i < last_index:
                self._draw_gap_decoration(style, current_x, gap_width, y)
                current_x -= gap_width
        return current_x

    def _render_justified(self, line: Line, start_x: float, y: float) -> None:
        gaps = len(line.words) - 1
        if gaps <= 0:
            self._render_regular(line, start_x, y)
            return

        total_words_width = self.measurer.words_width(line.words, line.starting_style)
        space_width = self.measurer.space_width()
        # Unclamped: an overfull line gets negative extra space and tighter gaps
        extra_space_per_gap = (
            self.max_width - total_words_width - space_width * gaps
        ) / gaps
        log_message(
            f"Justify {len(line.words)} words, extra/gap={extra_space_per_gap:.2f}",
            verbose=self.config.verbose,
        )
        self._render_words(line, start_x, y, space_width + extra_space_per_gap)

    def _render_regular(self, line: Line, start_x: float, y: float) -> None:
        space_width = self.measurer.space_width()
        alignment_offset = 0.0

        if self.config.align != "right":
            line_length = (
                self.measurer.words_width(line.words, line.starting_style)
                + (len(line.words) - 1) * space_width
            )
            remaining_width = self.max_width - line_length
            if self.config.align == "left":
                # Right-anchored model: shifting by the full slack puts the
                # line's visual left edge on the margin
                alignment_offset = remaining_width
            elif self.config.align == "center":
                alignment_offset = remaining_width / 2

        self._render_words(line, start_x - alignment_offset, y, space_width)

    def render_word(
        self, word: str, x: float, y: float, style: StyleVector
    ) -> Tuple[float, StyleVector]:
        """
        Paints one word's segments right-to-left starting at its right edge.

        Args:
            word (str): Word text, possibly containing style markers.
            x (float): X coordinate of the word's right edge.
            y (float): Baseline Y.
            style (StyleVector): Style active before the word.

        Returns:
            Tuple[float, StyleVector]: The word's left edge and the style carried
                past it.
        """
        segments, next_style = parse_segments(word, style)
        current_x = x

        for i, segment in enumerate(segments):
            with preserved_font(self.surface):
                segment_width = self.measurer.segment_width(segment)
                self.surface.paint_text(
                    self.measurer.printable_text(segment),
                    current_x,
                    y,
                    rtl=is_rtl_output(segment),
                )
                prev_segment = segments[i - 1] if i > 0 else None
                next_segment = segments[i + 1] if i < len(segments) - 1 else None
                self._draw_segment_decoration(
                    segment, prev_segment, next_segment, current_x, segment_width, y
                )
            current_x -= segment_width

        self.surface.set_font(self.config.font_name, "normal")
        return current_x, next_style

    def _draw_segment_decoration(
        self,
        segment: TextSegment,
        prev_segment: Optional[TextSegment],
        next_segment: Optional[TextSegment],
        right_x: float,
        width: float,
        y: float,
    ) -> None:
        style = segment.style
        if not (style.underline or style.strike):
            return

        underline_offset, strike_offset = self._decoration_offsets()
        self._prepare_decoration_pen()

        lines: List[Tuple[str, float]] = []
        if style.underline:
            lines.append(("underline", y + underline_offset))
        if style.strike:
            lines.append(("strike", y - strike_offset))

        for decoration, line_y in lines:
            start = right_x
            end = right_x - width
            # Overlap into neighbours carrying the same decoration
            if prev_segment is not None and getattr(prev_segment.style, decoration):
                start += DECORATION_OVERLAP
            if next_segment is not None and getattr(next_segment.style, decoration):
                end -= DECORATION_OVERLAP
            self.surface.paint_line(start, line_y, end, line_y)
