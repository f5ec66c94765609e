from typing import Callable, Optional, Tuple, Union

from utils.logging import log_message

from .config import DEFAULT_START_X_MARGIN, PrinterConfig
from .pagination import (
    CallbackPageBreakObserver,
    DefaultPageBreakObserver,
    PageBreakController,
    PageBreakObserver,
)
from .surface.base import DrawingSurface
from .text.digits import DigitLocalizer
from .text.line_breaker import break_lines
from .text.line_renderer import LineRenderer
from .text.markup import preprocess, tokenize
from .text.measurement import WordMeasurer
from .text.styles import PLAIN


class RtlRichTextPrinter:
    """
    Lays out and paints inline-styled right-to-left text onto a paginated surface.

    One instance owns the page counter for its surface. Calls are not reentrant:
    do not print concurrently against the same surface.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        config: PrinterConfig,
        on_page_break: Optional[
            Union[Callable[[int], float], PageBreakObserver]
        ] = None,
    ):
        self.surface = surface
        self.config = config

        if on_page_break is None:
            observer: PageBreakObserver = DefaultPageBreakObserver(
                config.margin_top, config.header_height
            )
        elif isinstance(on_page_break, PageBreakObserver):
            observer = on_page_break
        else:
            observer = CallbackPageBreakObserver(on_page_break)

        self.default_start_x = (
            config.default_start_x
            if config.default_start_x is not None
            else surface.page_width - DEFAULT_START_X_MARGIN
        )
        self.measurer = WordMeasurer(
            surface,
            config.font_name,
            DigitLocalizer(config.convert_digits, config.digit_script),
        )
        self.renderer = LineRenderer(surface, self.measurer, config)
        self.pages = PageBreakController(surface, config, observer)

    @property
    def page_number(self) -> int:
        return self.pages.page_number

    def print(
        self,
        text: str,
        start_y: float,
        start_x: Optional[float] = None,
        justify: Optional[bool] = None,
    ) -> float:
        """
        Lays out and paints a block of paragraphs.

        Args:
            text (str): Text with inline markup; newlines and <br> split paragraphs.
            start_y (float): Baseline of the first line.
            start_x (Optional[float]): Right edge of every line; defaults to the
                configured start X.
            justify (Optional[bool]): Overrides the configured justification.

        Returns:
            float: Y position immediately below the last painted line.
        """
        start_x = self.default_start_x if start_x is None else start_x
        should_justify = self.config.justify if justify is None else justify
        max_width = self.config.effective_max_width

        processed = preprocess(text, self.config.mirror_parentheses)
        current_y = start_y

        for paragraph in processed.split("\n"):
            if not paragraph.strip():
                current_y += self.config.line_height
                continue

            words = tokenize(paragraph)
            for line in break_lines(words, self.measurer, max_width, should_justify):
                current_y = self.pages.ensure_room(current_y)
                self.renderer.render(line, start_x, current_y)
                log_message(
                    f"Line of {len(line.words)} words at y={current_y:.1f} (page {self.page_number})",
                    verbose=self.config.verbose,
                )
                current_y += self.config.line_height

        return current_y

    def get_text_width(self, text: str) -> float:
        """Natural width of the widest paragraph, markup-aware."""
        processed = preprocess(text, self.config.mirror_parentheses)
        space_width = self.measurer.space_width()

        widest = 0.0
        for paragraph in processed.split("\n"):
            if not paragraph.strip():
                continue
            words = tokenize(paragraph)
            width = self.measurer.words_width(words, PLAIN)
            width += space_width * max(len(words) - 1, 0)
            widest = max(widest, width)
        return widest

    def get_font(self) -> Tuple[str, str]:
        return self.surface.get_font()

    def set_font(self, name: str, weight: str) -> None:
        self.surface.set_font(name, weight)

    def get_font_size(self) -> float:
        return self.surface.get_font_size()

    def set_font_size(self, size: float) -> None:
        self.surface.set_font_size(size)

    @property
    def page_width(self) -> float:
        return self.surface.page_width

    @property
    def page_height(self) -> float:
        return self.surface.page_height
