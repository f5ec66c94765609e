"""Shared fixtures for the rtl_printer test suite.

The RecordingSurface gives every character a fixed width (bold wider than
normal, space narrower) and logs each measurement and paint call, so tests can
check layout geometry exactly without real fonts.
"""

from typing import List, Sequence, Tuple

import pytest

from rtl_printer.config import PrinterConfig
from rtl_printer.printer import RtlRichTextPrinter
from rtl_printer.surface.base import DrawingSurface
from rtl_printer.text.styles import ALL_MARKERS
from utils.exceptions import FontError

FONT_NAME = "Vazir"
NORMAL_CHAR_WIDTH = 2.0
BOLD_CHAR_WIDTH = 3.0
SPACE_WIDTH = 1.0


class RecordingSurface(DrawingSurface):
    def __init__(self, page_width: float = 200.0, page_height: float = 300.0):
        self._page_width = page_width
        self._page_height = page_height
        self.fonts = {(FONT_NAME, "normal"), (FONT_NAME, "bold")}
        self.font: Tuple[str, str] = (FONT_NAME, "normal")
        self.font_size = 10.0
        self.draw_color = (0, 0, 0)
        self.line_width = 0.2
        self.line_dash: Sequence[float] = [0]
        self.pages = 1
        self.measured: List[Tuple[str, Tuple[str, str]]] = []
        self.texts: List[dict] = []
        self.lines: List[dict] = []

    @property
    def page_width(self) -> float:
        return self._page_width

    @property
    def page_height(self) -> float:
        return self._page_height

    def _check_no_markers(self, text: str) -> None:
        assert not any(ch in ALL_MARKERS for ch in text), f"marker reached surface: {text!r}"

    def _width(self, text: str) -> float:
        char_width = BOLD_CHAR_WIDTH if self.font[1] == "bold" else NORMAL_CHAR_WIDTH
        return sum(SPACE_WIDTH if ch == " " else char_width for ch in text)

    def measure_text_width(self, text: str) -> float:
        self._check_no_markers(text)
        self.measured.append((text, self.font))
        return self._width(text)

    def paint_text(self, text: str, x: float, y: float, rtl: bool = False) -> None:
        self._check_no_markers(text)
        self.texts.append(
            {
                "text": text,
                "x": x,
                "y": y,
                "rtl": rtl,
                "font": self.font,
                "width": self._width(text),
                "page": self.pages,
            }
        )

    def paint_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.lines.append(
            {
                "x1": x1,
                "y1": y1,
                "x2": x2,
                "y2": y2,
                "color": self.draw_color,
                "width": self.line_width,
                "dash": list(self.line_dash),
            }
        )

    def set_draw_color(self, r: int, g: int, b: int) -> None:
        self.draw_color = (r, g, b)

    def set_line_width(self, width: float) -> None:
        self.line_width = width

    def set_line_dash(self, pattern: Sequence[float], phase: float = 0) -> None:
        self.line_dash = pattern

    def set_font(self, name: str, weight: str) -> None:
        if (name, weight) not in self.fonts:
            raise FontError(f"Font '{name}' with weight '{weight}' is not registered.")
        self.font = (name, weight)

    def get_font(self) -> Tuple[str, str]:
        return self.font

    def set_font_size(self, size: float) -> None:
        self.font_size = size

    def get_font_size(self) -> float:
        return self.font_size

    def add_page(self) -> None:
        self.pages += 1


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def make_printer(surface):
    """Builds a printer on the recording surface with config overrides."""

    def _make(on_page_break=None, **overrides):
        options = {"max_width": 105.0, "line_height": 10.0, "font_name": FONT_NAME}
        options.update(overrides)
        return RtlRichTextPrinter(surface, PrinterConfig(**options), on_page_break=on_page_break)

    return _make
