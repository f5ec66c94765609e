from abc import ABC, abstractmethod
from typing import Sequence, Tuple


class DrawingSurface(ABC):
    """
    Paginated canvas the printer measures against and paints onto.

    The surface owns font metrics and glyph reordering. Its pen state (font,
    size, color, line width, dash) is mutable and shared; callers set what
    they need before each paint call.
    """

    @property
    @abstractmethod
    def page_width(self) -> float:
        ...

    @property
    @abstractmethod
    def page_height(self) -> float:
        ...

    @abstractmethod
    def measure_text_width(self, text: str) -> float:
        """Width of text under the currently selected font and size."""

    @abstractmethod
    def paint_text(self, text: str, x: float, y: float, rtl: bool = False) -> None:
        """
        Paints text with its trailing (right) edge at x on baseline y.

        Args:
            text (str): Literal text, no style markers.
            x (float): Right edge of the painted run.
            y (float): Baseline.
            rtl (bool): Reorder the run as right-to-left before painting.
        """

    @abstractmethod
    def paint_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        ...

    @abstractmethod
    def set_draw_color(self, r: int, g: int, b: int) -> None:
        ...

    @abstractmethod
    def set_line_width(self, width: float) -> None:
        ...

    @abstractmethod
    def set_line_dash(self, pattern: Sequence[float], phase: float = 0) -> None:
        ...

    @abstractmethod
    def set_font(self, name: str, weight: str) -> None:
        """Selects a registered font; weight is "normal" or "bold"."""

    @abstractmethod
    def get_font(self) -> Tuple[str, str]:
        ...

    @abstractmethod
    def set_font_size(self, size: float) -> None:
        ...

    @abstractmethod
    def get_font_size(self) -> float:
        ...

    @abstractmethod
    def add_page(self) -> None:
        """Starts a new page; subsequent paint calls target it."""
