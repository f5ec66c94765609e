from abc import ABC, abstractmethod
from typing import Callable

from utils.logging import log_message

from .config import PAGE_SAFETY_MARGIN, PrinterConfig
from .surface.base import DrawingSurface


class PageBreakObserver(ABC):
    """Chooses where printing resumes after the printer starts a new page."""

    @abstractmethod
    def on_page_break(self, page_number: int) -> float:
        """Returns the baseline Y at which printing resumes on the new page."""


class DefaultPageBreakObserver(PageBreakObserver):
    """Resumes just below the reserved header area."""

    def __init__(self, margin_top: float, header_height: float):
        self.margin_top = margin_top
        self.header_height = header_height

    def on_page_break(self, page_number: int) -> float:
        return self.margin_top + self.header_height


class CallbackPageBreakObserver(PageBreakObserver):
    """Adapts a plain (page_number) -> next_y callable."""

    def __init__(self, callback: Callable[[int], float]):
        self.callback = callback

    def on_page_break(self, page_number: int) -> float:
        return self.callback(page_number)


class PageBreakController:
    """
    Starts a new page when the next line would run into the footer area.

    The page counter starts at 1 and counts every page this controller adds.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        config: PrinterConfig,
        observer: PageBreakObserver,
    ):
        self.surface = surface
        self.config = config
        self.observer = observer
        self.page_number = 1

    @property
    def threshold(self) -> float:
        return (
            self.surface.page_height
            - self.config.footer_height
            - self.config.margin_bottom
        )

    def needs_break(self, y: float) -> bool:
        return y + self.config.line_height + PAGE_SAFETY_MARGIN > self.threshold

    def ensure_room(self, y: float) -> float:
        """
        Returns the baseline for the next line, breaking the page if needed.

        Args:
            y (float): Proposed baseline on the current page.

        Returns:
            float: y unchanged, or the observer's resumption point on a new page.
        """
        if not self.needs_break(y):
            return y

        self.surface.add_page()
        self.page_number += 1
        next_y = self.observer.on_page_break(self.page_number)
        log_message(
            f"Page break at y={y:.1f}: page {self.page_number}, resume at y={next_y:.1f}",
            verbose=self.config.verbose,
        )
        return next_y
