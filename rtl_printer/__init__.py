"""
RTL Rich Text Printer

Lays out and paints inline-styled, bidirectional text (bold, underline,
strike-through, forced-LTR runs) onto a paginated drawing surface, with
word wrapping, justification and page-break coordination for right-to-left
typesetting.
"""

from .config import PrinterConfig
from .pagination import (
    CallbackPageBreakObserver,
    DefaultPageBreakObserver,
    PageBreakController,
    PageBreakObserver,
)
from .printer import RtlRichTextPrinter
from .surface.base import DrawingSurface

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
__license__ = "Apache-2.0"
__description__ = "Rich-text RTL layout and rendering onto paginated surfaces"
__all__ = [
    "RtlRichTextPrinter",
    "PrinterConfig",
    "DrawingSurface",
    "PageBreakObserver",
    "DefaultPageBreakObserver",
    "CallbackPageBreakObserver",
    "PageBreakController",
]
