"""
Text processing and layout modules for the RTL printer.

This subpackage contains modules for:
- Markup preprocessing into style markers and tokenization
- Style state folding and segmentation
- Digit localization
- Style-aware measurement
- Greedy line breaking
- Line rendering with decorations
"""

from .digits import DigitLocalizer
from .line_breaker import Line, break_lines
from .line_renderer import LineRenderer, is_rtl_output
from .markup import (
    apply_style_markers,
    normalize_line_breaks,
    preprocess,
    strip_markers,
    strip_unknown_tags,
    tokenize,
    wrap_ltr_runs,
)
from .measurement import WordMeasurer, preserved_font
from .styles import (
    PLAIN,
    StyleVector,
    TextSegment,
    fold_style,
    lex_word,
    parse_segments,
)

__all__ = [
    "DigitLocalizer",
    "Line",
    "break_lines",
    "LineRenderer",
    "is_rtl_output",
    "apply_style_markers",
    "normalize_line_breaks",
    "preprocess",
    "strip_markers",
    "strip_unknown_tags",
    "tokenize",
    "wrap_ltr_runs",
    "WordMeasurer",
    "preserved_font",
    "PLAIN",
    "StyleVector",
    "TextSegment",
    "fold_style",
    "lex_word",
    "parse_segments",
]
