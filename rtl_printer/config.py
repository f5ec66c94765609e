from dataclasses import dataclass
from typing import Optional

from utils.exceptions import ValidationError

# Reserved at the printable edge so glyph overhang never crosses the margin
WIDTH_SAFETY_BUFFER = 5.0
PAGE_SAFETY_MARGIN = 2.0
DEFAULT_START_X_MARGIN = 10.0
DECORATION_OVERLAP = 0.3

ALIGNMENTS = ("right", "center", "left")
DIGIT_SCRIPTS = ("persian", "arabic")


@dataclass(frozen=True)
class PrinterConfig:
    """Configuration for laying out and painting rich RTL text."""

    max_width: float
    line_height: float
    font_name: str
    default_start_x: Optional[float] = None  # None = page width minus 10
    align: str = "right"
    justify: bool = True
    margin_top: float = 10.0
    margin_bottom: float = 10.0
    header_height: float = 0.0
    footer_height: float = 0.0
    convert_digits: bool = True
    digit_script: str = "persian"
    underline_offset_ratio: float = 0.18
    strike_offset_ratio: float = 0.10
    mirror_parentheses: bool = False  # Swap ( and ) for surfaces that do not mirror
    decoration_line_width: float = 0.15
    verbose: bool = False

    def __post_init__(self):
        if self.align not in ALIGNMENTS:
            raise ValidationError(
                f"Invalid alignment '{self.align}'. Expected one of: {', '.join(ALIGNMENTS)}"
            )
        if self.digit_script not in DIGIT_SCRIPTS:
            raise ValidationError(
                f"Invalid digit script '{self.digit_script}'. Expected one of: {', '.join(DIGIT_SCRIPTS)}"
            )
        if not self.font_name:
            raise ValidationError("font_name must be a registered font family name.")
        if self.line_height <= 0:
            raise ValidationError(f"line_height must be positive, got {self.line_height}")

    @property
    def effective_max_width(self) -> float:
        return self.max_width - WIDTH_SAFETY_BUFFER
