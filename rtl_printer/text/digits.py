ASCII_DIGITS = "0123456789"

DIGIT_SETS = {
    "persian": "۰۱۲۳۴۵۶۷۸۹",
    "arabic": "٠١٢٣٤٥٦٧٨٩",
}


class DigitLocalizer:
    """Maps ASCII digits to a script's native digit glyphs."""

    def __init__(self, enabled: bool = True, script: str = "persian"):
        self.enabled = enabled
        self.script = script
        self._table = str.maketrans(ASCII_DIGITS, DIGIT_SETS[script])

    def localize(self, text: str) -> str:
        if not self.enabled:
            return text
        return text.translate(self._table)
