import re
from typing import Dict, List

from .styles import ALL_MARKERS, LTR_END, LTR_START, STYLE_MARKERS

# Supported inline tag names -> style family
TAG_FAMILIES = {
    "b": "bold",
    "strong": "bold",
    "u": "underline",
    "ins": "underline",
    "s": "strike",
    "strike": "strike",
    "del": "strike",
    "ltr": "forced_ltr",
}

LINE_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)
STYLE_TAG_PATTERN = re.compile(
    r"<(/?)(" + "|".join(sorted(TAG_FAMILIES, key=len, reverse=True)) + r")>",
    re.IGNORECASE,
)
# Latin letters plus trailing digits, punctuation and whitespace
LTR_RUN_PATTERN = re.compile(r"[A-Za-z]+[A-Za-z0-9\s.,:;?!'\"()\[\]{}&*-]*")
ANY_TAG_PATTERN = re.compile(r"<[^>]+>")
MARKER_PATTERN = re.compile(f"[{ALL_MARKERS}]")

_PARENTHESIS_SWAP = str.maketrans({"(": ")", ")": "("})
SPACE_CHAR = " "


def normalize_line_breaks(text: str) -> str:
    """Converts <br>, <br/> and <br /> into newlines."""
    return LINE_BREAK_PATTERN.sub("\n", text)


def _apply_markers_to_line(line: str) -> str:
    pieces: List[str] = []
    open_tags: Dict[str, List[int]] = {}
    last_end = 0

    for match in STYLE_TAG_PATTERN.finditer(line):
        start, end = match.span()
        pieces.append(line[last_end:start])
        pieces.append(match.group(0))
        last_end = end

        name = match.group(2).lower()
        if not match.group(1):
            open_tags.setdefault(name, []).append(len(pieces) - 1)
            continue

        # Closing tag: pair with the earliest unmatched opener of the same name
        openers = open_tags.get(name)
        if openers:
            start_marker, end_marker = STYLE_MARKERS[TAG_FAMILIES[name]]
            pieces[openers.pop(0)] = start_marker
            pieces[-1] = end_marker

    pieces.append(line[last_end:])
    return "".join(pieces)


def apply_style_markers(text: str) -> str:
    """
    Replaces matched inline style tags with START/END marker pairs.

    Tags pair only with a closing tag of the identical name on the same line;
    each closing tag takes the leftmost opener still unpaired, so in
    "<b>a<b>c</b>" the outer tag wins and the inner one is left over.
    Unmatched tags are left in place for strip_unknown_tags().

    Args:
        text (str): Text containing inline markup, line breaks already normalized.

    Returns:
        str: Text with style tags replaced by markers.
    """
    return "\n".join(_apply_markers_to_line(line) for line in text.split("\n"))


def wrap_ltr_runs(text: str) -> str:
    """
    Wraps runs of Latin text in forced-LTR markers.

    A run that already contains an LTR marker is left untouched so explicitly
    marked content is not wrapped twice.
    """

    def _wrap(match: re.Match) -> str:
        run = match.group(0)
        if LTR_START in run or LTR_END in run:
            return run
        return f"{LTR_START}{run}{LTR_END}"

    return LTR_RUN_PATTERN.sub(_wrap, text)


def strip_unknown_tags(text: str) -> str:
    return ANY_TAG_PATTERN.sub("", text)


def strip_markers(text: str) -> str:
    """Removes every style marker, leaving only literal text."""
    return MARKER_PATTERN.sub("", text)


def mirror_parentheses(text: str) -> str:
    return text.translate(_PARENTHESIS_SWAP)


def preprocess(text: str, mirror_parens: bool = False) -> str:
    """
    Converts inline markup into the marker stream consumed by layout.

    Args:
        text (str): Raw text with inline markup.
        mirror_parens (bool): Swap '(' and ')' for surfaces that do not mirror
            brackets in right-to-left runs.

    Returns:
        str: Marker-laden text with newlines separating paragraphs.
    """
    processed = normalize_line_breaks(text)
    processed = apply_style_markers(processed)
    processed = wrap_ltr_runs(processed)
    processed = strip_unknown_tags(processed)
    if mirror_parens:
        processed = mirror_parentheses(processed)
    return processed


def tokenize(paragraph: str) -> List[str]:
    """Splits a paragraph on spaces; markers stay attached to adjoining text."""
    return [word for word in paragraph.split(SPACE_CHAR) if word]
