import threading
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Optional

import skia
import uharfbuzz as hb

from utils.exceptions import FontError
from utils.logging import log_message

FONT_KEYWORDS = {
    "bold": {"bold", "heavy", "black"},
    "regular": {"regular", "normal", "roman", "medium", "book"},
}


class FontResources(NamedTuple):
    data: bytes
    typeface: skia.Typeface
    hb_face: hb.Face


class FontResourceCache:
    """Bounded, thread-safe map of font path to loaded resources.

    The least recently used path is evicted once max_size entries are held.
    """

    def __init__(self, max_size: int = 16):
        self.max_size = max_size
        self._entries: "OrderedDict[str, FontResources]" = OrderedDict()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, font_path: str) -> bool:
        return font_path in self._entries

    def get_or_load(
        self, font_path: str, loader: Callable[[str], FontResources]
    ) -> FontResources:
        with self._lock:
            if font_path in self._entries:
                self._entries.move_to_end(font_path)
                return self._entries[font_path]
            resources = loader(font_path)
            self._entries[font_path] = resources
            if len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
            return resources

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


_font_cache = FontResourceCache()


def load_font_data(font_path: str) -> bytes:
    try:
        return Path(font_path).read_bytes()
    except OSError as e:
        log_message(f"Cannot read font {font_path}: {e}", always_print=True)
        raise FontError(f"Failed to read font file: {font_path}") from e


def _build_font_resources(font_path: str) -> FontResources:
    data = load_font_data(font_path)
    name = Path(font_path).name

    typeface = skia.Typeface.MakeFromData(skia.Data.MakeWithoutCopy(data))
    if typeface is None:
        log_message(f"Skia rejected font {name}", always_print=True)
        raise FontError(f"Not a usable font for Skia: {font_path}")

    try:
        hb_face = hb.Face(data)
    except Exception as e:
        log_message(f"HarfBuzz rejected font {name}: {e}", always_print=True)
        raise FontError(f"Not a usable font for HarfBuzz: {font_path}") from e

    return FontResources(data, typeface, hb_face)


def load_font_resources(font_path: str) -> FontResources:
    """
    Returns the bytes, Skia typeface and HarfBuzz face for a font file.

    Both engines are built from the same bytes and cached together, so a
    path is either fully usable or not cached at all.

    Raises:
        FontError: If the file is unreadable or either engine rejects it
    """
    return _font_cache.get_or_load(font_path, _build_font_resources)


def _has_keyword(stem_lower: str, style: str) -> bool:
    return any(kw in stem_lower for kw in FONT_KEYWORDS[style])


def find_font_variants(font_dir: str, verbose: bool = False) -> Dict[str, Optional[Path]]:
    """
    Finds regular and bold font files (.ttf, .otf) in a directory based on
    filename keywords.

    Args:
        font_dir (str): Directory containing font files.
        verbose (bool): Whether to print detailed logs.

    Returns:
        Dict[str, Optional[Path]]: Mapping of "normal" and "bold" to font paths,
                                   or None where no file was identified.

    Raises:
        FontError: If the directory is missing or holds no font files.
    """
    font_dir_path = Path(font_dir).resolve()
    if not font_dir_path.is_dir():
        raise FontError(f"Font directory '{font_dir_path}' does not exist or is not a directory.")

    font_files: List[Path] = sorted(
        list(font_dir_path.glob("*.ttf")) + list(font_dir_path.glob("*.otf")),
        key=lambda x: len(x.name),
    )
    if not font_files:
        raise FontError(f"No font files (.ttf, .otf) found in '{font_dir_path}'")

    variants: Dict[str, Optional[Path]] = {"normal": None, "bold": None}

    # Pass 1: bold by keyword
    for font_file in font_files:
        if _has_keyword(font_file.stem.lower(), "bold"):
            variants["bold"] = font_file
            log_message(f"Found Bold: {font_file.name}", verbose=verbose)
            break

    # Pass 2: explicit regular keyword, then any file without a bold keyword
    candidates = [f for f in font_files if f != variants["bold"]]
    regular = next(
        (f for f in candidates if _has_keyword(f.stem.lower(), "regular")), None
    ) or next(
        (f for f in candidates if not _has_keyword(f.stem.lower(), "bold")), None
    )
    if regular is not None:
        variants["normal"] = regular
        log_message(f"Found Regular: {regular.name}", verbose=verbose)

    # Pass 3: fall back to whatever exists so both weights resolve
    if variants["normal"] is None:
        variants["normal"] = variants["bold"] or font_files[0]
        log_message(f"Fallback Regular: {variants['normal'].name}", verbose=verbose)
    if variants["bold"] is None:
        variants["bold"] = variants["normal"]
        log_message(f"Fallback Bold (using regular): {variants['bold'].name}", verbose=verbose)

    return variants
