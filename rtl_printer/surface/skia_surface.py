from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import skia
import uharfbuzz as hb
from PIL import Image

from utils.exceptions import FontError, RenderingError
from utils.logging import log_message

from .base import DrawingSurface
from .fonts import find_font_variants, load_font_resources

# A4 in points
A4_WIDTH = 595.28
A4_HEIGHT = 841.89

# HarfBuzz uses 26.6 fixed-point format (64 units per pixel)
HB_26_6_SCALE_FACTOR = 64.0


class SkiaSurface(DrawingSurface):
    """
    Paginated raster surface backed by Skia, shaped with HarfBuzz.

    Geometry is expressed in page units (points by default); each page is
    rasterized at `scale` pixels per unit.
    """

    def __init__(
        self,
        page_width: float = A4_WIDTH,
        page_height: float = A4_HEIGHT,
        scale: float = 2.0,
        font_size: float = 10.0,
        text_color: int = skia.ColorBLACK,
        features: Optional[Dict[str, bool]] = None,
        verbose: bool = False,
    ):
        self._page_width = page_width
        self._page_height = page_height
        self.scale = scale
        self.text_color = text_color
        self.features = features or {}
        self.verbose = verbose

        self._fonts: Dict[Tuple[str, str], str] = {}
        self._font: Tuple[str, str] = ("", "normal")
        self._font_size = font_size
        self._draw_color = skia.ColorBLACK
        self._line_width = 0.2
        self._line_dash: Sequence[float] = [0]
        self._line_dash_phase = 0.0

        self.pages: List[skia.Surface] = []
        self.add_page()

    # --- Geometry ---
    @property
    def page_width(self) -> float:
        return self._page_width

    @property
    def page_height(self) -> float:
        return self._page_height

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self) -> None:
        surface = skia.Surface(
            int(round(self._page_width * self.scale)),
            int(round(self._page_height * self.scale)),
        )
        canvas = surface.getCanvas()
        canvas.clear(skia.ColorWHITE)
        canvas.scale(self.scale, self.scale)
        self.pages.append(surface)
        log_message(f"Started page {len(self.pages)}", verbose=self.verbose)

    @property
    def _canvas(self) -> skia.Canvas:
        return self.pages[-1].getCanvas()

    # --- Fonts ---
    def register_font(self, name: str, weight: str, font_path: str) -> None:
        """Makes a font file selectable as (name, weight); loads it eagerly."""
        load_font_resources(str(font_path))
        self._fonts[(name, weight)] = str(font_path)
        if not self._font[0]:
            self._font = (name, weight)
        log_message(f"Registered font {name}/{weight}: {Path(font_path).name}", verbose=self.verbose)

    def register_font_dir(self, name: str, font_dir: str) -> None:
        """Registers the regular and bold files found in a font directory."""
        variants = find_font_variants(font_dir, verbose=self.verbose)
        for weight in ("normal", "bold"):
            self.register_font(name, weight, str(variants[weight]))
        self._font = (name, "normal")

    def set_font(self, name: str, weight: str) -> None:
        if (name, weight) not in self._fonts:
            raise FontError(f"Font '{name}' with weight '{weight}' is not registered.")
        self._font = (name, weight)

    def get_font(self) -> Tuple[str, str]:
        return self._font

    def set_font_size(self, size: float) -> None:
        self._font_size = size

    def get_font_size(self) -> float:
        return self._font_size

    def _current_resources(self) -> Tuple[skia.Typeface, hb.Face]:
        font_path = self._fonts.get(self._font)
        if font_path is None:
            raise FontError(f"No registered font selected (current: {self._font}).")
        resources = load_font_resources(font_path)
        return resources.typeface, resources.hb_face

    def _shape(
        self, text: str, hb_face: hb.Face, rtl: Optional[bool] = None
    ) -> Tuple[List[hb.GlyphInfo], List[hb.GlyphPosition]]:
        hb_font = hb.Font(hb_face)
        hb_font.ptem = float(self._font_size)
        hb_scale = int(self._font_size * HB_26_6_SCALE_FACTOR)
        hb_font.scale = (hb_scale, hb_scale)

        hb_buffer = hb.Buffer()
        hb_buffer.add_str(text)
        hb_buffer.guess_segment_properties()
        if rtl is not None:
            hb_buffer.direction = "rtl" if rtl else "ltr"
        hb.shape(hb_font, hb_buffer, self.features)
        return hb_buffer.glyph_infos, hb_buffer.glyph_positions

    # --- Text ---
    def measure_text_width(self, text: str) -> float:
        if not text:
            return 0.0
        _, hb_face = self._current_resources()
        _, positions = self._shape(text, hb_face)
        return sum(pos.x_advance for pos in positions) / HB_26_6_SCALE_FACTOR

    def paint_text(self, text: str, x: float, y: float, rtl: bool = False) -> None:
        if not text:
            return
        typeface, hb_face = self._current_resources()
        infos, positions = self._shape(text, hb_face, rtl)
        if not infos:
            log_message(f"No glyphs for segment '{text}'", verbose=self.verbose)
            return

        width = sum(pos.x_advance for pos in positions) / HB_26_6_SCALE_FACTOR
        # Trailing-edge anchor: the run ends at x
        cursor_x = x - width
        glyph_ids = [info.codepoint for info in infos]
        points = []
        for pos in positions:
            points.append(
                skia.Point(
                    cursor_x + pos.x_offset / HB_26_6_SCALE_FACTOR,
                    y - pos.y_offset / HB_26_6_SCALE_FACTOR,
                )
            )
            cursor_x += pos.x_advance / HB_26_6_SCALE_FACTOR

        skia_font = skia.Font(typeface, self._font_size)
        builder = skia.TextBlobBuilder()
        builder.allocRunPos(skia_font, glyph_ids, points)
        text_blob = builder.make()
        if text_blob is None:
            raise RenderingError(f"TextBlob build failed for '{text}'")

        paint = skia.Paint(AntiAlias=True, Color=self.text_color)
        self._canvas.drawTextBlob(text_blob, 0, 0, paint)

    # --- Lines ---
    def set_draw_color(self, r: int, g: int, b: int) -> None:
        self._draw_color = skia.ColorSetRGB(r, g, b)

    def set_line_width(self, width: float) -> None:
        self._line_width = width

    def set_line_dash(self, pattern: Sequence[float], phase: float = 0) -> None:
        self._line_dash = list(pattern)
        self._line_dash_phase = phase

    def paint_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        paint = skia.Paint(
            AntiAlias=True,
            Color=self._draw_color,
            Style=skia.Paint.kStroke_Style,
            StrokeWidth=self._line_width,
        )
        # Skia needs an even number of positive intervals; [0] means solid
        intervals = [v for v in self._line_dash if v > 0]
        if intervals:
            if len(intervals) % 2:
                intervals = intervals * 2
            paint.setPathEffect(skia.DashPathEffect.Make(intervals, self._line_dash_phase))
        self._canvas.drawLine(x1, y1, x2, y2, paint)

    # --- Output ---
    def to_images(self) -> List[Image.Image]:
        """Converts every page to a Pillow image.

        Raises:
            RenderingError: If a page snapshot fails
        """
        images = []
        for index, surface in enumerate(self.pages, start=1):
            skia_image: Optional[skia.Image] = surface.makeImageSnapshot()
            if skia_image is None:
                raise RenderingError(f"Failed to snapshot page {index}")
            skia_image = skia_image.convert(
                alphaType=skia.kUnpremul_AlphaType, colorType=skia.kRGBA_8888_ColorType
            )
            images.append(Image.fromarray(skia_image.toarray()))
        return images

    def save(self, output_path: str) -> List[Path]:
        """
        Writes all pages to disk.

        A .pdf or .tif/.tiff path produces one multi-page file; any other suffix
        writes one file per page named <stem>-<n><suffix>.

        Returns:
            List[Path]: Files written.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        images = self.to_images()
        suffix = path.suffix.lower()

        try:
            if suffix in (".pdf", ".tif", ".tiff"):
                if suffix == ".pdf":
                    images = [img.convert("RGB") for img in images]
                images[0].save(
                    path,
                    save_all=True,
                    append_images=images[1:],
                    resolution=72.0 * self.scale,
                )
                written = [path]
            else:
                written = []
                for index, img in enumerate(images, start=1):
                    page_path = path.with_name(f"{path.stem}-{index}{path.suffix}")
                    img.save(page_path)
                    written.append(page_path)
        except (OSError, ValueError) as e:
            log_message(f"Saving pages failed: {e}", always_print=True)
            raise RenderingError(f"Failed to save pages to {path}") from e

        log_message(f"Saved {len(images)} page(s) to {path}", verbose=self.verbose)
        return written
