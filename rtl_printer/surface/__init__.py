"""
Drawing surfaces for the printer.

base.DrawingSurface is the interface the layout engine depends on.
skia_surface.SkiaSurface is a paginated raster implementation on Skia and
HarfBuzz; import it from its module so the engine does not require skia.
"""

from .base import DrawingSurface

__all__ = ["DrawingSurface"]
