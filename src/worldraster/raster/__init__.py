"""Pixel-space raster layer for worldraster.

This package provides the storage and drawing collaborator that a Map
delegates to once geometry has been converted to pixel units.

Key Components:
    - RasterProtocol: Interface a Map requires from its raster
    - Raster: Pillow/numpy implementation of RasterProtocol
    - FontSpec: Font description used by text drawing
    - SUPPORTED_MODES: Pixel modes a Raster can hold

Example:
    from worldraster.raster import Raster

    raster = Raster(200, 100, mode="RGB", fill=(255, 255, 255))
    raster.draw_line((0.0, 0.0), (199.0, 99.0), (0, 0, 0), thickness=2)
"""

from worldraster.raster.raster import Raster
from worldraster.raster.types import (
    SUPPORTED_MODES,
    FontSpec,
    IndexConverter,
    PixelMode,
    PixelValue,
    RasterProtocol,
    get_mode,
)

__all__ = [
    "SUPPORTED_MODES",
    "FontSpec",
    "IndexConverter",
    "PixelMode",
    "PixelValue",
    "Raster",
    "RasterProtocol",
    "get_mode",
]
