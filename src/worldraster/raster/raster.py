"""Pillow-backed raster implementation.

This module provides the Raster class, the default pixel-space collaborator
of a Map. Pixels live in a PIL image; drawing goes through PIL.ImageDraw and
elementwise conversion goes through numpy arrays.

Coordinates follow the Pillow convention: (0, 0) is the first pixel of the
first row, x grows along a row and y grows with the row index.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Any

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from worldraster.config import settings
from worldraster.exceptions import InvalidConfigurationError, TransformFailureError
from worldraster.raster.types import (
    FontSpec,
    IndexConverter,
    PixelMode,
    PixelValue,
    RasterProtocol,
    get_mode,
)

logger = logging.getLogger(__name__)

# Fallback when the requested TrueType font cannot be loaded
_FALLBACK_FONTS = ("DejaVuSans.ttf", "Arial.ttf")


class Raster:
    """A pixel grid with pixel-space drawing primitives.

    Usage:
        raster = Raster(640, 480, mode="RGB", fill=(0, 0, 0))
        raster.draw_circle((320.0, 240.0), 50.0, (255, 0, 0), thickness=0)
        array = raster.to_array()

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
        mode: Pillow mode string.
    """

    __slots__ = ("_image",)

    def __init__(
        self,
        width: int,
        height: int,
        mode: str = "L",
        fill: PixelValue | None = None,
    ) -> None:
        """Allocate a raster with every pixel set to fill.

        Args:
            width: Width in pixels (> 0).
            height: Height in pixels (> 0).
            mode: Pillow mode string, one of SUPPORTED_MODES.
            fill: Initial pixel value. Defaults to zero in every band.

        Raises:
            InvalidConfigurationError: If width or height is not positive.
            ValueError: If the mode is not supported.
        """
        if width <= 0 or height <= 0:
            raise InvalidConfigurationError(
                "Raster dimensions must be positive", width=width, height=height
            )
        get_mode(mode)
        color = _ink(fill) if fill is not None else 0
        self._image = Image.new(mode, (width, height), color)

    @classmethod
    def from_image(cls, image: Image.Image) -> Raster:
        """Create a raster holding a copy of a PIL image.

        Raises:
            ValueError: If the image mode is not supported.
        """
        get_mode(image.mode)
        raster = cls.__new__(cls)
        raster._image = image.copy()
        return raster

    @classmethod
    def from_array(cls, array: np.ndarray, mode: str | None = None) -> Raster:
        """Create a raster from a (rows, cols) or (rows, cols, bands) array.

        Args:
            array: Pixel data; rows first.
            mode: Target mode. Inferred from the array when omitted.

        Raises:
            ValueError: If the mode cannot be inferred or does not fit the array.
        """
        pixel_mode = get_mode(mode) if mode else _infer_mode(array)
        expected_ndim = 3 if pixel_mode.is_multiband else 2
        if array.ndim != expected_ndim or (
            pixel_mode.is_multiband and array.shape[2] != pixel_mode.bands
        ):
            raise ValueError(
                f"Array of shape {array.shape} does not fit mode '{pixel_mode.name}'"
            )
        data = np.ascontiguousarray(array, dtype=pixel_mode.dtype)
        raster = cls.__new__(cls)
        raster._image = Image.fromarray(data)
        return raster

    @property
    def width(self) -> int:
        """Return the width in pixels."""
        return self._image.width

    @property
    def height(self) -> int:
        """Return the height in pixels."""
        return self._image.height

    @property
    def mode(self) -> str:
        """Return the Pillow mode string."""
        return self._image.mode

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return self._image.size

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height}, mode={self.mode!r})"

    def new_like(self, width: int, height: int, mode: str | None = None) -> Raster:
        """Create a zero-filled raster, defaulting to this raster's mode."""
        return Raster(width, height, mode=mode or self.mode)

    def to_image(self) -> Image.Image:
        """Return a copy of the pixels as a PIL image."""
        return self._image.copy()

    def to_array(self) -> np.ndarray:
        """Return a copy of the pixels as a numpy array (rows first)."""
        return np.array(self._image)

    def get_pixel(self, col: int, row: int) -> PixelValue:
        """Read one pixel."""
        return self._image.getpixel((col, row))  # type: ignore[return-value]

    def put_pixel(self, col: int, row: int, value: PixelValue) -> None:
        """Write one pixel."""
        self._image.putpixel((col, row), _ink(value))

    # ------------------------------------------------------------------
    # Drawing primitives
    # ------------------------------------------------------------------

    def draw_rectangle(
        self,
        center: tuple[float, float],
        width: float,
        height: float,
        color: PixelValue,
        thickness: int,
    ) -> None:
        """Draw a rectangle centered on a pixel position.

        Args:
            center: (x, y) center in pixels.
            width: Width in pixels.
            height: Height in pixels.
            color: Pixel value to draw with.
            thickness: Outline width; any value <= 0 fills the rectangle.
        """
        cx, cy = center
        x0, x1 = sorted((cx - width / 2, cx + width / 2))
        y0, y1 = sorted((cy - height / 2, cy + height / 2))
        box = (round(x0), round(y0), round(x1), round(y1))
        draw = ImageDraw.Draw(self._image)
        if thickness <= 0:
            draw.rectangle(box, fill=_ink(color))
        else:
            draw.rectangle(box, outline=_ink(color), width=thickness)

    def draw_line(
        self,
        p1: tuple[float, float],
        p2: tuple[float, float],
        color: PixelValue,
        thickness: int,
    ) -> None:
        """Draw a line segment between two pixel positions."""
        draw = ImageDraw.Draw(self._image)
        draw.line([p1, p2], fill=_ink(color), width=max(1, thickness))

    def draw_circle(
        self,
        center: tuple[float, float],
        radius: float,
        color: PixelValue,
        thickness: int,
    ) -> None:
        """Draw a circle; thickness <= 0 fills it."""
        cx, cy = center
        r = abs(radius)
        box = (cx - r, cy - r, cx + r, cy + r)
        draw = ImageDraw.Draw(self._image)
        if thickness <= 0:
            draw.ellipse(box, fill=_ink(color))
        else:
            draw.ellipse(box, outline=_ink(color), width=thickness)

    def draw_polyline(
        self,
        points: Sequence[tuple[float, float]],
        closed: bool,
        color: PixelValue,
        thickness: int,
    ) -> None:
        """Draw connected segments through the points.

        If closed is True the last point is joined back to the first.
        """
        pts = [tuple(p) for p in points]
        if not pts:
            return
        draw = ImageDraw.Draw(self._image)
        if len(pts) == 1:
            draw.point(pts, fill=_ink(color))
            return
        if closed and len(pts) > 2:
            pts.append(pts[0])
        width = max(1, thickness)
        draw.line(pts, fill=_ink(color), width=width, joint="curve" if width > 1 else None)

    def fill_convex_polygon(
        self,
        points: Sequence[tuple[float, float]],
        color: PixelValue,
    ) -> None:
        """Fill the interior of a convex polygon.

        Raises:
            ValueError: If fewer than 3 points are given.
        """
        if len(points) < 3:
            raise ValueError(f"A polygon needs at least 3 points, got {len(points)}")
        draw = ImageDraw.Draw(self._image)
        draw.polygon([tuple(p) for p in points], fill=_ink(color))

    def draw_text(
        self,
        message: str,
        font: FontSpec,
        anchor: tuple[int, int],
        color: PixelValue,
    ) -> None:
        """Draw text with its bottom-left corner at anchor.

        Args:
            message: Text to render.
            font: Font description; resolved with fallback to the default font.
            anchor: Integer (x, y) pixel position of the bottom-left corner.
            color: Pixel value to draw with.
        """
        pil_font = _resolve_font(
            font.name or settings.DEFAULT_FONT,
            font.size or settings.DEFAULT_FONT_SIZE,
            settings.STRICT_FONT_CHECK,
        )
        # Shift up by the text's bottom extent so its bottom edge lands on anchor
        _, _, _, bottom = pil_font.getbbox(message)
        x, y = anchor
        draw = ImageDraw.Draw(self._image)
        draw.text((x, y - bottom), message, fill=_ink(color), font=pil_font)

    # ------------------------------------------------------------------
    # Whole-raster operations
    # ------------------------------------------------------------------

    def copy_into(self, destination: RasterProtocol) -> None:
        """Copy every pixel into another raster.

        Raises:
            InvalidConfigurationError: If dimensions or modes differ.
            TypeError: If destination is not a Raster.
        """
        if not isinstance(destination, Raster):
            raise TypeError(
                f"Cannot copy pixels into {type(destination).__name__}; "
                "destination must be a Raster"
            )
        if destination.size != self.size:
            raise InvalidConfigurationError(
                "Destination raster dimensions do not match",
                source=self.size,
                destination=destination.size,
            )
        if destination.mode != self.mode:
            raise InvalidConfigurationError(
                "Destination raster mode does not match",
                source=self.mode,
                destination=destination.mode,
            )
        destination._image.paste(self._image, (0, 0))

    def elementwise_convert(
        self,
        converter: IndexConverter,
        mode: str | None = None,
        workers: int = 1,
    ) -> Raster:
        """Build a new raster from converter(value, row, col) for every pixel.

        Rows are split into bands; with workers > 1 the bands are converted
        on a thread pool. Each band writes only its own rows of the output.
        The new raster is only returned once every pixel has converted.

        Args:
            converter: Function of (pixel value, row, col) returning the new
                value. Multi-band values are passed as tuples.
            mode: Mode of the new raster. Defaults to this raster's mode.
            workers: Number of worker threads.

        Returns:
            A new Raster with the same dimensions.

        Raises:
            TransformFailureError: If converter raises, or returns a value the
                target mode cannot store.
        """
        target = get_mode(mode or self.mode)
        source = np.asarray(self._image).tolist()
        shape: tuple[int, ...] = (self.height, self.width)
        if target.is_multiband:
            shape = (*shape, target.bands)
        output = np.zeros(shape, dtype=target.dtype)

        bands = _row_bands(self.height, workers, settings.require_band_rows())
        if workers <= 1 or len(bands) == 1:
            for band in bands:
                _convert_band(source, output, band, converter, target)
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [
                    pool.submit(_convert_band, source, output, band, converter, target)
                    for band in bands
                ]
                try:
                    for future in futures:
                        future.result()
                except TransformFailureError:
                    for future in futures:
                        future.cancel()
                    raise

        return Raster.from_array(output, mode=target.name)


def _convert_band(
    source: list[Any],
    output: np.ndarray,
    rows: range,
    converter: IndexConverter,
    target: PixelMode,
) -> None:
    """Convert one band of rows, writing into output."""
    for row in rows:
        source_row = source[row]
        output_row = output[row]
        for col, value in enumerate(source_row):
            if isinstance(value, list):
                value = tuple(value)
            try:
                result = converter(value, row, col)
            except TransformFailureError:
                raise
            except Exception as e:
                raise TransformFailureError(
                    f"Conversion function failed: {e}", row=row, col=col
                ) from e
            try:
                _check_storable(result, target)
                output_row[col] = result
            except (TypeError, ValueError, OverflowError) as e:
                raise TransformFailureError(
                    f"Converted value {result!r} cannot be stored in mode "
                    f"'{target.name}': {e}",
                    row=row,
                    col=col,
                ) from e


def _check_storable(value: Any, target: PixelMode) -> None:
    """Check that value fits one pixel of the target mode without conversion.

    numpy would otherwise truncate floats into integer bands, broadcast
    scalars across every band, or wrap out-of-range integers.

    Raises:
        ValueError: If the value has the wrong shape, type or range.
    """
    if target.is_multiband:
        if not isinstance(value, (tuple, list)) or len(value) != target.bands:
            raise ValueError(f"expected a sequence of {target.bands} band values")
        components = value
    else:
        components = (value,)

    dtype = np.dtype(target.dtype)
    for component in components:
        if np.issubdtype(dtype, np.integer):
            if isinstance(component, numbers.Integral):
                number = int(component)
            elif isinstance(component, numbers.Real) and float(component).is_integer():
                number = int(component)
            else:
                raise ValueError(f"{component!r} is not an integer")
            info = np.iinfo(dtype)
            if not info.min <= number <= info.max:
                raise ValueError(f"{number} is outside [{info.min}, {info.max}]")
        elif not isinstance(component, numbers.Real):
            raise ValueError(f"{component!r} is not a number")
        elif math.isfinite(component) and abs(component) > np.finfo(dtype).max:
            raise ValueError(f"{component!r} overflows {dtype}")


def _row_bands(height: int, workers: int, min_rows: int) -> list[range]:
    """Split [0, height) into contiguous row bands, one or more per worker."""
    if workers <= 1:
        return [range(height)]
    band = max(min_rows, math.ceil(height / workers))
    return [range(start, min(start + band, height)) for start in range(0, height, band)]


def _infer_mode(array: np.ndarray) -> PixelMode:
    """Infer the Pillow mode for a numpy array."""
    if array.ndim == 2:
        if array.dtype == np.uint8 or array.dtype == np.bool_:
            return get_mode("L")
        if np.issubdtype(array.dtype, np.integer):
            return get_mode("I")
        if np.issubdtype(array.dtype, np.floating):
            return get_mode("F")
    if array.ndim == 3 and array.shape[2] in (3, 4):
        return get_mode("RGB" if array.shape[2] == 3 else "RGBA")
    raise ValueError(
        f"Cannot infer a pixel mode for array of shape {array.shape} "
        f"and dtype {array.dtype}"
    )


def _ink(color: PixelValue | Sequence[int]) -> PixelValue:
    """Normalize a color to what Pillow accepts (lists become tuples)."""
    if isinstance(color, list):
        return tuple(color)
    return color


@lru_cache(maxsize=32)
def _resolve_font(
    name: str, size: int, strict: bool
) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a TrueType font, with fallback to Pillow's default font.

    Raises:
        RuntimeError: If strict is True and no TrueType font is found.
    """
    for candidate in (name, *_FALLBACK_FONTS):
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    if strict:
        raise RuntimeError(
            f"No TrueType fonts available ({name}, {', '.join(_FALLBACK_FONTS)}). "
            "Strict font check is enabled. Install system fonts."
        )
    logger.warning(
        "No TrueType fonts available (%s). Using low-resolution default font. "
        "Install fonts for better quality.",
        name,
    )
    return ImageFont.load_default()
