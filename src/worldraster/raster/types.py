"""Type definitions for the raster layer.

Contains the pixel-mode table, the font description used for text, and the
protocol every raster collaborator of a Map implements. Everything in this
module works in pixel space: (x, y) means (column, row).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, Self

from pydantic import BaseModel, Field

#: A pixel value: a scalar for single-band modes, a tuple for multi-band ones.
PixelValue = int | float | tuple[int, ...]

#: Elementwise converter in pixel-index space: (value, row, col) -> new value.
IndexConverter = Callable[[Any, int, int], Any]


@dataclass(frozen=True)
class PixelMode:
    """Storage description of a Pillow image mode.

    Attributes:
        name: Pillow mode string (e.g. "L", "RGB").
        dtype: numpy dtype string of a single band.
        bands: Number of bands per pixel.
    """

    name: str
    dtype: str
    bands: int

    @property
    def is_multiband(self) -> bool:
        """Return True if pixel values are tuples."""
        return self.bands > 1


SUPPORTED_MODES: dict[str, PixelMode] = {
    "L": PixelMode("L", "uint8", 1),  # 8-bit grayscale
    "I": PixelMode("I", "int32", 1),  # 32-bit signed integer
    "F": PixelMode("F", "float32", 1),  # 32-bit float
    "RGB": PixelMode("RGB", "uint8", 3),
    "RGBA": PixelMode("RGBA", "uint8", 4),
}


def get_mode(name: str) -> PixelMode:
    """Look up a supported pixel mode.

    Args:
        name: Pillow mode string.

    Returns:
        The matching PixelMode.

    Raises:
        ValueError: If the mode is not supported.
    """
    try:
        return SUPPORTED_MODES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported pixel mode '{name}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_MODES))}"
        ) from None


class FontSpec(BaseModel, frozen=True):
    """Font used to render text.

    Attributes:
        name: TrueType font file name or path (e.g. "DejaVuSans.ttf").
            None uses the configured default font.
        size: Font size in pixels. None uses the configured default size.
    """

    name: str | None = Field(default=None, description="Font file name or path")
    size: int | None = Field(default=None, gt=0, description="Font size in pixels")


class RasterProtocol(Protocol):
    """Protocol defining the pixel-space raster a Map draws into.

    This protocol allows for dependency injection and testing with
    recording implementations. All coordinates are pixel coordinates.
    """

    @property
    def width(self) -> int:
        """Width of the raster in pixels."""
        ...

    @property
    def height(self) -> int:
        """Height of the raster in pixels."""
        ...

    @property
    def mode(self) -> str:
        """Pixel mode name (see SUPPORTED_MODES)."""
        ...

    def new_like(self, width: int, height: int, mode: str | None = None) -> Self:
        """Create a zero-filled raster of the same kind."""
        ...

    def draw_rectangle(
        self,
        center: tuple[float, float],
        width: float,
        height: float,
        color: PixelValue,
        thickness: int,
    ) -> None:
        """Draw a rectangle; thickness <= 0 fills it."""
        ...

    def draw_line(
        self,
        p1: tuple[float, float],
        p2: tuple[float, float],
        color: PixelValue,
        thickness: int,
    ) -> None:
        """Draw a line segment."""
        ...

    def draw_circle(
        self,
        center: tuple[float, float],
        radius: float,
        color: PixelValue,
        thickness: int,
    ) -> None:
        """Draw a circle; thickness <= 0 fills it."""
        ...

    def draw_polyline(
        self,
        points: Sequence[tuple[float, float]],
        closed: bool,
        color: PixelValue,
        thickness: int,
    ) -> None:
        """Draw connected line segments, closing the loop if requested."""
        ...

    def fill_convex_polygon(
        self,
        points: Sequence[tuple[float, float]],
        color: PixelValue,
    ) -> None:
        """Fill the convex polygon defined by the points."""
        ...

    def draw_text(
        self,
        message: str,
        font: FontSpec,
        anchor: tuple[int, int],
        color: PixelValue,
    ) -> None:
        """Draw text whose bottom-left corner sits at anchor."""
        ...

    def copy_into(self, destination: RasterProtocol) -> None:
        """Copy every pixel into a raster of identical dimensions."""
        ...

    def elementwise_convert(
        self,
        converter: IndexConverter,
        mode: str | None = None,
        workers: int = 1,
    ) -> Self:
        """Build a new raster from converter(value, row, col) for every pixel."""
        ...
