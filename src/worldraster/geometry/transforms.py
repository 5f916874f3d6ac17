"""World <-> pixel coordinate transforms for worldraster.

A Map's world space is an axis-aligned scaling plus translation of its
pixel grid. With resolution (res_x, res_y) = area size / pixel size:

    pixel_x = (world_x - area.left) / res_x
    pixel_y = (world_y - area.bottom) / res_y

and the inverse, used for pixel indices:

    world_x = col * res_x + area.left
    world_y = row * res_y + area.bottom

There is no y flip. Area.bottom maps to pixel row 0, whatever that row
means for the underlying raster.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from worldraster.geometry.primitives import Area, PixelPoint, Resolution, WorldPoint


def resolution_for(area: Area, width: int, height: int) -> Resolution:
    """Compute the resolution of an Area spread over a pixel grid.

    Args:
        area: World-space rectangle.
        width: Pixel width.
        height: Pixel height.

    Returns:
        World units per pixel along each axis.

    Raises:
        ValueError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Pixel dimensions must be positive, got {(width, height)}")
    return Resolution(x=area.width / width, y=area.height / height)


def pixel_dimensions_for(area: Area, resolution: Resolution) -> tuple[int, int]:
    """Compute the pixel grid needed to cover an Area at a resolution.

    Each dimension is rounded to the nearest integer (ties to even).

    Args:
        area: World-space rectangle.
        resolution: Desired world units per pixel.

    Returns:
        (width, height) in pixels. Either may be 0 for very coarse
        resolutions; callers validate.

    Raises:
        ValueError: If the resolution is not finite and strictly positive,
            or so fine that the pixel counts overflow.
    """
    if not resolution.is_valid:
        raise ValueError(
            f"Resolution must be finite and positive, got {resolution.to_tuple()}"
        )
    columns = area.width / resolution.x
    rows = area.height / resolution.y
    if not (math.isfinite(columns) and math.isfinite(rows)):
        raise ValueError(
            f"Resolution {resolution.to_tuple()} is too fine for area "
            f"{area.to_tuple()}"
        )
    return (round(columns), round(rows))


@dataclass(frozen=True)
class CoordinateMapper:
    """Maps between world and pixel coordinates for one Area and pixel grid.

    The resolution is computed once when the mapper is built. Maps build a
    fresh mapper for each operation rather than keeping one around.

    Attributes:
        area: World-space rectangle covered by the grid.
        width: Pixel width of the grid.
        height: Pixel height of the grid.
        resolution: World units per pixel, derived from the fields above.
    """

    area: Area
    width: int
    height: int
    resolution: Resolution

    @classmethod
    def for_grid(cls, area: Area, width: int, height: int) -> CoordinateMapper:
        """Build a mapper for an Area spread over a width x height grid.

        Raises:
            ValueError: If width or height is not positive.
        """
        return cls(
            area=area,
            width=width,
            height=height,
            resolution=resolution_for(area, width, height),
        )

    def map_point(self, point: WorldPoint) -> PixelPoint:
        """Map a world point to pixel space.

        Non-finite inputs give non-finite outputs; nothing is clamped.
        """
        return PixelPoint(
            x=(point.x - self.area.left) / self.resolution.x,
            y=(point.y - self.area.bottom) / self.resolution.y,
        )

    def map_points(self, points: Iterable[WorldPoint]) -> list[PixelPoint]:
        """Map every point in order."""
        return [self.map_point(p) for p in points]

    def scale_x(self, length: float) -> float:
        """Convert a horizontal world length to pixels."""
        return length / self.resolution.x

    def scale_y(self, length: float) -> float:
        """Convert a vertical world length to pixels."""
        return length / self.resolution.y

    def pixel_to_world(self, col: float, row: float) -> WorldPoint:
        """Map a pixel position back to world space.

        Args:
            col: Column (x) in pixels; fractional values are allowed.
            row: Row (y) in pixels; fractional values are allowed.

        Returns:
            The world point whose mapping is (col, row).
        """
        return WorldPoint(
            x=col * self.resolution.x + self.area.left,
            y=row * self.resolution.y + self.area.bottom,
        )
