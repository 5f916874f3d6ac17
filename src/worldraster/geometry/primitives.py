"""Geometry primitives for worldraster.

This module provides immutable Pydantic models for points, areas and
resolutions. Two coordinate spaces exist:

- World space: continuous coordinates defined by a Map's Area.
- Pixel space: positions in the raster's storage grid, in pixel units.

Both use the same (x, y) float pair; the model type records which space a
value belongs to. Neither model flips the y axis.
"""

from __future__ import annotations

import math
from typing import Any, Self

from pydantic import BaseModel, Field, model_validator


class _Coordinate(BaseModel, frozen=True):
    """Shared (x, y) pair behaviour for WorldPoint and PixelPoint."""

    x: float
    y: float

    @model_validator(mode="before")
    @classmethod
    def _accept_pairs(cls, data: Any) -> Any:
        """Allow points to be given as (x, y) tuples or lists."""
        if isinstance(data, (tuple, list)):
            if len(data) != 2:
                raise ValueError(f"Expected an (x, y) pair, got {len(data)} values")
            return {"x": data[0], "y": data[1]}
        return data

    @property
    def is_finite(self) -> bool:
        """Return True if both components are finite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to (x, y) tuple."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, coord: tuple[float, float]) -> Self:
        """Create a point from an (x, y) tuple."""
        return cls(x=coord[0], y=coord[1])


class WorldPoint(_Coordinate, frozen=True):
    """A 2D point in world coordinates.

    Attributes:
        x: Horizontal world position.
        y: Vertical world position.
    """


class PixelPoint(_Coordinate, frozen=True):
    """A 2D point in pixel coordinates.

    Values are fractional; rasterizers decide how to snap them.

    Attributes:
        x: Column position in pixels.
        y: Row position in pixels.
    """

    def rounded(self) -> tuple[int, int]:
        """Round to the nearest integer pixel position."""
        return (round(self.x), round(self.y))


class Resolution(BaseModel, frozen=True):
    """World units per pixel along each axis.

    A Map never stores one of these; it is derived from the Area and the
    pixel dimensions on every access.

    Attributes:
        x: World units covered by one pixel column.
        y: World units covered by one pixel row.
    """

    x: float
    y: float

    @property
    def is_uniform(self) -> bool:
        """Return True if both axes share the same resolution."""
        return self.x == self.y

    @property
    def is_valid(self) -> bool:
        """Return True if both components are finite and strictly positive."""
        return all(math.isfinite(v) and v > 0 for v in (self.x, self.y))

    def to_tuple(self) -> tuple[float, float]:
        """Convert to (x, y) tuple."""
        return (self.x, self.y)

    @classmethod
    def coerce(cls, value: Resolution | tuple[float, float] | float) -> Resolution:
        """Build a Resolution from a model, an (x, y) pair or a single value.

        A single value applies to both axes.
        """
        if isinstance(value, Resolution):
            return value
        if isinstance(value, (int, float)):
            return cls(x=value, y=value)
        x, y = value
        return cls(x=x, y=y)


class Area(BaseModel, frozen=True):
    """An axis-aligned rectangle in world coordinates.

    The rectangle spans [left, left + width] horizontally and
    [bottom, bottom + height] vertically. "Bottom" is the edge with the
    smallest y value, which maps to pixel row 0.

    Attributes:
        left: Smallest x value covered.
        bottom: Smallest y value covered.
        width: Horizontal extent (> 0).
        height: Vertical extent (> 0).
    """

    left: float = Field(..., allow_inf_nan=False, description="Smallest x value")
    bottom: float = Field(..., allow_inf_nan=False, description="Smallest y value")
    width: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Width in world units"
    )
    height: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Height in world units"
    )

    @property
    def right(self) -> float:
        """Return the largest x value covered."""
        return self.left + self.width

    @property
    def top(self) -> float:
        """Return the largest y value covered."""
        return self.bottom + self.height

    @property
    def center(self) -> WorldPoint:
        """Return the center of the area."""
        return WorldPoint(x=self.left + self.width / 2, y=self.bottom + self.height / 2)

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (left, bottom, width, height) tuple."""
        return (self.left, self.bottom, self.width, self.height)

    @classmethod
    def from_tuple(cls, bbox: tuple[float, float, float, float]) -> Self:
        """Create Area from (left, bottom, width, height) tuple."""
        return cls(left=bbox[0], bottom=bbox[1], width=bbox[2], height=bbox[3])

    @classmethod
    def from_bounds(cls, left: float, bottom: float, right: float, top: float) -> Self:
        """Create Area from its edge coordinates.

        Raises:
            ValueError: If right <= left or top <= bottom.
        """
        return cls(left=left, bottom=bottom, width=right - left, height=top - bottom)

    @classmethod
    def centered(cls, center: WorldPoint, width: float, height: float) -> Self:
        """Create an Area of the given size around a center point."""
        return cls(
            left=center.x - width / 2,
            bottom=center.y - height / 2,
            width=width,
            height=height,
        )

    def contains_point(self, point: WorldPoint) -> bool:
        """Check if a point lies inside the area (edges inclusive)."""
        return self.left <= point.x <= self.right and self.bottom <= point.y <= self.top
