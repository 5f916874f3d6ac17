"""Geometry validation utilities for worldraster.

This module checks mapped geometry before it reaches a raster, so that a
draw call either hands fully valid pixel values to the raster or raises
InvalidGeometryError without touching any pixel. Nothing is clamped.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from worldraster.exceptions import InvalidGeometryError
from worldraster.geometry.primitives import PixelPoint

# A filled polygon needs an interior
MIN_FILL_VERTICES = 3


class GeometryValidator:
    """Validator for pixel-space geometry produced by a CoordinateMapper.

    The validator is stateless and operates purely on the inputs provided
    to each method.
    """

    def validate_point(self, point: PixelPoint, *, shape: str) -> PixelPoint:
        """Ensure a mapped point is finite.

        Args:
            point: Mapped control point.
            shape: Kind of shape being drawn, for the error message.

        Returns:
            The point unchanged.

        Raises:
            InvalidGeometryError: If either coordinate is NaN or infinite.
        """
        if not point.is_finite:
            raise InvalidGeometryError(
                f"Control point maps to non-finite pixel {point.to_tuple()}",
                shape=shape,
            )
        return point

    def validate_points(
        self, points: Sequence[PixelPoint], *, shape: str
    ) -> list[PixelPoint]:
        """Ensure every mapped point is finite."""
        return [self.validate_point(p, shape=shape) for p in points]

    def validate_length(self, length: float, *, shape: str, name: str) -> float:
        """Ensure a scaled size attribute is finite.

        Raises:
            InvalidGeometryError: If the length is NaN or infinite.
        """
        if not math.isfinite(length):
            raise InvalidGeometryError(
                f"{name} maps to non-finite pixel length {length}", shape=shape
            )
        return length

    def validate_fillable(self, points: Sequence[PixelPoint], *, shape: str) -> None:
        """Ensure a polygon has enough vertices to be filled.

        Raises:
            InvalidGeometryError: If fewer than MIN_FILL_VERTICES are given.
        """
        if len(points) < MIN_FILL_VERTICES:
            raise InvalidGeometryError(
                f"Filling needs at least {MIN_FILL_VERTICES} vertices, "
                f"got {len(points)}",
                shape=shape,
            )
