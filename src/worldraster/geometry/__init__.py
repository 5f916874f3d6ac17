"""Geometry module for worldraster.

This package provides world-space primitives and shapes, the
world <-> pixel coordinate mapping, and validation of mapped geometry.

Key Components:
    - Primitives: WorldPoint, PixelPoint, Area, Resolution
    - Shapes: Rectangle, LineSegment, Circle, ConvexPolygon, Polyline, Text
    - Transforms: CoordinateMapper and resolution helpers
    - Validators: Finite-coordinate and fillable-polygon checks

Example:
    from worldraster.geometry import Area, CoordinateMapper, WorldPoint

    area = Area(left=-5, bottom=-5, width=10, height=10)
    mapper = CoordinateMapper.for_grid(area, 100, 100)
    mapper.map_point(WorldPoint(x=0, y=0))  # PixelPoint(x=50.0, y=50.0)
"""

from worldraster.geometry.primitives import Area, PixelPoint, Resolution, WorldPoint
from worldraster.geometry.shapes import (
    Circle,
    ConvexPolygon,
    LineSegment,
    Polyline,
    Rectangle,
    Shape,
    Text,
)
from worldraster.geometry.transforms import (
    CoordinateMapper,
    pixel_dimensions_for,
    resolution_for,
)
from worldraster.geometry.validators import MIN_FILL_VERTICES, GeometryValidator

__all__ = [
    "MIN_FILL_VERTICES",
    "Area",
    "Circle",
    "ConvexPolygon",
    "CoordinateMapper",
    "GeometryValidator",
    "LineSegment",
    "PixelPoint",
    "Polyline",
    "Rectangle",
    "Resolution",
    "Shape",
    "Text",
    "WorldPoint",
    "pixel_dimensions_for",
    "resolution_for",
]
