"""worldraster: pixel rasters addressed in world coordinates.

Example:
    from worldraster import Area, Circle, Map

    area = Area(left=-5, bottom=-5, width=10, height=10)
    world = Map.create(area, resolution=0.1)
    world.draw(Circle(center=(0, 0), radius=2.5), color=255, thickness=0)
"""

from worldraster.core import DrawingDispatcher, Map, WorldConverter, transform
from worldraster.exceptions import (
    InvalidConfigurationError,
    InvalidGeometryError,
    MapError,
    TransformFailureError,
)
from worldraster.geometry import (
    Area,
    Circle,
    ConvexPolygon,
    CoordinateMapper,
    LineSegment,
    PixelPoint,
    Polyline,
    Rectangle,
    Resolution,
    Shape,
    Text,
    WorldPoint,
)
from worldraster.raster import FontSpec, Raster, RasterProtocol

__version__ = "0.1.0"

__all__ = [
    "Area",
    "Circle",
    "ConvexPolygon",
    "CoordinateMapper",
    "DrawingDispatcher",
    "FontSpec",
    "InvalidConfigurationError",
    "InvalidGeometryError",
    "LineSegment",
    "Map",
    "MapError",
    "PixelPoint",
    "Polyline",
    "Raster",
    "RasterProtocol",
    "Rectangle",
    "Resolution",
    "Shape",
    "Text",
    "TransformFailureError",
    "WorldConverter",
    "WorldPoint",
    "__version__",
    "transform",
]
