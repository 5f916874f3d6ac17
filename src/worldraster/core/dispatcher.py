"""World-space drawing dispatch for Maps.

Each shape kind has one method that converts its control points and size
attributes to pixel units through a CoordinateMapper, validates the result,
and then calls the matching pixel-space primitive on the raster.

Thickness conventions:
    - Rectangle, circle and polygon treat thickness <= 0 as "filled".
    - Lines and polylines always use thickness as a stroke width.
    - Text has no thickness.

Validation happens before the raster is called, so a failing draw leaves
every pixel untouched.
"""

from __future__ import annotations

from collections.abc import Iterable

from worldraster.geometry.primitives import PixelPoint, WorldPoint
from worldraster.geometry.shapes import (
    Circle,
    ConvexPolygon,
    LineSegment,
    Polyline,
    Rectangle,
    Shape,
    Text,
)
from worldraster.geometry.transforms import CoordinateMapper
from worldraster.geometry.validators import GeometryValidator
from worldraster.raster.types import PixelValue, RasterProtocol
from worldraster.utils.logging import get_logger

logger = get_logger(__name__)


class DrawingDispatcher:
    """Draws world-space shapes onto a pixel-space raster.

    Usage:
        dispatcher = DrawingDispatcher(raster, mapper)
        dispatcher.draw(Circle(center=(0, 0), radius=2.5), color=255, thickness=0)
    """

    def __init__(
        self,
        raster: RasterProtocol,
        mapper: CoordinateMapper,
        validator: GeometryValidator | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            raster: Raster receiving the pixel-space calls.
            mapper: Mapper for the raster's Area and pixel grid.
            validator: Validator for mapped geometry. Creates default if not
                provided.
        """
        self.raster = raster
        self.mapper = mapper
        self.validator = validator or GeometryValidator()

    def draw(self, shape: Shape, color: PixelValue, thickness: int = 1) -> None:
        """Draw any shape, dispatching on its kind.

        Args:
            shape: The world-space shape.
            color: Pixel value to draw with.
            thickness: Stroke width; <= 0 fills shapes that support filling.
                Ignored for text.

        Raises:
            InvalidGeometryError: If the shape cannot be mapped or filled.
            TypeError: If shape is not one of the supported kinds.
        """
        match shape:
            case Rectangle():
                self.draw_rectangle(shape, color, thickness)
            case LineSegment():
                self.draw_line(shape, color, thickness)
            case Circle():
                self.draw_circle(shape, color, thickness)
            case ConvexPolygon():
                self.draw_polygon(shape, color, thickness)
            case Polyline():
                self.draw_polyline(shape, color, thickness)
            case Text():
                self.draw_text(shape, color)
            case _:
                raise TypeError(f"Cannot draw object of type {type(shape).__name__}")

    def draw_rectangle(self, rect: Rectangle, color: PixelValue, thickness: int) -> None:
        """Draw a rectangle; width and height scale with their own axis."""
        center = self._map(rect.center, shape=rect.kind)
        width = self.validator.validate_length(
            self.mapper.scale_x(rect.width), shape=rect.kind, name="width"
        )
        height = self.validator.validate_length(
            self.mapper.scale_y(rect.height), shape=rect.kind, name="height"
        )
        self.raster.draw_rectangle(center.to_tuple(), width, height, color, thickness)

    def draw_line(self, line: LineSegment, color: PixelValue, thickness: int) -> None:
        """Draw a line segment between the two mapped endpoints."""
        p1 = self._map(line.p1, shape=line.kind)
        p2 = self._map(line.p2, shape=line.kind)
        self.raster.draw_line(p1.to_tuple(), p2.to_tuple(), color, thickness)

    def draw_circle(self, circle: Circle, color: PixelValue, thickness: int) -> None:
        """Draw a circle.

        The radius is scaled by the x resolution only. On maps with
        non-square pixels the drawn circle is therefore exact horizontally
        and off by res_y / res_x vertically.
        """
        resolution = self.mapper.resolution
        if not resolution.is_uniform:
            logger.debug(
                "Circle radius scaled by x resolution on non-uniform map",
                resolution=resolution.to_tuple(),
            )
        center = self._map(circle.center, shape=circle.kind)
        radius = self.validator.validate_length(
            self.mapper.scale_x(circle.radius), shape=circle.kind, name="radius"
        )
        self.raster.draw_circle(center.to_tuple(), radius, color, thickness)

    def draw_polygon(
        self, polygon: ConvexPolygon, color: PixelValue, thickness: int
    ) -> None:
        """Draw a convex polygon.

        With thickness > 0 the outline is drawn as a closed polyline;
        otherwise the interior is filled.

        Raises:
            InvalidGeometryError: If filling with fewer than 3 vertices, or a
                vertex maps to a non-finite pixel.
        """
        points = self._map_all(polygon.vertices, shape=polygon.kind)
        pixels = [p.to_tuple() for p in points]
        if thickness > 0:
            self.raster.draw_polyline(pixels, True, color, thickness)
        else:
            self.validator.validate_fillable(points, shape=polygon.kind)
            self.raster.fill_convex_polygon(pixels, color)

    def draw_polyline(
        self, polyline: Polyline, color: PixelValue, thickness: int
    ) -> None:
        """Draw a polyline, keeping its closed flag."""
        points = self._map_all(polyline.vertices, shape=polyline.kind)
        self.raster.draw_polyline(
            [p.to_tuple() for p in points], polyline.closed, color, thickness
        )

    def draw_text(self, text: Text, color: PixelValue) -> None:
        """Draw text with its anchor rounded to the nearest pixel."""
        anchor = self._map(text.anchor, shape=text.kind)
        self.raster.draw_text(text.message, text.font, anchor.rounded(), color)

    def _map(self, point: WorldPoint, *, shape: str) -> PixelPoint:
        return self.validator.validate_point(self.mapper.map_point(point), shape=shape)

    def _map_all(
        self, points: Iterable[WorldPoint], *, shape: str
    ) -> list[PixelPoint]:
        return self.validator.validate_points(self.mapper.map_points(points), shape=shape)
