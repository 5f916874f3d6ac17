"""Spatially-referenced raster (Map) for worldraster.

A Map pairs a pixel raster with an Area: the world-space rectangle the
pixel grid represents. The Area is fixed at construction; the Resolution is
always derived from the Area and the current pixel dimensions and is never
stored, so the two cannot drift apart.

Pixel row 0 corresponds to Area.bottom. No axis is flipped; if the raster
stores its first row at the top of an image, larger world y values appear
lower in that image.
"""

from __future__ import annotations

import uuid
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

from worldraster.core.dispatcher import DrawingDispatcher
from worldraster.core.elementwise import WorldConverter, transform
from worldraster.exceptions import InvalidConfigurationError
from worldraster.geometry.primitives import Area, PixelPoint, Resolution, WorldPoint
from worldraster.geometry.transforms import (
    CoordinateMapper,
    pixel_dimensions_for,
    resolution_for,
)
from worldraster.raster.raster import Raster
from worldraster.utils.logging import correlation_context, get_logger

if TYPE_CHECKING:
    from worldraster.geometry.shapes import (
        Circle,
        ConvexPolygon,
        LineSegment,
        Polyline,
        Rectangle,
        Shape,
        Text,
    )
    from worldraster.raster.types import PixelValue, RasterProtocol

logger = get_logger(__name__)


def plan_grid(
    area: Area, resolution: Resolution | tuple[float, float] | float
) -> tuple[int, int]:
    """Compute the pixel dimensions of a Map covering area at resolution.

    Args:
        area: World-space rectangle.
        resolution: World units per pixel, as a Resolution, an (x, y) pair,
            or a single value used for both axes.

    Returns:
        (width, height) in pixels, each rounded to the nearest integer.

    Raises:
        InvalidConfigurationError: If the resolution is not finite and
            positive, or either rounded dimension is not positive.
    """
    res = Resolution.coerce(resolution)
    if not res.is_valid:
        raise InvalidConfigurationError(
            "Resolution must be finite and positive", resolution=res.to_tuple()
        )
    try:
        width, height = pixel_dimensions_for(area, res)
    except ValueError as e:
        raise InvalidConfigurationError(str(e), resolution=res.to_tuple()) from e
    if width <= 0 or height <= 0:
        raise InvalidConfigurationError(
            "Pixel dimensions must be positive after rounding",
            width=width,
            height=height,
            resolution=res.to_tuple(),
        )
    return width, height


class Map:
    """A pixel raster overlaid with a world coordinate system.

    Usage:
        area = Area(left=-5, bottom=-5, width=10, height=10)
        world = Map.create(area, resolution=0.1, fill=0)
        world.draw(Circle(center=(0, 0), radius=2), color=255, thickness=0)
        shaded = world.convert(lambda v, x, y: v * (x > 0), mode="L")

    Attributes:
        area: World-space rectangle covered by the pixels.
        resolution: World units per pixel, derived on every access.
        width: Pixel width.
        height: Pixel height.
        raster: The owned pixel-space raster.
    """

    __slots__ = ("_area", "_id", "_raster")

    def __init__(self, raster: RasterProtocol, area: Area) -> None:
        """Wrap a raster with an Area.

        The Map takes ownership of raster without copying it. Use
        Map.from_raster to pair an Area with a copy of an existing raster.

        Args:
            raster: Pixel storage; must not be shared with another Map.
            area: World-space rectangle the raster represents.

        Raises:
            InvalidConfigurationError: If the raster has non-positive
                dimensions.
        """
        if raster.width <= 0 or raster.height <= 0:
            raise InvalidConfigurationError(
                "Pixel dimensions must be positive",
                width=raster.width,
                height=raster.height,
            )
        self._raster = raster
        self._area = area
        self._id = uuid.uuid4().hex[:8]
        logger.debug(
            "Map created",
            map_id=self._id,
            width=raster.width,
            height=raster.height,
            mode=raster.mode,
            area=area.to_tuple(),
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        area: Area,
        resolution: Resolution | tuple[float, float] | float,
        fill: PixelValue | None = None,
        *,
        mode: str = "L",
    ) -> Map:
        """Create a Map covering an Area at the requested resolution.

        The pixel dimensions are round(area.width / resolution.x) and
        round(area.height / resolution.y), so the effective resolution
        can differ slightly from the requested one.

        Args:
            area: World-space rectangle.
            resolution: World units per pixel, as a Resolution, an (x, y)
                pair, or a single value used for both axes.
            fill: Initial value of every pixel. Defaults to zero.
            mode: Pixel mode (see worldraster.raster.SUPPORTED_MODES).

        Returns:
            A new Map.

        Raises:
            InvalidConfigurationError: If the resolution is not finite and
                positive, or the rounded pixel dimensions are not positive.
        """
        width, height = plan_grid(area, resolution)
        return cls(Raster(width, height, mode=mode, fill=fill), area)

    @classmethod
    def from_raster(
        cls,
        raster: RasterProtocol,
        area: Area,
        *,
        into: RasterProtocol | None = None,
    ) -> Map:
        """Create a Map holding a full copy of an existing raster.

        Args:
            raster: Source raster; it is never modified or aliased.
            area: World-space rectangle the raster represents.
            into: Destination raster for the copy. A new raster of the same
                kind is created when omitted.

        Returns:
            A new Map whose pixels equal the source's.

        Raises:
            InvalidConfigurationError: If the source has non-positive
                dimensions, or into differs in size or is the source itself.
        """
        if raster.width <= 0 or raster.height <= 0:
            raise InvalidConfigurationError(
                "Pixel dimensions must be positive",
                width=raster.width,
                height=raster.height,
            )
        destination = (
            into if into is not None else raster.new_like(raster.width, raster.height)
        )
        if destination is raster:
            raise InvalidConfigurationError(
                "Destination raster must not be the source raster"
            )
        if (destination.width, destination.height) != (raster.width, raster.height):
            raise InvalidConfigurationError(
                "Raster dimensions do not match",
                source=(raster.width, raster.height),
                destination=(destination.width, destination.height),
            )
        raster.copy_into(destination)
        return cls(destination, area)

    def with_raster(self, raster: RasterProtocol) -> Map:
        """Create a new Map with this Map's Area and another raster.

        Raises:
            InvalidConfigurationError: If the raster dimensions differ.
        """
        if (raster.width, raster.height) != (self.width, self.height):
            raise InvalidConfigurationError(
                "Raster dimensions do not match",
                expected=(self.width, self.height),
                actual=(raster.width, raster.height),
            )
        return type(self)(raster, self._area)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        """Return a short identifier used to correlate log events."""
        return self._id

    @property
    def area(self) -> Area:
        """Return the world-space rectangle covered by the pixels."""
        return self._area

    @property
    def raster(self) -> RasterProtocol:
        """Return the owned raster."""
        return self._raster

    @property
    def width(self) -> int:
        """Return the pixel width."""
        return self._raster.width

    @property
    def height(self) -> int:
        """Return the pixel height."""
        return self._raster.height

    @property
    def mode(self) -> str:
        """Return the pixel mode."""
        return self._raster.mode

    @property
    def resolution(self) -> Resolution:
        """Return world units per pixel: area size / pixel size."""
        return resolution_for(self._area, self.width, self.height)

    @property
    def mapper(self) -> CoordinateMapper:
        """Return a new CoordinateMapper for the current Area and grid."""
        return CoordinateMapper.for_grid(self._area, self.width, self.height)

    def __repr__(self) -> str:
        return (
            f"Map(id={self._id!r}, width={self.width}, height={self.height}, "
            f"mode={self.mode!r}, area={self._area.to_tuple()})"
        )

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def map_point(self, point: WorldPoint) -> PixelPoint:
        """Map a world point to pixel space."""
        return self.mapper.map_point(point)

    def pixel_to_world(self, col: float, row: float) -> WorldPoint:
        """Map a pixel position back to world space."""
        return self.mapper.pixel_to_world(col, row)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _dispatcher(self) -> DrawingDispatcher:
        return DrawingDispatcher(self._raster, self.mapper)

    def _drawing(self) -> AbstractContextManager[None]:
        return correlation_context(map_id=self._id, operation="draw")

    def draw(self, shape: Shape, color: PixelValue, thickness: int = 1) -> None:
        """Draw any world-space shape in place.

        Raises:
            InvalidGeometryError: If the shape cannot be mapped or filled.
            TypeError: If shape is not one of the supported kinds.
        """
        with self._drawing():
            self._dispatcher().draw(shape, color, thickness)
            logger.debug("Shape drawn", shape=shape.kind)

    def draw_rectangle(
        self, rect: Rectangle, color: PixelValue, thickness: int = 1
    ) -> None:
        """Draw a rectangle; thickness <= 0 fills it."""
        with self._drawing():
            self._dispatcher().draw_rectangle(rect, color, thickness)

    def draw_line(self, line: LineSegment, color: PixelValue, thickness: int = 1) -> None:
        """Draw a line segment."""
        with self._drawing():
            self._dispatcher().draw_line(line, color, thickness)

    def draw_circle(self, circle: Circle, color: PixelValue, thickness: int = 1) -> None:
        """Draw a circle; thickness <= 0 fills it."""
        with self._drawing():
            self._dispatcher().draw_circle(circle, color, thickness)

    def draw_polygon(
        self, polygon: ConvexPolygon, color: PixelValue, thickness: int = 1
    ) -> None:
        """Draw a convex polygon outline, or fill it when thickness <= 0."""
        with self._drawing():
            self._dispatcher().draw_polygon(polygon, color, thickness)

    def draw_polyline(
        self, polyline: Polyline, color: PixelValue, thickness: int = 1
    ) -> None:
        """Draw a polyline."""
        with self._drawing():
            self._dispatcher().draw_polyline(polyline, color, thickness)

    def draw_text(self, text: Text, color: PixelValue) -> None:
        """Draw a text label."""
        with self._drawing():
            self._dispatcher().draw_text(text, color)

    # ------------------------------------------------------------------
    # Elementwise transform
    # ------------------------------------------------------------------

    def convert(
        self,
        func: WorldConverter,
        mode: str | None = None,
        *,
        workers: int | None = None,
    ) -> Map:
        """Build a new Map from func(value, world_x, world_y) for every pixel.

        See worldraster.core.elementwise.transform.
        """
        return transform(self, func, mode=mode, workers=workers)
