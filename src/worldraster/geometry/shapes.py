"""World-space shapes that can be drawn on a Map.

The set of shapes is closed: ``Shape`` is a tagged union discriminated on
the ``kind`` field, and the drawing dispatcher handles each variant
explicitly. All shapes are immutable; mapping to pixel space produces new
values and never touches the shape.
"""

from __future__ import annotations

from typing import Annotated, Literal, Self

from pydantic import BaseModel, Field

from worldraster.geometry.primitives import Area, WorldPoint
from worldraster.raster.types import FontSpec


class Rectangle(BaseModel, frozen=True):
    """An axis-aligned rectangle given by its center and extent.

    Attributes:
        center: Center point in world coordinates.
        width: Horizontal extent in world units.
        height: Vertical extent in world units.
    """

    kind: Literal["rectangle"] = "rectangle"
    center: WorldPoint
    width: float = Field(..., ge=0, description="Width in world units")
    height: float = Field(..., ge=0, description="Height in world units")

    @classmethod
    def covering(cls, area: Area) -> Self:
        """Create the rectangle that exactly covers an Area."""
        return cls(center=area.center, width=area.width, height=area.height)


class LineSegment(BaseModel, frozen=True):
    """A straight segment between two world points."""

    kind: Literal["line"] = "line"
    p1: WorldPoint
    p2: WorldPoint


class Circle(BaseModel, frozen=True):
    """A circle given by its center and radius in world units."""

    kind: Literal["circle"] = "circle"
    center: WorldPoint
    radius: float = Field(..., ge=0, description="Radius in world units")


class ConvexPolygon(BaseModel, frozen=True):
    """A convex polygon given by its ordered vertices.

    The vertex count is not validated here. Filling needs at least three
    vertices and is checked when the polygon is drawn.
    """

    kind: Literal["polygon"] = "polygon"
    vertices: tuple[WorldPoint, ...]


class Polyline(BaseModel, frozen=True):
    """Connected segments through ordered vertices.

    Attributes:
        vertices: Points visited in order.
        closed: If True, the last vertex is joined back to the first.
    """

    kind: Literal["polyline"] = "polyline"
    vertices: tuple[WorldPoint, ...]
    closed: bool = False


class Text(BaseModel, frozen=True):
    """A text label anchored at its bottom-left corner."""

    kind: Literal["text"] = "text"
    anchor: WorldPoint
    message: str
    font: FontSpec = FontSpec()


Shape = Annotated[
    Rectangle | LineSegment | Circle | ConvexPolygon | Polyline | Text,
    Field(discriminator="kind"),
]
