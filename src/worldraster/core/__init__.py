"""Core algorithms for worldraster.

This package contains the Map itself, the world-space drawing dispatch,
and the position-aware elementwise transform.

Public API:
    - Map: Pixel raster paired with a world-space Area.
    - DrawingDispatcher: Maps shapes to pixel space and calls the raster.
    - transform: Builds a new Map from f(value, world_x, world_y).
    - WorldConverter: Type of the function accepted by transform.
    - plan_grid: Pixel dimensions for an Area at a resolution.
"""

from worldraster.core.dispatcher import DrawingDispatcher
from worldraster.core.elementwise import WorldConverter, transform
from worldraster.core.map import Map, plan_grid

__all__ = [
    "DrawingDispatcher",
    "Map",
    "WorldConverter",
    "plan_grid",
    "transform",
]
