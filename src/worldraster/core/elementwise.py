"""Position-aware elementwise transform of Maps.

``transform`` builds a new Map by calling a function with every pixel value
and the world coordinates of that pixel. Pixel indices are converted with
the inverse of the Map's mapping:

    world_x = col * res_x + area.left
    world_y = row * res_y + area.bottom

The function must be pure. Pixels may be visited in any order and, with
more than one worker, from several threads at once.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from worldraster.config import settings
from worldraster.exceptions import TransformFailureError
from worldraster.utils.logging import correlation_context, get_logger

if TYPE_CHECKING:
    from worldraster.core.map import Map

logger = get_logger(__name__)

#: Position-aware converter: (value, world_x, world_y) -> new value.
WorldConverter = Callable[[Any, float, float], Any]


def transform(
    source: Map,
    func: WorldConverter,
    *,
    mode: str | None = None,
    workers: int | None = None,
) -> Map:
    """Apply a position-aware function to every pixel of a Map.

    Args:
        source: Map to read from; it is not modified.
        func: Pure function of (value, world_x, world_y) returning the new
            pixel value. Multi-band values are tuples.
        mode: Pixel mode of the result. Defaults to the source mode.
        workers: Worker threads. Defaults to settings.TRANSFORM_WORKERS.

    Returns:
        A new Map with the same pixel dimensions and an equal Area.

    Raises:
        TransformFailureError: If func fails, or returns a value the target
            mode cannot store. No Map is produced in that case.
        ValueError: If workers is less than 1 or mode is unsupported.
        ConfigError: If workers is omitted and the configured count is invalid.

    Example:
        >>> gradient = transform(source, lambda value, x, y: x + y, mode="F")
    """
    if workers is None:
        workers = settings.require_workers()
    elif workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    resolution = source.resolution
    res_x, res_y = resolution.x, resolution.y
    origin_x, origin_y = source.area.left, source.area.bottom

    def at_index(value: Any, row: int, col: int) -> Any:
        try:
            return func(value, col * res_x + origin_x, row * res_y + origin_y)
        except Exception as e:
            raise TransformFailureError(
                f"Conversion function failed: {e}", row=row, col=col
            ) from e

    with correlation_context(map_id=source.id, operation="convert"):
        started = time.perf_counter()
        try:
            raster = source.raster.elementwise_convert(
                at_index, mode=mode, workers=workers
            )
        except TransformFailureError as e:
            logger.warning(
                "Elementwise transform failed",
                row=e.row,
                col=e.col,
                error=e.message,
            )
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000

        result = source.with_raster(raster)
        logger.debug(
            "Elementwise transform complete",
            result_id=result.id,
            pixels=source.width * source.height,
            workers=workers,
            mode=result.mode,
            elapsed_ms=round(elapsed_ms, 3),
        )
    return result
