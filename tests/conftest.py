"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Any

import pytest

from worldraster.config import Settings
from worldraster.geometry import Area
from worldraster.utils.logging import clear_correlation_context, configure_logging


class RecordingRaster:
    """RasterProtocol implementation that records every pixel-space call.

    Pixels are kept as a list of rows so copies and elementwise conversion
    can be checked without Pillow.
    """

    def __init__(self, width: int, height: int, mode: str = "L", fill: Any = 0) -> None:
        self._width = width
        self._height = height
        self._mode = mode
        self.pixels: list[list[Any]] = [[fill] * max(width, 0) for _ in range(max(height, 0))]
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def new_like(
        self, width: int, height: int, mode: str | None = None
    ) -> RecordingRaster:
        return RecordingRaster(width, height, mode or self._mode)

    def draw_rectangle(
        self,
        center: tuple[float, float],
        width: float,
        height: float,
        color: Any,
        thickness: int,
    ) -> None:
        self.calls.append(("draw_rectangle", (center, width, height, color, thickness)))

    def draw_line(
        self,
        p1: tuple[float, float],
        p2: tuple[float, float],
        color: Any,
        thickness: int,
    ) -> None:
        self.calls.append(("draw_line", (p1, p2, color, thickness)))

    def draw_circle(
        self,
        center: tuple[float, float],
        radius: float,
        color: Any,
        thickness: int,
    ) -> None:
        self.calls.append(("draw_circle", (center, radius, color, thickness)))

    def draw_polyline(
        self,
        points: Sequence[tuple[float, float]],
        closed: bool,
        color: Any,
        thickness: int,
    ) -> None:
        self.calls.append(("draw_polyline", (list(points), closed, color, thickness)))

    def fill_convex_polygon(
        self, points: Sequence[tuple[float, float]], color: Any
    ) -> None:
        self.calls.append(("fill_convex_polygon", (list(points), color)))

    def draw_text(
        self, message: str, font: Any, anchor: tuple[int, int], color: Any
    ) -> None:
        self.calls.append(("draw_text", (message, font, anchor, color)))

    def copy_into(self, destination: RecordingRaster) -> None:
        self.calls.append(("copy_into", (destination,)))
        destination.pixels = [list(row) for row in self.pixels]

    def elementwise_convert(
        self,
        converter: Callable[[Any, int, int], Any],
        mode: str | None = None,
        workers: int = 1,
    ) -> RecordingRaster:
        self.calls.append(("elementwise_convert", (mode, workers)))
        result = RecordingRaster(self._width, self._height, mode or self._mode)
        result.pixels = [
            [converter(value, row, col) for col, value in enumerate(values)]
            for row, values in enumerate(self.pixels)
        ]
        return result


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
        TRANSFORM_WORKERS=1,
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def make_recording_raster() -> Callable[..., RecordingRaster]:
    """Factory for RecordingRaster instances."""
    return RecordingRaster


@pytest.fixture
def square_area() -> Area:
    """The 10 x 10 world area centered on the origin."""
    return Area(left=-5, bottom=-5, width=10, height=10)
