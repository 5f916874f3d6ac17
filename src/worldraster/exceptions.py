"""Custom exceptions for Map operations.

Every error is raised synchronously at the call that triggered it. None of
them are transient, so nothing here is retried or recovered from.
"""

from __future__ import annotations


class MapError(Exception):
    """Base exception for all worldraster errors."""

    def __init__(self, message: str, **context: object) -> None:
        """Initialize the error with optional keyword context.

        Args:
            message: Human-readable error description.
            **context: Extra values rendered after the message, in order.
                Values that are None are omitted.
        """
        self.message = message
        self.context = {k: v for k, v in context.items() if v is not None}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if not self.context:
            return self.message
        parts = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({parts})"


class InvalidConfigurationError(MapError):
    """Raised when a Map cannot be constructed from its inputs.

    This error is raised when:
    - A resolution component is zero, negative or non-finite
    - The pixel dimensions are non-positive after rounding
    - A destination raster does not match the source dimensions
    """


class InvalidGeometryError(MapError):
    """Raised when a shape cannot be drawn.

    This error is raised when:
    - A convex polygon with fewer than 3 vertices is filled
    - A control point or size maps to a non-finite pixel value
    """

    def __init__(self, message: str, *, shape: str | None = None) -> None:
        """Initialize geometry error with the offending shape kind.

        Args:
            message: Human-readable error description.
            shape: Kind of the shape being drawn (e.g. "polygon").
        """
        self.shape = shape
        super().__init__(message, shape=shape)


class TransformFailureError(MapError):
    """Raised when the elementwise conversion function fails for a pixel.

    The original exception is chained as ``__cause__``. No partial
    result is produced when this is raised.
    """

    def __init__(
        self,
        message: str,
        *,
        row: int | None = None,
        col: int | None = None,
    ) -> None:
        """Initialize transform error with the failing pixel index.

        Args:
            message: Human-readable error description.
            row: Row index of the pixel being converted.
            col: Column index of the pixel being converted.
        """
        self.row = row
        self.col = col
        super().__init__(message, row=row, col=col)
