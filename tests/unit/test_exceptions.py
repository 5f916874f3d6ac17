"""Tests for worldraster.exceptions module."""

from __future__ import annotations

from worldraster.exceptions import (
    InvalidConfigurationError,
    InvalidGeometryError,
    MapError,
    TransformFailureError,
)


class TestMapError:
    """Tests for the base error."""

    def test_message_without_context(self) -> None:
        error = MapError("Something failed")
        assert str(error) == "Something failed"
        assert error.context == {}

    def test_context_is_rendered_in_order(self) -> None:
        error = MapError("Bad grid", width=0, height=4)
        assert str(error) == "Bad grid (width=0, height=4)"
        assert error.message == "Bad grid"

    def test_none_context_values_are_dropped(self) -> None:
        error = MapError("Bad grid", width=None, height=4)
        assert str(error) == "Bad grid (height=4)"

    def test_subclasses_share_base(self) -> None:
        for cls in (InvalidConfigurationError, InvalidGeometryError, TransformFailureError):
            assert issubclass(cls, MapError)


class TestInvalidGeometryError:
    """Tests for InvalidGeometryError."""

    def test_shape_attribute(self) -> None:
        error = InvalidGeometryError("Too few vertices", shape="polygon")
        assert error.shape == "polygon"
        assert "shape=polygon" in str(error)

    def test_shape_is_optional(self) -> None:
        error = InvalidGeometryError("Too few vertices")
        assert error.shape is None
        assert str(error) == "Too few vertices"


class TestTransformFailureError:
    """Tests for TransformFailureError."""

    def test_pixel_index(self) -> None:
        error = TransformFailureError("Conversion function failed", row=3, col=9)
        assert (error.row, error.col) == (3, 9)
        assert str(error) == "Conversion function failed (row=3, col=9)"
