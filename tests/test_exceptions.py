"""Tests for the exception hierarchy."""

import pytest

from sheet_beautify.exceptions import (
    ConfigurationError,
    PlacementError,
    PlacementErrorKind,
    RoutingError,
    SheetBeautifyError,
)


class TestSheetBeautifyError:
    """Test message formatting."""

    def test_plain_message(self):
        error = SheetBeautifyError("Something failed")
        assert str(error) == "Something failed"
        assert error.context == {}
        assert error.suggestions == []

    def test_context_and_suggestions(self):
        error = SheetBeautifyError(
            "Something failed",
            context={"label": "G1"},
            suggestions=["Try again"],
        )
        text = str(error)
        assert text.startswith("Something failed")
        assert "Context:\n  label: G1" in text
        assert "Suggestions:\n  - Try again" in text


class TestSubclasses:
    """Test the specific error types."""

    def test_placement_error_kind(self):
        error = PlacementError("dup", kind=PlacementErrorKind.DUPLICATE_LABEL)
        assert error.kind is PlacementErrorKind.DUPLICATE_LABEL
        assert error.message == "dup"

    @pytest.mark.parametrize("cls", [PlacementError, RoutingError, ConfigurationError])
    def test_all_are_sheet_beautify_errors(self, cls):
        assert issubclass(cls, SheetBeautifyError)


class TestToDict:
    """Test the JSON form of errors."""

    def test_to_dict(self):
        error = PlacementError(
            "Can't find symbol",
            kind=PlacementErrorKind.UNKNOWN_SYMBOL,
            context={"label": "G9", "port": 1},
            suggestions=["Place the symbol first"],
        )
        assert error.to_dict() == {
            "error": "PlacementError",
            "message": "Can't find symbol",
            "context": {"label": "G9", "port": "1"},
            "suggestions": ["Place the symbol first"],
        }
