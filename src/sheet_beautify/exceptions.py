"""
Errors raised by sheet-beautify.

Every error carries the offending values (``context``) and, where there is an
obvious fix, ``suggestions``; both are appended to the message. Example::

    raise PlacementError(
        "Symbol label already in use",
        kind=PlacementErrorKind.DUPLICATE_LABEL,
        context={"label": "G1"},
        suggestions=["Choose a different label"],
    )
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional


class SheetBeautifyError(Exception):
    """
    Base class for sheet-beautify errors.

    Attributes:
        message: The one-line description
        context: Values that identify what failed (label, port, position)
        suggestions: Ways to fix it
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = dict(context or {})
        self.suggestions = list(suggestions or [])
        super().__init__(str(self))

    def __str__(self) -> str:
        sections = [self.message]
        if self.context:
            lines = [f"  {key}: {value}" for key, value in self.context.items()]
            sections.append("Context:\n" + "\n".join(lines))
        if self.suggestions:
            lines = [f"  - {s}" for s in self.suggestions]
            sections.append("Suggestions:\n" + "\n".join(lines))
        return "\n\n".join(sections)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form for JSON output."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "context": {k: str(v) for k, v in self.context.items()},
            "suggestions": self.suggestions,
        }


class PlacementErrorKind(Enum):
    """Reasons a placement builder operation can be refused."""

    DUPLICATE_LABEL = "duplicate_label"
    UNKNOWN_SYMBOL = "unknown_symbol"
    UNKNOWN_PORT = "unknown_port"
    DUPLICATE_WIRE = "duplicate_wire"
    OUT_OF_BOUNDS = "out_of_bounds"
    CUSTOM_SHEET = "custom_sheet"
    NOT_FOUND = "not_found"


class PlacementError(SheetBeautifyError):
    """
    A placement builder operation could not be applied to the sheet.

    Raised for duplicate labels, unresolved wire endpoints, duplicate wires,
    symbols outside the sheet, and custom component sheet conflicts.

    Example::

        raise PlacementError(
            "Can't find symbol with label 'G9'",
            kind=PlacementErrorKind.UNKNOWN_SYMBOL,
            context={"label": "G9"},
        )

    Attributes:
        kind: The category of failure
    """

    def __init__(
        self,
        message: str,
        kind: PlacementErrorKind,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.kind = kind
        super().__init__(message, context, suggestions)


class RoutingError(SheetBeautifyError):
    """
    Wire routing failed.

    Raised when a wire refers to ports that no longer exist on the sheet.

    Example::

        raise RoutingError(
            "Cannot route wire W3",
            context={"wire": "W3", "missing_port": "c2.in1"},
        )
    """

    pass


class ConfigurationError(SheetBeautifyError):
    """
    Configuration or settings error.

    Raised when configuration is invalid, missing, or incompatible.

    Example::

        raise ConfigurationError(
            "Unknown beautify phase",
            context={"phase": "phase4", "available": ["single_port", "scale_align", "multi_port"]},
            suggestions=["Use one of the available phase names"]
        )
    """

    pass


__all__ = [
    "SheetBeautifyError",
    "PlacementError",
    "PlacementErrorKind",
    "RoutingError",
    "ConfigurationError",
]
