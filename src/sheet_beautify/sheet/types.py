"""Enumerations shared by the sheet model.

Rotations are clockwise in sheet coordinates (y grows downwards), so a
quarter turn maps the LEFT edge of a symbol onto its TOP edge.
"""

from __future__ import annotations

from enum import Enum

from ..geometry import XYPos


class Rotation(Enum):
    """Symbol rotation, clockwise."""

    DEG0 = 0
    DEG90 = 90
    DEG180 = 180
    DEG270 = 270

    @property
    def quarter_turns(self) -> int:
        return self.value // 90

    @classmethod
    def from_quarter_turns(cls, turns: int) -> Rotation:
        return cls((turns % 4) * 90)

    def __add__(self, other: Rotation) -> Rotation:
        return Rotation.from_quarter_turns(self.quarter_turns + other.quarter_turns)

    @property
    def swaps_axes(self) -> bool:
        """True for 90 and 270 degrees, where width and height exchange."""
        return self.quarter_turns % 2 == 1


class FlipType(Enum):
    """Mirror state of a symbol."""

    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class PortType(Enum):
    """Direction of a port."""

    INPUT = "input"
    OUTPUT = "output"


class Orientation(Enum):
    """Axis of the first segment of a wire."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def perpendicular(self) -> Orientation:
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class Edge(Enum):
    """The side of a symbol outline a port is drawn on."""

    LEFT = "left"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"

    @property
    def opposite(self) -> Edge:
        return _OPPOSITE[self]

    @property
    def direction(self) -> XYPos:
        """Outward unit vector of the edge."""
        return _DIRECTION[self]

    @property
    def axis(self) -> Orientation:
        """Axis along which a wire leaves a port on this edge."""
        if self in (Edge.LEFT, Edge.RIGHT):
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL

    def rotated_cw(self, quarter_turns: int) -> Edge:
        order = _CLOCKWISE.index(self)
        return _CLOCKWISE[(order + quarter_turns) % 4]

    def flipped(self, flip: FlipType) -> Edge:
        if flip is FlipType.HORIZONTAL and self in (Edge.LEFT, Edge.RIGHT):
            return self.opposite
        if flip is FlipType.VERTICAL and self in (Edge.TOP, Edge.BOTTOM):
            return self.opposite
        return self


_CLOCKWISE = [Edge.LEFT, Edge.TOP, Edge.RIGHT, Edge.BOTTOM]

_OPPOSITE = {
    Edge.LEFT: Edge.RIGHT,
    Edge.RIGHT: Edge.LEFT,
    Edge.TOP: Edge.BOTTOM,
    Edge.BOTTOM: Edge.TOP,
}

_DIRECTION = {
    Edge.LEFT: XYPos(-1.0, 0.0),
    Edge.RIGHT: XYPos(1.0, 0.0),
    Edge.TOP: XYPos(0.0, -1.0),
    Edge.BOTTOM: XYPos(0.0, 1.0),
}
