"""Geometry primitives for schematic layout.

Provides the 2D value types used throughout the package:

* :class:`XYPos` -- a point or displacement on the sheet.  Equality tests
  that matter for layout decisions go through :meth:`XYPos.approx_equal`
  so that drift from summing many segment lengths is absorbed.
* :class:`BoundingBox` -- an axis-aligned rectangle given by its top-left
  corner and size.  Sheet coordinates grow to the right and downwards.

Overlap is strict: two boxes that only share an edge do not overlap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

EPSILON = 1e-4
"""Tolerance for approximate position comparisons."""


@dataclass(frozen=True)
class XYPos:
    """A 2D point or vector in sheet coordinates."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> XYPos:
        return cls(0.0, 0.0)

    def __add__(self, other: XYPos) -> XYPos:
        return XYPos(self.x + other.x, self.y + other.y)

    def __sub__(self, other: XYPos) -> XYPos:
        return XYPos(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> XYPos:
        return XYPos(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> XYPos:
        return XYPos(-self.x, -self.y)

    def manhattan(self) -> float:
        """Sum of absolute components."""
        return abs(self.x) + abs(self.y)

    def approx_equal(self, other: XYPos, eps: float = EPSILON) -> bool:
        return abs(self.x - other.x) <= eps and abs(self.y - other.y) <= eps

    def is_zero(self, eps: float = EPSILON) -> bool:
        return self.approx_equal(XYPos.zero(), eps)

    def __repr__(self) -> str:
        return f"XYPos({self.x:.4f}, {self.y:.4f})"


def euclidean_distance(a: XYPos, b: XYPos) -> float:
    """Straight-line distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box given by its top-left corner, width and height."""

    top_left: XYPos
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.top_left.x

    @property
    def top(self) -> float:
        return self.top_left.y

    @property
    def right(self) -> float:
        return self.top_left.x + self.width

    @property
    def bottom(self) -> float:
        return self.top_left.y + self.height

    @property
    def centre(self) -> XYPos:
        return XYPos(self.left + self.width / 2, self.top + self.height / 2)

    def overlaps(self, other: BoundingBox) -> bool:
        """Check if the interiors of the two boxes intersect."""
        return (
            self.left < other.right
            and self.right > other.left
            and self.top < other.bottom
            and self.bottom > other.top
        )

    def contains_box(self, other: BoundingBox) -> bool:
        """Check if *other* lies entirely inside this box (edges included)."""
        return (
            self.left <= other.left
            and self.top <= other.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects_segment(self, start: XYPos, end: XYPos) -> bool:
        """Check if an axis-parallel segment passes through the box interior.

        Segments running along an edge of the box do not intersect it.
        """
        seg_left, seg_right = sorted((start.x, end.x))
        seg_top, seg_bottom = sorted((start.y, end.y))
        if seg_left == seg_right:
            # vertical segment
            return (
                self.left < seg_left < self.right
                and seg_top < self.bottom
                and seg_bottom > self.top
            )
        if seg_top == seg_bottom:
            # horizontal segment
            return (
                self.top < seg_top < self.bottom
                and seg_left < self.right
                and seg_right > self.left
            )
        raise ValueError(f"Segment {start} -> {end} is not axis-parallel")


def overlap_2d(box_a: BoundingBox, box_b: BoundingBox) -> bool:
    """Function form of :meth:`BoundingBox.overlaps`."""
    return box_a.overlaps(box_b)


def sheet_box(max_coord: float) -> BoundingBox:
    """The allowed placement area ``[0, max_coord]`` on both axes."""
    return BoundingBox(XYPos.zero(), max_coord, max_coord)
