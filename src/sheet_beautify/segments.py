"""
Wire-segment analysis.

A routed wire is stored as a list of segment lengths along alternating axes.
Zero-length segments are used by routers to keep that alternation intact, so
what a user actually *sees* is the list after zero-length interior segments
have been folded into their neighbours.  This module computes that visible
form and classifies wires by it:

    >>> from sheet_beautify.segments import classify_wire, WireShape
    >>> classify_wire(wire_id, sheet) is WireShape.STRAIGHT
    True
"""

from __future__ import annotations

import logging
from enum import Enum

from .geometry import EPSILON, XYPos
from .sheet import Orientation, SheetModel, Wire
from .sheet.wire import Segment

logger = logging.getLogger(__name__)


class WireShape(Enum):
    """Visible shape of a wire."""

    STRAIGHT = "straight"  # 1 visible segment
    NEAR_STRAIGHT = "near_straight"  # 3 visible segments, one jog
    OTHER = "other"


def segment_vector(wire: Wire, segment: Segment) -> XYPos:
    """Vector of one segment.

    Even-indexed segments run along the wire's initial orientation, odd ones
    along the perpendicular axis.
    """
    orientation = wire.initial_orientation
    if segment.index % 2 == 1:
        orientation = orientation.perpendicular
    if orientation is Orientation.HORIZONTAL:
        return XYPos(segment.length, 0.0)
    return XYPos(0.0, segment.length)


def coalesce(vectors: list[XYPos], eps: float = EPSILON) -> list[XYPos]:
    """Fold every zero-length interior vector into its neighbours.

    A zero vector at index ``i`` (``0 < i < len - 1``) is removed together
    with its neighbours, which are replaced by their sum.  Repeats until no
    interior vector is zero.  The first and last vectors are never removed
    on their own account.
    """
    result = list(vectors)
    while True:
        zero_index = next(
            (i for i in range(1, len(result) - 1) if result[i].is_zero(eps)),
            None,
        )
        if zero_index is None:
            return result
        merged = result[zero_index - 1] + result[zero_index + 1]
        result = result[: zero_index - 1] + [merged] + result[zero_index + 2 :]


def visible_segments(wire_id: str, sheet: SheetModel) -> list[XYPos]:
    """Visible segment vectors of a wire, source to target."""
    wire = sheet.wires[wire_id]
    return coalesce([segment_vector(wire, seg) for seg in wire.segments])


def classify_wire(wire_id: str, sheet: SheetModel) -> WireShape:
    count = len(visible_segments(wire_id, sheet))
    if count == 1:
        return WireShape.STRAIGHT
    if count == 3:
        return WireShape.NEAR_STRAIGHT
    return WireShape.OTHER


def is_straight(wire_id: str, sheet: SheetModel) -> bool:
    return classify_wire(wire_id, sheet) is WireShape.STRAIGHT


def is_straightening_candidate(wire_id: str, sheet: SheetModel) -> bool:
    """True when the wire has exactly one jog that a move could remove."""
    return classify_wire(wire_id, sheet) is WireShape.NEAR_STRAIGHT


def middle_offset(wire_id: str, sheet: SheetModel) -> XYPos:
    """Middle vector of a 3-segment wire, zero for any other shape."""
    visible = visible_segments(wire_id, sheet)
    if len(visible) == 3:
        return visible[1]
    return XYPos.zero()


def end_of_wire(wire: Wire) -> XYPos:
    """Absolute position of the wire's last corner (its target end)."""
    end = wire.start_pos
    for seg in wire.segments:
        end = end + segment_vector(wire, seg)
    return end


def wire_polyline(wire: Wire) -> list[XYPos]:
    """Absolute corner points of the visible wire, start and end included."""
    points = [wire.start_pos]
    for vec in coalesce([segment_vector(wire, seg) for seg in wire.segments]):
        points.append(points[-1] + vec)
    return points


def straight_wire_count(sheet: SheetModel) -> int:
    """Number of wires on the sheet with a single visible segment."""
    return sum(1 for wire_id in sheet.wires if is_straight(wire_id, sheet))
