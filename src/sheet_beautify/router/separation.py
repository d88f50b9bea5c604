"""Wire separation for S-routed wires.

An S-route (7 segments) has a single *crossing leg*, segment 3, running
perpendicular to the wire's initial orientation.  When two wires of different
nets put their crossing legs on the same coordinate with overlapping spans,
they are drawn on top of each other.  Separation shifts later legs sideways by
whole multiples of the separation distance, adjusting segments 2 and 4 so the
wire's end points stay fixed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..geometry import EPSILON, XYPos
from ..sheet import Orientation, Wire

logger = logging.getLogger(__name__)

S_ROUTE_SEGMENTS = 7
MAX_SHIFTS = 16


@dataclass(frozen=True)
class CrossingLeg:
    """The crossing leg of one wire: its coordinate and the span it covers."""

    wire_id: str
    source_port: str
    orientation: Orientation  # axis of the leg itself
    coord: float
    low: float
    high: float

    def clashes_with(self, other: CrossingLeg) -> bool:
        return (
            self.orientation is other.orientation
            and self.source_port != other.source_port
            and abs(self.coord - other.coord) < EPSILON
            and self.low < other.high
            and other.low < self.high
        )


def _along(pos: XYPos, orientation: Orientation) -> float:
    return pos.x if orientation is Orientation.HORIZONTAL else pos.y


def crossing_leg(wire: Wire, shift: float = 0.0) -> CrossingLeg | None:
    """The crossing leg of an S-routed wire, or None for other wires."""
    lengths = wire.lengths
    if len(lengths) != S_ROUTE_SEGMENTS or abs(lengths[3]) < EPSILON:
        return None
    axis = wire.initial_orientation
    cross = axis.perpendicular
    coord = _along(wire.start_pos, axis) + lengths[0] + lengths[2] + shift
    begin = _along(wire.start_pos, cross) + lengths[1]
    end = begin + lengths[3]
    return CrossingLeg(wire.id, wire.source_port, cross, coord, min(begin, end), max(begin, end))


def separate_crossing_legs(wires: list[Wire], separation: float) -> list[Wire]:
    """Shift clashing crossing legs apart, processing wires in the given order."""
    placed: list[CrossingLeg] = []
    result = []
    for wire in wires:
        leg = crossing_leg(wire)
        if leg is None:
            result.append(wire)
            continue
        shift = 0.0
        for _ in range(MAX_SHIFTS):
            if not any(leg.clashes_with(other) for other in placed):
                break
            shift += separation
            leg = crossing_leg(wire, shift)
        else:
            logger.warning("Could not separate crossing leg of wire %s", wire.id)
        placed.append(leg)
        if shift:
            logger.debug("Shifted crossing leg of %s by %.1f", wire.id, shift)
            lengths = wire.lengths
            lengths[2] += shift
            lengths[4] -= shift
            wire = wire.with_route(wire.start_pos, wire.initial_orientation, lengths)
        result.append(wire)
    return result
