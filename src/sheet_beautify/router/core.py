"""
Routing adapter and the reference orthogonal router.

The beautifier never computes wire geometry itself; it asks a :class:`Router`
for a route after every geometric change.  Any object with the three methods
of the protocol can be plugged in.

:class:`ManhattanRouter` is the reference implementation.  Every wire leaves
its source port with a stub of ``nub_length`` along the port's outward edge
direction and enters the target port with a stub along the target's outward
direction.  Between the stubs:

* ports on the same axis (LEFT/RIGHT to LEFT/RIGHT, TOP/BOTTOM to TOP/BOTTOM)
  are joined by a 7-segment S-route whose crossing leg sits half way between
  the stubs,
* perpendicular ports are joined by a 6-segment L-route.

Zero-length segments keep the axis alternation, so two facing ports that are
aligned produce one visible segment and a misalignment shows up as the middle
vector of a 3-visible-segment wire.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from ..exceptions import RoutingError
from ..geometry import XYPos
from ..sheet import Orientation, SheetModel, Wire
from .separation import separate_crossing_legs

logger = logging.getLogger(__name__)

DEFAULT_NUB_LENGTH = 8.0
DEFAULT_SEPARATION = 6.0


class Router(Protocol):
    """What the beautifier needs from a wire router."""

    def route(self, sheet: SheetModel, wire: Wire) -> Wire:
        """Return *wire* with segments fitted to the current symbol geometry."""
        ...

    def route_all(
        self, sheet: SheetModel, symbol_ids: Iterable[str], displacement: XYPos
    ) -> SheetModel:
        """Reroute every wire attached to the given symbols."""
        ...

    def separate(self, sheet: SheetModel, wire_ids: Optional[Iterable[str]] = None) -> SheetModel:
        """Space out overlapping parallel segments of different nets."""
        ...


def _along(pos: XYPos, orientation: Orientation) -> float:
    return pos.x if orientation is Orientation.HORIZONTAL else pos.y


class ManhattanRouter:
    """Deterministic orthogonal router.

    Args:
        nub_length: Length of the stub leaving and entering each port.
        separation: Spacing applied between overlapping crossing legs.

    Example::

        router = ManhattanRouter()
        wire = router.route(sheet, sheet.wires[wire_id])
    """

    def __init__(
        self,
        nub_length: float = DEFAULT_NUB_LENGTH,
        separation: float = DEFAULT_SEPARATION,
    ):
        if nub_length < 0:
            raise ValueError(f"nub_length must be non-negative, got {nub_length}")
        if separation <= 0:
            raise ValueError(f"separation must be positive, got {separation}")
        self.nub_length = nub_length
        self.separation = separation

    def __repr__(self) -> str:
        return f"ManhattanRouter(nub_length={self.nub_length}, separation={self.separation})"

    def route(self, sheet: SheetModel, wire: Wire) -> Wire:
        try:
            src_sym = sheet.symbols[wire.source_symbol]
            tgt_sym = sheet.symbols[wire.target_symbol]
            start = src_sym.port_position(wire.source_port)
            end = tgt_sym.port_position(wire.target_port)
            src_edge = src_sym.port_edge(wire.source_port)
            tgt_edge = tgt_sym.port_edge(wire.target_port)
        except KeyError as e:
            raise RoutingError(
                f"Cannot route wire {wire.id}",
                context={"wire": wire.id, "missing": str(e)},
                suggestions=["Check that both end symbols are still on the sheet"],
            ) from e

        nub = self.nub_length
        axis = src_edge.axis
        cross = axis.perpendicular
        ds = src_edge.direction
        dt = tgt_edge.direction
        p1 = start + ds * nub
        p2 = end + dt * nub
        delta = p2 - p1
        d_axis = _along(delta, axis)
        d_cross = _along(delta, cross)

        if tgt_edge.axis is axis:
            lengths = [
                nub * _along(ds, axis),
                0.0,
                d_axis / 2,
                d_cross,
                d_axis / 2,
                0.0,
                -nub * _along(dt, axis),
            ]
        else:
            lengths = [
                nub * _along(ds, axis),
                0.0,
                d_axis,
                d_cross,
                0.0,
                -nub * _along(dt, cross),
            ]
        return wire.with_route(start, axis, lengths)

    def route_all(
        self,
        sheet: SheetModel,
        symbol_ids: Iterable[str],
        displacement: XYPos = XYPos.zero(),
    ) -> SheetModel:
        # Full reroute; the displacement hint is not needed by this router.
        ids = sorted(set(symbol_ids))
        # A wire between two moved symbols is routed once.
        affected = {wire.id: wire for sid in ids for wire in sheet.wires_of_symbol(sid)}
        logger.debug("Rerouting %d wires for symbols %s", len(affected), ids)
        return sheet.with_wires(self.route(sheet, wire) for wire in affected.values())

    def separate(self, sheet: SheetModel, wire_ids: Optional[Iterable[str]] = None) -> SheetModel:
        ids = sorted(sheet.wires) if wire_ids is None else sorted(set(wire_ids))
        wires = [sheet.wires[wire_id] for wire_id in ids]
        return sheet.with_wires(separate_crossing_legs(wires, self.separation))
