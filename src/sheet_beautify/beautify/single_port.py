"""
Phase 1: single-port alignment.

Symbols with exactly one port (input and output stubs, mostly) can be moved
freely to straighten the wire they hang on.  For each such symbol whose
wires are all bent, the wire with the smallest jog is chosen and the symbol
is moved by that jog.  If the symbol's port faces the same way as the port at
the far end, it is first turned round so the two ports face each other.
"""

from __future__ import annotations

import logging

from ..geometry import XYPos
from ..router import Router
from ..segments import is_straight, is_straightening_candidate, middle_offset
from ..sheet import Rotation, SheetModel
from .helpers import signed_offset, try_commit

logger = logging.getLogger(__name__)


def _align_symbol(
    sheet: SheetModel, symbol_id: str, router: Router, reject_out_of_bounds: bool
) -> SheetModel:
    symbol = sheet.symbols[symbol_id]
    port = symbol.ports[0]
    wires = sheet.wires_of_port(port.id)
    if not wires or any(is_straight(w.id, sheet) for w in wires):
        return sheet
    candidates = [w for w in wires if is_straightening_candidate(w.id, sheet)]
    if not candidates:
        return sheet
    # min() keeps the first wire on ties
    chosen = min(candidates, key=lambda w: middle_offset(w.id, sheet).manhattan())

    candidate = sheet
    far_port = sheet.far_port(chosen, port.id)
    far_edge = sheet.symbol_of_port(far_port).port_orientations.get(far_port)
    own_edge = symbol.port_orientations.get(port.id)
    if own_edge is not None and own_edge is far_edge:
        logger.debug("Turning %s to face %s", symbol.label, far_port)
        candidate = candidate.with_symbol(symbol.rotated(Rotation.DEG180))
        candidate = router.route_all(candidate, [symbol_id], XYPos.zero())

    turned = candidate.symbols[symbol_id]
    offset = middle_offset(chosen.id, candidate)
    delta = signed_offset(offset, moves_target=chosen.target_port == port.id)
    candidate = candidate.with_symbol(turned.moved(delta))

    result, accepted = try_commit(sheet, candidate, symbol_id, reject_out_of_bounds)
    if accepted:
        logger.debug("Moved %s by %s", symbol.label, delta)
        result = router.route_all(result, [symbol_id], delta)
    return result


def align_single_port_symbols(
    sheet: SheetModel, router: Router, reject_out_of_bounds: bool = True
) -> SheetModel:
    """Straighten wires by moving symbols that have a single port.

    Symbols are visited in sheet order.  An edit that would overlap another
    symbol (or leave the sheet) is rolled back, rotation included.
    """
    single_port = [sid for sid, sym in sheet.symbols.items() if sym.port_count == 1]
    logger.info("Single-port alignment: %d candidate symbols", len(single_port))
    for symbol_id in single_port:
        sheet = _align_symbol(sheet, symbol_id, router, reject_out_of_bounds)
    return router.separate(sheet)
