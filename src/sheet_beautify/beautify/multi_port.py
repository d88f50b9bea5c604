"""
Phase 3: multi-port alignment.

Symbols with several inputs and a single output are dragged, together with
the symbols feeding their inputs, so that the output wire straightens.
Rightmost symbols go first so moves ripple leftwards through the circuit.
"""

from __future__ import annotations

import logging

from ..router import Router
from ..segments import middle_offset
from ..sheet import SheetModel
from .helpers import signed_offset, try_commit

logger = logging.getLogger(__name__)


def input_source_symbols(sheet: SheetModel, symbol_id: str) -> list[str]:
    """Distinct symbols driving an input of *symbol_id*, in port order."""
    sources: list[str] = []
    for port in sheet.symbols[symbol_id].input_ports:
        for wire in sheet.wires_of_port(port.id):
            if wire.target_port == port.id and wire.source_symbol not in sources:
                sources.append(wire.source_symbol)
    return [s for s in sources if s != symbol_id]


def align_multi_port_symbols(
    sheet: SheetModel, router: Router, reject_out_of_bounds: bool = True
) -> SheetModel:
    """Move multi-input symbols and their drivers to straighten output wires.

    Each symbol of a group is committed on its own: a move that overlaps is
    discarded for that symbol only.
    """
    targets = [
        sym
        for sym in sheet.symbols.values()
        if len(sym.input_ports) > 1 and len(sym.output_ports) == 1
    ]
    targets.sort(key=lambda sym: sym.pos.x, reverse=True)
    logger.info("Multi-port alignment: %d candidate symbols", len(targets))

    for target in targets:
        symbol = sheet.symbols[target.id]
        out_port = symbol.output_ports[0]
        out_wires = [w for w in sheet.wires_of_port(out_port.id) if w.source_port == out_port.id]
        if not out_wires:
            continue
        offset = signed_offset(middle_offset(out_wires[0].id, sheet), moves_target=False)
        if offset.is_zero():
            continue
        group = [symbol.id] + input_source_symbols(sheet, symbol.id)
        for symbol_id in group:
            moved = sheet.symbols[symbol_id].moved(offset)
            sheet, accepted = try_commit(
                sheet, sheet.with_symbol(moved), symbol_id, reject_out_of_bounds
            )
            if accepted:
                logger.debug("Moved %s by %s", moved.label, offset)
                sheet = router.route_all(sheet, [symbol_id], offset)
    return router.separate(sheet)
