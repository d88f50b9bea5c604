"""
Phase 2: paired scale alignment.

When two symbols are joined by several wires, e.g. a demux feeding a mux,
the wires fan out unless the port pitch on both ends matches.  The target
symbol is stretched vertically so its input pitch equals the source's output
pitch.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from ..geometry import EPSILON, XYPos
from ..router import Router
from ..sheet import SheetModel, Symbol, Wire
from .helpers import try_commit

logger = logging.getLogger(__name__)


def symbol_pair_wires(sheet: SheetModel) -> dict[tuple[str, str], list[Wire]]:
    """Group wires by (source symbol, target symbol)."""
    pairs: dict[tuple[str, str], list[Wire]] = defaultdict(list)
    for wire in sheet.wires.values():
        pairs[(wire.source_symbol, wire.target_symbol)].append(wire)
    return dict(pairs)


def port_pitch(symbol: Symbol, port_ids: list[str]) -> float | None:
    """Distance between the first two ports, or None if there is no pitch."""
    if len(port_ids) < 2:
        return None
    delta = symbol.port_position(port_ids[1]) - symbol.port_position(port_ids[0])
    pitch = max(abs(delta.x), abs(delta.y))
    if pitch < EPSILON:
        return None
    return pitch


def port_ratio(source: Symbol, target: Symbol) -> float:
    """Output pitch of *source* over input pitch of *target*, 1.0 if undefined."""
    out_pitch = port_pitch(source, [p.id for p in source.output_ports])
    in_pitch = port_pitch(target, [p.id for p in target.input_ports])
    if out_pitch is None or in_pitch is None:
        logger.warning(
            "Cannot compare port pitch of %s and %s, keeping scale",
            source.label,
            target.label,
        )
        return 1.0
    return out_pitch / in_pitch


def scale_align_symbol_pairs(
    sheet: SheetModel, router: Router, reject_out_of_bounds: bool = True
) -> SheetModel:
    """Rescale target symbols so multi-wire connections run parallel."""
    for (source_id, target_id), wires in symbol_pair_wires(sheet).items():
        if len(wires) < 2 or source_id == target_id:
            continue
        source = sheet.symbols[source_id]
        target = sheet.symbols[target_id]
        ratio = port_ratio(source, target)
        if abs(ratio - 1.0) < EPSILON:
            continue
        v_scale = (target.v_scale or 1.0) * ratio
        candidate = sheet.with_symbol(target.scaled(v_scale=v_scale, h_scale=target.h_scale))
        sheet, accepted = try_commit(sheet, candidate, target_id, reject_out_of_bounds)
        if accepted:
            logger.debug("Scaled %s vertically to %.3f", target.label, v_scale)
            sheet = router.route_all(sheet, [target_id], XYPos.zero())
    return sheet
