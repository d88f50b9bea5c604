"""
Sheet Model

The aggregate root holding every symbol and wire of a schematic sheet.

SheetModel is a frozen value: every edit returns a new model whose maps are
fresh copies, so callers can keep the previous model around and "undo" an
edit simply by continuing with the old value.  The bounding-box map is
derived data and is only brought up to date by
:meth:`SheetModel.recompute_bounding_boxes`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from ..geometry import BoundingBox, sheet_box
from .port import Port
from .symbol import Symbol
from .wire import Wire

DEFAULT_MAX_COORD = 4000.0
"""Default largest allowed X or Y coordinate on a sheet."""


def labels_equal(label_a: str, label_b: str) -> bool:
    """Labels compare case-insensitively: "g1" == "G1"."""
    return label_a.upper() == label_b.upper()


@dataclass(frozen=True)
class SheetModel:
    """Symbols, wires and symbol bounding boxes of one sheet."""

    symbols: dict[str, Symbol] = field(default_factory=dict)
    wires: dict[str, Wire] = field(default_factory=dict)
    bounding_boxes: dict[str, BoundingBox] = field(default_factory=dict)
    max_coord: float = DEFAULT_MAX_COORD
    serial: int = 0  # Source of deterministic symbol ids

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def next_symbol_id(self) -> tuple[str, SheetModel]:
        """Allocate a fresh symbol id."""
        serial = self.serial + 1
        return f"C{serial}", replace(self, serial=serial)

    def with_symbol(self, symbol: Symbol) -> SheetModel:
        symbols = dict(self.symbols)
        symbols[symbol.id] = symbol
        return replace(self, symbols=symbols)

    def with_symbols(self, symbols: Iterable[Symbol]) -> SheetModel:
        updated = dict(self.symbols)
        for symbol in symbols:
            updated[symbol.id] = symbol
        return replace(self, symbols=updated)

    def with_wire(self, wire: Wire) -> SheetModel:
        wires = dict(self.wires)
        wires[wire.id] = wire
        return replace(self, wires=wires)

    def with_wires(self, wires: Iterable[Wire]) -> SheetModel:
        updated = dict(self.wires)
        for wire in wires:
            updated[wire.id] = wire
        return replace(self, wires=updated)

    def recompute_bounding_boxes(self) -> SheetModel:
        boxes = {sym_id: sym.bounding_box for sym_id, sym in self.symbols.items()}
        return replace(self, bounding_boxes=boxes)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_symbol(self, label: str) -> Optional[Symbol]:
        """Find a symbol by case-insensitive label."""
        for sym in self.symbols.values():
            if labels_equal(sym.label, label):
                return sym
        return None

    def symbol_of_port(self, port_id: str) -> Symbol:
        symbol_id = port_id.rsplit(".", 1)[0]
        sym = self.symbols.get(symbol_id)
        if sym is None or not sym.has_port(port_id):
            raise KeyError(f"No symbol owns port {port_id}")
        return sym

    def port(self, port_id: str) -> Port:
        return self.symbol_of_port(port_id).port(port_id)

    def wires_of_port(self, port_id: str) -> list[Wire]:
        return [w for w in self.wires.values() if port_id in w.endpoints]

    def wires_of_symbol(self, symbol_id: str) -> list[Wire]:
        return [
            w
            for w in self.wires.values()
            if w.source_symbol == symbol_id or w.target_symbol == symbol_id
        ]

    def far_port(self, wire: Wire, port_id: str) -> str:
        """The port at the other end of *wire* from *port_id*."""
        return wire.target_port if wire.source_port == port_id else wire.source_port

    def symbol_overlaps(self, symbol_id: str) -> bool:
        """Check the symbol's box against every other symbol's box."""
        box = self.bounding_boxes[symbol_id]
        return any(
            box.overlaps(other)
            for other_id, other in self.bounding_boxes.items()
            if other_id != symbol_id
        )

    def symbol_in_bounds(self, symbol_id: str) -> bool:
        return sheet_box(self.max_coord).contains_box(self.bounding_boxes[symbol_id])

    def overlapping_pairs(self) -> list[tuple[str, str]]:
        """All pairs of symbol ids whose boxes overlap (O(n^2))."""
        items = list(self.bounding_boxes.items())
        pairs = []
        for i, (id_a, box_a) in enumerate(items):
            for id_b, box_b in items[i + 1 :]:
                if box_a.overlaps(box_b):
                    pairs.append((id_a, id_b))
        return pairs
