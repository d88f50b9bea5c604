"""
Schematic sheet model: symbols, ports, wires and the sheet aggregate.

Usage:
    from sheet_beautify.sheet import SheetModel, ComponentType, ComponentKind

    sheet = SheetModel()
"""

from .components import (
    GRID,
    ComponentKind,
    ComponentType,
    CustomComponentType,
    SymbolLayout,
)
from .model import DEFAULT_MAX_COORD, SheetModel, labels_equal
from .port import Port
from .symbol import Symbol
from .types import Edge, FlipType, Orientation, PortType, Rotation
from .wire import Segment, Wire

__all__ = [
    "GRID",
    "ComponentKind",
    "ComponentType",
    "CustomComponentType",
    "SymbolLayout",
    "DEFAULT_MAX_COORD",
    "SheetModel",
    "labels_equal",
    "Port",
    "Symbol",
    "Edge",
    "FlipType",
    "Orientation",
    "PortType",
    "Rotation",
    "Segment",
    "Wire",
]
