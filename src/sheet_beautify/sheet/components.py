"""Component kinds and their unrotated symbol layouts.

Each :class:`ComponentType` knows its outline size and which edge every
input and output port is drawn on before any rotation or flip:

* data inputs on the LEFT edge, top to bottom in port order
* select inputs (mux/demux) on the BOTTOM edge
* outputs on the RIGHT edge, top to bottom in port order

Port positions along an edge are evenly spaced, so the pitch between
adjacent ports is ``edge_length / (ports_on_edge + 1)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .types import Edge

GRID = 30.0
"""Basic layout unit; symbol outlines are multiples of it."""


class ComponentKind(Enum):
    """Kinds of placeable components."""

    INPUT = "input"
    OUTPUT = "output"
    NOT = "not"
    AND = "and"
    OR = "or"
    XOR = "xor"
    NAND = "nand"
    NOR = "nor"
    XNOR = "xnor"
    MUX2 = "mux2"
    MUX4 = "mux4"
    DEMUX2 = "demux2"
    DEMUX4 = "demux4"
    DFF = "dff"
    CUSTOM = "custom"

    @property
    def is_gate(self) -> bool:
        return self in GATE_KINDS


GATE_KINDS = frozenset(
    {
        ComponentKind.AND,
        ComponentKind.OR,
        ComponentKind.XOR,
        ComponentKind.NAND,
        ComponentKind.NOR,
        ComponentKind.XNOR,
    }
)


@dataclass(frozen=True)
class CustomComponentType:
    """A block whose ports mirror the inputs/outputs of another sheet."""

    name: str
    input_labels: tuple[str, ...] = ()
    output_labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class SymbolLayout:
    """Unrotated outline size and port edges of a component."""

    width: float
    height: float
    input_edges: tuple[Edge, ...] = ()
    output_edges: tuple[Edge, ...] = ()


@dataclass(frozen=True)
class ComponentType:
    """A component kind together with its parameters.

    Use the constructors rather than building instances directly::

        ComponentType.gate(ComponentKind.AND, 2)
        ComponentType.mux4()
        ComponentType.custom(CustomComponentType("ALU", ("A", "B"), ("Y",)))
    """

    kind: ComponentKind
    num_inputs: int = 0
    custom: CustomComponentType | None = field(default=None)

    @classmethod
    def input(cls) -> ComponentType:
        return cls(ComponentKind.INPUT)

    @classmethod
    def output(cls) -> ComponentType:
        return cls(ComponentKind.OUTPUT)

    @classmethod
    def not_gate(cls) -> ComponentType:
        return cls(ComponentKind.NOT, 1)

    @classmethod
    def gate(cls, kind: ComponentKind, num_inputs: int = 2) -> ComponentType:
        if not kind.is_gate:
            raise ValueError(f"{kind.value} is not a gate kind")
        if num_inputs < 2:
            raise ValueError(f"Gates need at least 2 inputs, got {num_inputs}")
        return cls(kind, num_inputs)

    @classmethod
    def mux2(cls) -> ComponentType:
        return cls(ComponentKind.MUX2, 3)

    @classmethod
    def mux4(cls) -> ComponentType:
        return cls(ComponentKind.MUX4, 5)

    @classmethod
    def demux2(cls) -> ComponentType:
        return cls(ComponentKind.DEMUX2, 2)

    @classmethod
    def demux4(cls) -> ComponentType:
        return cls(ComponentKind.DEMUX4, 2)

    @classmethod
    def dff(cls) -> ComponentType:
        return cls(ComponentKind.DFF, 1)

    @classmethod
    def from_custom(cls, custom: CustomComponentType) -> ComponentType:
        return cls(ComponentKind.CUSTOM, len(custom.input_labels), custom)

    def layout(self) -> SymbolLayout:
        """Return the unrotated outline and port edges for this component."""
        kind = self.kind
        if kind is ComponentKind.INPUT:
            return SymbolLayout(2 * GRID, GRID, (), (Edge.RIGHT,))
        if kind is ComponentKind.OUTPUT:
            return SymbolLayout(2 * GRID, GRID, (Edge.LEFT,), ())
        if kind is ComponentKind.NOT:
            return SymbolLayout(GRID, GRID, (Edge.LEFT,), (Edge.RIGHT,))
        if kind.is_gate:
            n = self.num_inputs
            return SymbolLayout(2 * GRID, GRID * max(2, n), (Edge.LEFT,) * n, (Edge.RIGHT,))
        if kind is ComponentKind.MUX2:
            return SymbolLayout(2 * GRID, 3 * GRID, (Edge.LEFT, Edge.LEFT, Edge.BOTTOM), (Edge.RIGHT,))
        if kind is ComponentKind.MUX4:
            return SymbolLayout(2 * GRID, 5 * GRID, (Edge.LEFT,) * 4 + (Edge.BOTTOM,), (Edge.RIGHT,))
        if kind is ComponentKind.DEMUX2:
            return SymbolLayout(2 * GRID, 3 * GRID, (Edge.LEFT, Edge.BOTTOM), (Edge.RIGHT,) * 2)
        if kind is ComponentKind.DEMUX4:
            return SymbolLayout(2 * GRID, 5 * GRID, (Edge.LEFT, Edge.BOTTOM), (Edge.RIGHT,) * 4)
        if kind is ComponentKind.DFF:
            return SymbolLayout(3 * GRID, 2 * GRID, (Edge.LEFT,), (Edge.RIGHT,))
        if kind is ComponentKind.CUSTOM:
            assert self.custom is not None
            n_in = len(self.custom.input_labels)
            n_out = len(self.custom.output_labels)
            return SymbolLayout(
                4 * GRID,
                GRID * (max(n_in, n_out, 1) + 1),
                (Edge.LEFT,) * n_in,
                (Edge.RIGHT,) * n_out,
            )
        raise ValueError(f"No layout for component kind {kind}")

    @property
    def description(self) -> str:
        if self.kind is ComponentKind.CUSTOM and self.custom is not None:
            return f"custom:{self.custom.name}"
        if self.kind.is_gate:
            return f"{self.kind.value}{self.num_inputs}"
        return self.kind.value
