"""
Port Model

Represents a connection point on a symbol.
"""

from dataclasses import dataclass

from .types import Edge, PortType


@dataclass(frozen=True)
class Port:
    """A symbol port.

    ``base_edge`` and ``slot``/``slots`` describe where the port sits in the
    unrotated, unflipped symbol layout; the port's orientation on the sheet is
    derived from its symbol's rotation and flip (see ``Symbol.port_edge``).
    """

    id: str
    symbol_id: str
    port_type: PortType
    index: int
    base_edge: Edge
    slot: int = 0  # Position among the ports sharing base_edge
    slots: int = 1  # Number of ports sharing base_edge

    @staticmethod
    def make_id(symbol_id: str, port_type: PortType, index: int) -> str:
        prefix = "in" if port_type is PortType.INPUT else "out"
        return f"{symbol_id}.{prefix}{index}"
