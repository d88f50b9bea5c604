"""
Symbol Model

A placed component with position, rotation, flip and scale.

Geometry conventions:

* ``pos`` is the top-left corner of the rotated outline.
* The symbol's transform is "flip in the component frame, then rotate
  clockwise"; :meth:`Symbol.flipped` takes a flip in *sheet* terms and folds
  it into that canonical form.
* ``h_scale`` stretches the unrotated width, ``v_scale`` the unrotated height.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from ..geometry import BoundingBox, XYPos
from .components import ComponentType
from .port import Port
from .types import Edge, FlipType, PortType, Rotation


def _make_ports(symbol_id: str, port_type: PortType, edges: tuple[Edge, ...]) -> tuple[Port, ...]:
    """Create ports for one direction, numbering slots per edge."""
    totals = {edge: edges.count(edge) for edge in set(edges)}
    seen: dict[Edge, int] = {}
    ports = []
    for index, edge in enumerate(edges):
        slot = seen.get(edge, 0)
        seen[edge] = slot + 1
        ports.append(
            Port(
                id=Port.make_id(symbol_id, port_type, index),
                symbol_id=symbol_id,
                port_type=port_type,
                index=index,
                base_edge=edge,
                slot=slot,
                slots=totals[edge],
            )
        )
    return tuple(ports)


@dataclass(frozen=True)
class Symbol:
    """A component placed on the sheet."""

    id: str
    label: str
    component: ComponentType
    pos: XYPos
    rotation: Rotation = Rotation.DEG0
    flip: FlipType = FlipType.NONE
    h_scale: Optional[float] = None
    v_scale: Optional[float] = None
    reversed_inputs: bool = False
    input_ports: tuple[Port, ...] = field(default=())
    output_ports: tuple[Port, ...] = field(default=())

    @classmethod
    def create(
        cls, symbol_id: str, label: str, component: ComponentType, pos: XYPos
    ) -> Symbol:
        """Create an unrotated symbol with ports laid out for *component*."""
        layout = component.layout()
        return cls(
            id=symbol_id,
            label=label.upper(),
            component=component,
            pos=pos,
            input_ports=_make_ports(symbol_id, PortType.INPUT, layout.input_edges),
            output_ports=_make_ports(symbol_id, PortType.OUTPUT, layout.output_edges),
        )

    # ------------------------------------------------------------------
    # Ports
    # ------------------------------------------------------------------

    @property
    def ports(self) -> tuple[Port, ...]:
        return self.input_ports + self.output_ports

    @property
    def port_count(self) -> int:
        return len(self.input_ports) + len(self.output_ports)

    def has_port(self, port_id: str) -> bool:
        return any(p.id == port_id for p in self.ports)

    def port(self, port_id: str) -> Port:
        for p in self.ports:
            if p.id == port_id:
                return p
        raise KeyError(f"Port {port_id} is not on symbol {self.label}")

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def local_size(self) -> XYPos:
        """Scaled outline size before rotation."""
        layout = self.component.layout()
        return XYPos(layout.width * (self.h_scale or 1.0), layout.height * (self.v_scale or 1.0))

    @property
    def scaled_diagonal(self) -> XYPos:
        """Outline size on the sheet (width and height swap at 90/270)."""
        size = self.local_size
        if self.rotation.swaps_axes:
            return XYPos(size.y, size.x)
        return size

    @property
    def bounding_box(self) -> BoundingBox:
        diag = self.scaled_diagonal
        return BoundingBox(self.pos, diag.x, diag.y)

    @property
    def centre(self) -> XYPos:
        return self.pos + self.scaled_diagonal * 0.5

    def _local_port_position(self, port: Port) -> XYPos:
        size = self.local_size
        slot = port.slot
        if self.reversed_inputs and port.port_type is PortType.INPUT and port.base_edge is Edge.LEFT:
            slot = port.slots - 1 - slot
        fraction = (slot + 1) / (port.slots + 1)
        if port.base_edge is Edge.LEFT:
            return XYPos(0.0, size.y * fraction)
        if port.base_edge is Edge.RIGHT:
            return XYPos(size.x, size.y * fraction)
        if port.base_edge is Edge.TOP:
            return XYPos(size.x * fraction, 0.0)
        return XYPos(size.x * fraction, size.y)

    def _transform(self, point: XYPos) -> XYPos:
        """Map a point from the unrotated frame to an offset from ``pos``."""
        size = self.local_size
        w, h = size.x, size.y
        x, y = point.x, point.y
        if self.flip is FlipType.HORIZONTAL:
            x = w - x
        elif self.flip is FlipType.VERTICAL:
            y = h - y
        for _ in range(self.rotation.quarter_turns):
            x, y = h - y, x
            w, h = h, w
        return XYPos(x, y)

    def port_offset(self, port_id: str) -> XYPos:
        """Port position relative to the symbol's top-left corner."""
        return self._transform(self._local_port_position(self.port(port_id)))

    def port_position(self, port_id: str) -> XYPos:
        """Absolute port position on the sheet."""
        return self.pos + self.port_offset(port_id)

    def port_edge(self, port_id: str) -> Edge:
        """The edge the port is currently drawn on (its orientation)."""
        port = self.port(port_id)
        return port.base_edge.flipped(self.flip).rotated_cw(self.rotation.quarter_turns)

    @property
    def port_orientations(self) -> dict[str, Edge]:
        """Current edge of every port, keyed by port id."""
        return {p.id: self.port_edge(p.id) for p in self.ports}

    # ------------------------------------------------------------------
    # Transforms (each returns a new Symbol)
    # ------------------------------------------------------------------

    def moved(self, delta: XYPos) -> Symbol:
        return replace(self, pos=self.pos + delta)

    def moved_to(self, pos: XYPos) -> Symbol:
        return replace(self, pos=pos)

    def rotated(self, rotation: Rotation) -> Symbol:
        """Rotate clockwise about the symbol centre."""
        centre = self.centre
        turned = replace(self, rotation=self.rotation + rotation)
        return turned.moved_to(centre - turned.scaled_diagonal * 0.5)

    def flipped(self, flip: FlipType) -> Symbol:
        """Mirror the symbol on the sheet about its centre."""
        if flip is FlipType.NONE:
            return self
        # A sheet-frame mirror of a quarter-turned symbol is the other
        # mirror in the component frame.
        if self.rotation.swaps_axes:
            flip = FlipType.VERTICAL if flip is FlipType.HORIZONTAL else FlipType.HORIZONTAL
        if self.flip is FlipType.NONE:
            return replace(self, flip=flip)
        if self.flip is flip:
            return replace(self, flip=FlipType.NONE)
        # Horizontal and vertical mirrors compose to a half turn
        return replace(self, flip=FlipType.NONE, rotation=self.rotation + Rotation.DEG180)

    def scaled(self, v_scale: Optional[float] = None, h_scale: Optional[float] = None) -> Symbol:
        """Set scale factors, keeping the top-left corner fixed."""
        return replace(self, v_scale=v_scale, h_scale=h_scale)

    def with_reversed_inputs(self, reversed_inputs: bool) -> Symbol:
        return replace(self, reversed_inputs=reversed_inputs)
