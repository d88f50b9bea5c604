"""
Wire Model

A routed connection from an output port to an input port.

A wire stores only segment *lengths*.  The axis of each segment is implicit:
even-indexed segments run along ``initial_orientation`` and odd-indexed
segments along the perpendicular axis.  The sign of a length gives the
direction along that axis.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..geometry import XYPos
from .types import Orientation


@dataclass(frozen=True)
class Segment:
    """One straight run of a wire."""

    index: int
    length: float


@dataclass(frozen=True)
class Wire:
    """A wire from ``source_port`` (an output) to ``target_port`` (an input)."""

    id: str
    source_port: str
    target_port: str
    source_symbol: str
    target_symbol: str
    start_pos: XYPos = field(default_factory=XYPos.zero)
    initial_orientation: Orientation = Orientation.HORIZONTAL
    segments: tuple[Segment, ...] = ()

    @staticmethod
    def make_id(source_port: str, target_port: str) -> str:
        return f"W[{source_port}->{target_port}]"

    @property
    def endpoints(self) -> tuple[str, str]:
        return (self.source_port, self.target_port)

    def with_route(
        self, start_pos: XYPos, initial_orientation: Orientation, lengths: list[float]
    ) -> Wire:
        """Return the wire with a new segment list."""
        segments = tuple(Segment(i, length) for i, length in enumerate(lengths))
        return replace(
            self,
            start_pos=start_pos,
            initial_orientation=initial_orientation,
            segments=segments,
        )

    @property
    def lengths(self) -> list[float]:
        return [seg.length for seg in self.segments]
