"""
Sample circuits and sample generators for sheet property tests.

Every ``make_*`` function takes one generated sample and builds a complete,
routed sheet.  Generators of matching samples are provided alongside, e.g.
:data:`horiz_line_positions` for :func:`make_test1_circuit`.

Circuits can also be described in YAML and built with
:func:`place_components` / :func:`given_connect_components`::

    name: gate-loop
    threshold: 200
    components:
      - {label: AND1, type: and2}
      - {label: OR1, type: or2}
    connections:
      - {source: AND1, source_port: 0, target: OR1, target_port: 0}
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..builder import (
    SheetBuilder,
    get_ok_or_fail,
    place_symbol,
    place_wire,
    port_of,
    separate_all_wires,
)
from ..geometry import XYPos, euclidean_distance
from ..router import ManhattanRouter, Router
from ..sheet import (
    DEFAULT_MAX_COORD,
    ComponentKind,
    ComponentType,
    FlipType,
    Rotation,
    SheetModel,
)
from .gen import Gen, from_list, map_gen, product, xy_positions

logger = logging.getLogger(__name__)

MAX_SHEET_COORD = DEFAULT_MAX_COORD
MIDDLE_OF_SHEET = XYPos(MAX_SHEET_COORD / 2, MAX_SHEET_COORD / 2)


def diff_from_middle(diff: XYPos) -> XYPos:
    return MIDDLE_OF_SHEET + diff


# ----------------------------------------------------------------------------
# AND + DFF demo
# ----------------------------------------------------------------------------

horiz_line_positions: Gen[XYPos] = map_gen(
    lambda n: MIDDLE_OF_SHEET + XYPos(float(n), 0.0), from_list(range(-100, 101, 20))
)
"""11 equidistant points on a horizontal line through the middle of the sheet."""

vertical_line_positions: Gen[XYPos] = map_gen(
    lambda n: MIDDLE_OF_SHEET + XYPos(0.0, float(n)), from_list(range(-50, 51, 10))
)


def make_test1_circuit(and_pos: XYPos) -> SheetModel:
    """An AND gate at *and_pos* in a loop with a DFF in the middle of the sheet."""
    return get_ok_or_fail(
        SheetBuilder()
        .place_symbol("G1", ComponentType.gate(ComponentKind.AND, 2), and_pos)
        .place_symbol("FF1", ComponentType.dff(), MIDDLE_OF_SHEET)
        .place_wire(port_of("G1", 0), port_of("FF1", 0))
        .place_wire(port_of("FF1", 0), port_of("G1", 0))
        .result()
    )


# ----------------------------------------------------------------------------
# Mux flips and input swaps
# ----------------------------------------------------------------------------


@dataclass(frozen=True)
class MuxFlipSample:
    gate_flip: FlipType
    mux2_flip: FlipType
    mux2_swap: bool
    mux1_flip: FlipType
    mux1_swap: bool


def _mux_flip_samples() -> Gen[MuxFlipSample]:
    flips = from_list([FlipType.HORIZONTAL, FlipType.VERTICAL])
    swaps = from_list([True, False])
    nested = product(flips, product(flips, product(swaps, product(flips, swaps))))
    return map_gen(
        lambda s: MuxFlipSample(s[0], s[1][0], s[1][1][0], s[1][1][1][0], s[1][1][1][1]),
        nested,
    )


mux_flip_samples: Gen[MuxFlipSample] = _mux_flip_samples()


def make_mux_flip_circuit(sample: MuxFlipSample) -> SheetModel:
    """Two muxes feeding an AND gate, with flips and swapped mux inputs."""
    mid = MIDDLE_OF_SHEET
    router = ManhattanRouter()
    builder = (
        SheetBuilder(router=router)
        .place_symbol("MUX1", ComponentType.mux2(), mid + XYPos(-100, -100))
        .place_symbol("S1", ComponentType.input(), mid + XYPos(-100, 100))
        .place_symbol("S2", ComponentType.input(), mid + XYPos(-100, 200))
        .place_symbol("MUX2", ComponentType.mux2(), mid)
        .place_symbol("G1", ComponentType.gate(ComponentKind.AND, 2), mid + XYPos(100, -100))
        .place_wire(port_of("S1", 0), port_of("MUX2", 1))
        .place_wire(port_of("S2", 0), port_of("MUX2", 2))
        .place_wire(port_of("MUX2", 0), port_of("G1", 1))
        .place_wire(port_of("MUX1", 0), port_of("G1", 0))
        .place_wire(port_of("MUX1", 0), port_of("MUX2", 0))
        .flip_symbol("G1", sample.gate_flip)
        .flip_symbol("MUX2", sample.mux2_flip)
        .swap_mux_inputs("MUX2", sample.mux2_swap)
        .flip_symbol("MUX1", sample.mux1_flip)
        .swap_mux_inputs("MUX1", sample.mux1_swap)
    )
    sheet = get_ok_or_fail(builder.result())
    return router.route_all(sheet, list(sheet.symbols), XYPos.zero())


# ----------------------------------------------------------------------------
# Demux feeding two muxes
# ----------------------------------------------------------------------------


@dataclass(frozen=True)
class DemuxMuxSample:
    flip_mux: Optional[FlipType]
    rot_mux: Optional[Rotation]
    demux_pos: XYPos
    mux1_pos: XYPos
    mux2_pos: XYPos


def make_samples_demux_mux(limit: int = 100, step: int = 20) -> Gen[DemuxMuxSample]:
    rotations = from_list([Rotation.DEG90, Rotation.DEG270, None])
    flips = from_list([FlipType.HORIZONTAL, None])
    positions = product(xy_positions(limit, step), xy_positions(limit, step))
    nested = product(flips, product(rotations, positions))
    return map_gen(
        lambda s: DemuxMuxSample(s[0], s[1][0], s[1][1][0], s[1][1][1], s[1][1][1]),
        nested,
    )


def _rotate_and_flip(builder: SheetBuilder, label: str, rotation, flip) -> SheetBuilder:
    if rotation is not None:
        builder = builder.rotate_symbol(label, rotation)
    if flip is not None:
        builder = builder.flip_symbol(label, flip)
    return builder


def make_demux_mux_circuit(threshold: float, sample: DemuxMuxSample) -> SheetModel:
    """A 4-way demux wired port for port into two 4-way muxes."""
    mid = MIDDLE_OF_SHEET
    builder = (
        SheetBuilder()
        .place_symbol("DM1", ComponentType.demux4(), mid - XYPos(threshold, 0) + sample.demux_pos)
        .place_symbol("MUX1", ComponentType.mux4(), mid + sample.mux1_pos)
    )
    builder = _rotate_and_flip(builder, "MUX1", sample.rot_mux, sample.flip_mux)
    for k in range(4):
        builder = builder.place_wire(port_of("DM1", k), port_of("MUX1", k))
    builder = builder.place_symbol(
        "MUX2", ComponentType.mux4(), mid + XYPos(0, threshold) + sample.mux2_pos
    )
    for k in range(4):
        builder = builder.place_wire(port_of("DM1", k), port_of("MUX2", k))
    return separate_all_wires(get_ok_or_fail(builder.result()))


# ----------------------------------------------------------------------------
# Gate loop
# ----------------------------------------------------------------------------


@dataclass(frozen=True)
class GateLoopSample:
    flip_mux: Optional[FlipType]
    rot_mux: Optional[Rotation]
    and_pos: XYPos
    or_pos: XYPos
    xor_pos: XYPos
    mux_pos: XYPos


def make_samples_gate_loop(limit: int = 100, step: int = 20) -> Gen[GateLoopSample]:
    rotations = from_list([Rotation.DEG90, Rotation.DEG270, None])
    flips = from_list([FlipType.HORIZONTAL, None])
    positions = product(xy_positions(limit, step), xy_positions(limit, step))
    nested = product(flips, product(rotations, positions))

    def to_sample(s) -> GateLoopSample:
        flip, (rot, (or_pos, mux_pos)) = s
        return GateLoopSample(flip, rot, mux_pos, or_pos, or_pos, mux_pos)

    return map_gen(to_sample, nested)


def make_gate_loop_circuit(threshold: float, sample: GateLoopSample) -> SheetModel:
    """A mux and three gates wired in feedback loops; hard to beautify."""
    mid = MIDDLE_OF_SHEET
    builder = SheetBuilder().place_symbol(
        "MUX1", ComponentType.mux2(), mid - XYPos(threshold, 0) + sample.mux_pos
    )
    builder = _rotate_and_flip(builder, "MUX1", sample.rot_mux, sample.flip_mux)
    builder = (
        builder.place_symbol("OR1", ComponentType.gate(ComponentKind.OR, 2), mid + sample.or_pos)
        .place_wire(port_of("MUX1", 0), port_of("OR1", 0))
        .place_wire(port_of("MUX1", 0), port_of("OR1", 1))
        .place_symbol(
            "AND1",
            ComponentType.gate(ComponentKind.AND, 2),
            mid + XYPos(threshold, threshold) + sample.and_pos,
        )
        .place_wire(port_of("OR1", 0), port_of("AND1", 0))
        .place_wire(port_of("OR1", 0), port_of("AND1", 1))
        .place_wire(port_of("OR1", 0), port_of("MUX1", 2))
        .place_wire(port_of("AND1", 0), port_of("MUX1", 1))
        .place_symbol(
            "XOR1",
            ComponentType.gate(ComponentKind.XOR, 2),
            mid + XYPos(threshold, 0) + sample.xor_pos,
        )
        .place_wire(port_of("AND1", 0), port_of("XOR1", 0))
        .place_wire(port_of("AND1", 0), port_of("XOR1", 1))
        .place_wire(port_of("XOR1", 0), port_of("MUX1", 0))
    )
    return separate_all_wires(get_ok_or_fail(builder.result()))


# ----------------------------------------------------------------------------
# Component-list circuits
# ----------------------------------------------------------------------------

_GATE_RE = re.compile(r"^(and|or|xor|nand|nor|xnor)(\d*)$")

_FIXED_TYPES = {
    "input": ComponentType.input,
    "output": ComponentType.output,
    "not": ComponentType.not_gate,
    "mux2": ComponentType.mux2,
    "mux4": ComponentType.mux4,
    "demux2": ComponentType.demux2,
    "demux4": ComponentType.demux4,
    "dff": ComponentType.dff,
}


def parse_component_type(text: str) -> ComponentType:
    """Parse names like ``and2``, ``or3``, ``mux4`` or ``dff``."""
    name = text.strip().lower()
    if name in _FIXED_TYPES:
        return _FIXED_TYPES[name]()
    match = _GATE_RE.match(name)
    if match:
        inputs = int(match.group(2)) if match.group(2) else 2
        return ComponentType.gate(ComponentKind(match.group(1)), inputs)
    raise ValueError(f"Unknown component type '{text}'")


class ComponentInfo(BaseModel):
    """A component to place: label and type name."""

    model_config = ConfigDict(frozen=True)

    label: str
    type: str

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        parse_component_type(value)
        return value

    @property
    def component(self) -> ComponentType:
        return parse_component_type(self.type)


class ConnectionInfo(BaseModel):
    """A wire from an output port of one component to an input of another."""

    model_config = ConfigDict(frozen=True)

    source: str
    source_port: int = 0
    target: str
    target_port: int = 0


class CircuitDescription(BaseModel):
    """A circuit loaded from YAML."""

    name: str = "unnamed"
    threshold: float = Field(200.0, gt=0)
    components: list[ComponentInfo] = Field(default_factory=list)
    connections: list[ConnectionInfo] = Field(default_factory=list)


def load_circuit(path: Path | str) -> CircuitDescription:
    """Load a circuit description YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a YAML mapping
        ValidationError: If the content doesn't match the schema
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Circuit file not found: {path}")
    return load_circuit_string(path.read_text(encoding="utf-8"), source=str(path))


def load_circuit_string(text: str, source: str = "<string>") -> CircuitDescription:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {source}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Circuit description must be a YAML mapping: {source}")
    return CircuitDescription.model_validate(data)


def generate_position(
    sheet: SheetModel,
    threshold: float,
    rng: np.random.Generator,
    start: XYPos = MIDDLE_OF_SHEET,
) -> XYPos:
    """Find a position more than *threshold* from every symbol centre.

    Starts at *start* and steps by *threshold* right or down, at random,
    until the position is clear.

    Raises:
        ValueError: If *threshold* is not positive
    """
    if threshold <= 0:
        raise ValueError(f"Position threshold must be positive, got {threshold}")
    centres = [sym.centre for sym in sheet.symbols.values()]
    position = start
    while any(euclidean_distance(c, position) <= threshold for c in centres):
        if rng.integers(0, 2) == 0:
            position = position + XYPos(threshold, 0.0)
        else:
            position = position + XYPos(0.0, threshold)
    return position


def place_components(
    components: list[ComponentInfo],
    threshold: float,
    offset: XYPos,
    rng: np.random.Generator,
    max_coord: float = DEFAULT_MAX_COORD,
) -> SheetModel:
    sheet = SheetModel(max_coord=max_coord)
    for comp in components:
        position = generate_position(sheet, threshold, rng, MIDDLE_OF_SHEET + offset)
        sheet = place_symbol(sheet, comp.label, comp.component, position)
    return sheet


def given_connect_components(
    components: list[ComponentInfo],
    connections: list[ConnectionInfo],
    threshold: float,
    offset: XYPos,
    seed: int = 0,
    router: Optional[Router] = None,
    max_coord: float = DEFAULT_MAX_COORD,
) -> SheetModel:
    """Place *components* apart from each other and wire *connections*."""
    router = router or ManhattanRouter()
    rng = np.random.default_rng(seed)
    sheet = place_components(components, threshold, offset, rng, max_coord)
    for conn in connections:
        sheet = place_wire(
            sheet,
            port_of(conn.source, conn.source_port),
            port_of(conn.target, conn.target_port),
            router,
        )
        sheet = separate_all_wires(sheet, router)
    return sheet


def random_connect_components(
    components: list[ComponentInfo],
    threshold: float,
    offset: XYPos,
    seed: int = 0,
    router: Optional[Router] = None,
) -> SheetModel:
    """Place *components* and chain them in a seeded random order.

    Each component's first output drives the first two inputs of the next
    component in the chain.
    """
    router = router or ManhattanRouter()
    rng = np.random.default_rng(seed)
    sheet = place_components(components, threshold, offset, rng)
    order = [components[int(k)] for k in rng.permutation(len(components))]
    for comp1, comp2 in zip(order, order[1:]):
        sheet = place_wire(sheet, port_of(comp1.label, 0), port_of(comp2.label, 0), router)
        sheet = place_wire(sheet, port_of(comp1.label, 0), port_of(comp2.label, 1), router)
        sheet = separate_all_wires(sheet, router)
    return sheet


GATE_LOOP_COMPONENTS = [
    ComponentInfo(label="AND1", type="and2"),
    ComponentInfo(label="OR1", type="or2"),
    ComponentInfo(label="XOR1", type="xor2"),
    ComponentInfo(label="MUX1", type="mux2"),
]

GATE_LOOP_CONNECTIONS = [
    ConnectionInfo(source="AND1", source_port=0, target="OR1", target_port=0),
    ConnectionInfo(source="OR1", source_port=0, target="XOR1", target_port=1),
    ConnectionInfo(source="XOR1", source_port=0, target="MUX1", target_port=1),
    ConnectionInfo(source="MUX1", source_port=0, target="AND1", target_port=1),
]


def make_given_connections_circuit(threshold: float, offset: XYPos) -> SheetModel:
    return given_connect_components(
        GATE_LOOP_COMPONENTS, GATE_LOOP_CONNECTIONS, threshold, offset
    )


@dataclass(frozen=True)
class RandomWiringSample:
    offset: XYPos
    seed: int


def make_samples_random_wiring(
    limit: int = 100, step: int = 20, seeds: int = 4, base_seed: int = 0
) -> Gen[RandomWiringSample]:
    return product(
        xy_positions(limit, step),
        from_list(range(base_seed, base_seed + seeds)),
        lambda offset, seed: RandomWiringSample(offset, seed),
    )


def make_random_connections_circuit(threshold: float, sample: RandomWiringSample) -> SheetModel:
    return random_connect_components(GATE_LOOP_COMPONENTS, threshold, sample.offset, sample.seed)


def make_described_circuit(
    description: CircuitDescription,
    offset: XYPos,
    router: Optional[Router] = None,
    max_coord: float = DEFAULT_MAX_COORD,
) -> SheetModel:
    """Build a circuit loaded with :func:`load_circuit`."""
    return given_connect_components(
        description.components,
        description.connections,
        description.threshold,
        offset,
        router=router,
        max_coord=max_coord,
    )
