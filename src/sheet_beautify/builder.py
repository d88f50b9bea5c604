"""
Placement builder.

Functions for building test sheets symbol by symbol and wire by wire.  Each
function takes a :class:`SheetModel` and returns a new one, or raises
:class:`PlacementError` when the edit cannot be applied.

For building a whole circuit in one expression use :class:`SheetBuilder`,
which short-circuits after the first failure and reports it as a value::

    result = (
        SheetBuilder()
        .place_symbol("G1", ComponentType.gate(ComponentKind.AND), middle)
        .place_symbol("FF1", ComponentType.dff(), middle + XYPos(150, 0))
        .place_wire(port_of("G1", 0), port_of("FF1", 0))
        .result()
    )
    sheet = get_ok_or_fail(result)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .exceptions import PlacementError, PlacementErrorKind
from .geometry import XYPos, sheet_box
from .router import ManhattanRouter, Router
from .sheet import (
    ComponentType,
    CustomComponentType,
    FlipType,
    Rotation,
    SheetModel,
    Symbol,
    Wire,
    labels_equal,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SymbolPort:
    """A port addressed by symbol label and port number."""

    label: str
    port_number: int


def port_of(label: str, port_number: int) -> SymbolPort:
    return SymbolPort(label, port_number)


@dataclass(frozen=True)
class LoadedComponent:
    """A sheet of the project that can be instantiated as a custom component."""

    name: str
    input_labels: tuple[str, ...] = ()
    output_labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class Project:
    """The open sheet name plus every sheet loaded in the project."""

    open_sheet: str
    loaded_components: tuple[LoadedComponent, ...] = ()

    def find(self, name: str) -> Optional[LoadedComponent]:
        for comp in self.loaded_components:
            if labels_equal(comp.name, name):
                return comp
        return None


# ---------------------------------------------------------------------------
# Symbol placement
# ---------------------------------------------------------------------------


def _check_label_free(sheet: SheetModel, label: str) -> None:
    if sheet.find_symbol(label) is not None:
        raise PlacementError(
            f"Can't place symbol with duplicate label '{label.upper()}'",
            kind=PlacementErrorKind.DUPLICATE_LABEL,
            context={"label": label.upper()},
            suggestions=["Choose a label not used on this sheet"],
        )


def _check_in_bounds(sheet: SheetModel, symbol: Symbol) -> None:
    box = symbol.bounding_box
    if not sheet_box(sheet.max_coord).contains_box(box):
        raise PlacementError(
            f"Symbol '{symbol.label}' does not fit on the sheet",
            kind=PlacementErrorKind.OUT_OF_BOUNDS,
            context={
                "label": symbol.label,
                "top_left": box.top_left,
                "size": f"{box.width}x{box.height}",
                "max_coord": sheet.max_coord,
            },
            suggestions=["Move the symbol towards the middle of the sheet"],
        )


def _add_symbol(sheet: SheetModel, symbol: Symbol) -> SheetModel:
    _check_in_bounds(sheet, symbol)
    logger.debug("Placed %s (%s) at %s", symbol.label, symbol.component.description, symbol.pos)
    return sheet.with_symbol(symbol).recompute_bounding_boxes()


def _centred(symbol_id: str, label: str, component: ComponentType, position: XYPos) -> Symbol:
    symbol = Symbol.create(symbol_id, label, component, position)
    return symbol.moved_to(position - symbol.scaled_diagonal * 0.5)


def place_symbol(
    sheet: SheetModel, label: str, component: ComponentType, position: XYPos
) -> SheetModel:
    """Place a new symbol centred on *position*.

    Raises:
        PlacementError: DUPLICATE_LABEL if the label is taken (case-insensitive),
            OUT_OF_BOUNDS if the symbol would not lie inside the sheet.
    """
    _check_label_free(sheet, label)
    symbol_id, sheet = sheet.next_symbol_id()
    return _add_symbol(sheet, _centred(symbol_id, label, component, position))


def place_custom_symbol(
    sheet: SheetModel,
    label: str,
    cc_sheet_name: str,
    project: Project,
    scale: XYPos,
    position: XYPos,
) -> SheetModel:
    """Place an instance of another project sheet as a custom component.

    Args:
        scale: Horizontal (x) and vertical (y) scale factors of the symbol.

    Raises:
        PlacementError: CUSTOM_SHEET if *cc_sheet_name* is the open sheet or
            no loaded sheet has that name, DUPLICATE_LABEL or OUT_OF_BOUNDS
            as for :func:`place_symbol`.
    """
    if labels_equal(cc_sheet_name, project.open_sheet):
        raise PlacementError(
            "Can't create custom component with name same as current opened sheet",
            kind=PlacementErrorKind.CUSTOM_SHEET,
            context={"sheet": cc_sheet_name},
        )
    loaded = project.find(cc_sheet_name)
    if loaded is None:
        raise PlacementError(
            f"Can't create custom component unless a sheet named '{cc_sheet_name}' exists",
            kind=PlacementErrorKind.CUSTOM_SHEET,
            context={
                "sheet": cc_sheet_name,
                "loaded": [c.name for c in project.loaded_components],
            },
        )
    _check_label_free(sheet, label)
    custom = CustomComponentType(loaded.name, loaded.input_labels, loaded.output_labels)
    symbol_id, sheet = sheet.next_symbol_id()
    symbol = Symbol.create(symbol_id, label, ComponentType.from_custom(custom), position)
    symbol = symbol.scaled(v_scale=scale.y, h_scale=scale.x)
    symbol = symbol.moved_to(position - symbol.scaled_diagonal * 0.5)
    return _add_symbol(sheet, symbol)


# ---------------------------------------------------------------------------
# Wires
# ---------------------------------------------------------------------------


def _resolve(sheet: SheetModel, end: SymbolPort, outputs: bool) -> tuple[Symbol, str]:
    symbol = sheet.find_symbol(end.label)
    if symbol is None:
        raise PlacementError(
            f"Can't find symbol with label '{end.label}'",
            kind=PlacementErrorKind.UNKNOWN_SYMBOL,
            context={"label": end.label},
        )
    ports = symbol.output_ports if outputs else symbol.input_ports
    if not 0 <= end.port_number < len(ports):
        direction = "output" if outputs else "input"
        raise PlacementError(
            f"Can't find {direction} port {end.port_number} on symbol '{symbol.label}'",
            kind=PlacementErrorKind.UNKNOWN_PORT,
            context={"label": symbol.label, f"{direction}_ports": len(ports)},
        )
    return symbol, ports[end.port_number].id


def place_wire(
    sheet: SheetModel,
    source: SymbolPort,
    target: SymbolPort,
    router: Optional[Router] = None,
) -> SheetModel:
    """Wire output port *source* to input port *target* and route it.

    Raises:
        PlacementError: UNKNOWN_SYMBOL or UNKNOWN_PORT for an unresolved end,
            DUPLICATE_WIRE if the same ordered pair is already wired.
    """
    router = router or ManhattanRouter()
    src_sym, src_port = _resolve(sheet, source, outputs=True)
    tgt_sym, tgt_port = _resolve(sheet, target, outputs=False)
    if any(w.source_port == src_port and w.target_port == tgt_port for w in sheet.wires.values()):
        raise PlacementError(
            "Can't create duplicate wire",
            kind=PlacementErrorKind.DUPLICATE_WIRE,
            context={"source": src_port, "target": tgt_port},
        )
    wire = Wire(
        id=Wire.make_id(src_port, tgt_port),
        source_port=src_port,
        target_port=tgt_port,
        source_symbol=src_sym.id,
        target_symbol=tgt_sym.id,
    )
    return sheet.with_wire(router.route(sheet, wire))


def separate_all_wires(sheet: SheetModel, router: Optional[Router] = None) -> SheetModel:
    """Run global wire separation over every wire on the sheet."""
    return (router or ManhattanRouter()).separate(sheet)


# ---------------------------------------------------------------------------
# Symbol transforms
# ---------------------------------------------------------------------------


def _transform_symbol(
    sheet: SheetModel,
    label: str,
    transform: Callable[[Symbol], Symbol],
    router: Optional[Router],
    missing_ok: bool,
) -> SheetModel:
    symbol = sheet.find_symbol(label)
    if symbol is None:
        if missing_ok:
            return sheet
        raise PlacementError(
            f"No symbol labelled '{label}' to transform",
            kind=PlacementErrorKind.NOT_FOUND,
            context={"label": label},
            suggestions=["Pass missing_ok=True to ignore missing symbols"],
        )
    transformed = transform(symbol)
    _check_in_bounds(sheet, transformed)
    sheet = sheet.with_symbol(transformed).recompute_bounding_boxes()
    if router is not None:
        sheet = router.route_all(sheet, [symbol.id], XYPos.zero())
    return sheet


def rotate_symbol(
    sheet: SheetModel,
    label: str,
    rotation: Rotation,
    router: Optional[Router] = None,
    missing_ok: bool = False,
) -> SheetModel:
    """Rotate the labelled symbol clockwise about its centre.

    Wires are rerouted only when a router is given.

    Raises:
        PlacementError: NOT_FOUND for an unknown label (unless *missing_ok*),
            OUT_OF_BOUNDS if the turned outline would leave the sheet.
    """
    return _transform_symbol(sheet, label, lambda s: s.rotated(rotation), router, missing_ok)


def flip_symbol(
    sheet: SheetModel,
    label: str,
    flip: FlipType,
    router: Optional[Router] = None,
    missing_ok: bool = False,
) -> SheetModel:
    """Mirror the labelled symbol about its centre."""
    return _transform_symbol(sheet, label, lambda s: s.flipped(flip), router, missing_ok)


def scale_symbol(
    sheet: SheetModel,
    label: str,
    v_scale: Optional[float] = None,
    h_scale: Optional[float] = None,
) -> SheetModel:
    """Set scale factors of the labelled symbol. Wires are not rerouted.

    A factor left as None keeps the symbol's current value.

    Raises:
        PlacementError: NOT_FOUND for an unknown label, OUT_OF_BOUNDS if the
            stretched outline would leave the sheet.
    """

    def rescale(symbol: Symbol) -> Symbol:
        return symbol.scaled(
            v_scale=symbol.v_scale if v_scale is None else v_scale,
            h_scale=symbol.h_scale if h_scale is None else h_scale,
        )

    return _transform_symbol(sheet, label, rescale, None, False)


def swap_mux_inputs(
    sheet: SheetModel,
    label: str,
    reversed_inputs: bool = True,
    router: Optional[Router] = None,
) -> SheetModel:
    """Draw the data inputs of the labelled symbol in reverse order."""
    return _transform_symbol(
        sheet, label, lambda s: s.with_reversed_inputs(reversed_inputs), router, False
    )


# ---------------------------------------------------------------------------
# Chained construction
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a chain of builder steps: a sheet or the first error."""

    sheet: Optional[SheetModel] = None
    error: Optional[PlacementError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def get_ok_or_fail(result: PlacementResult) -> SheetModel:
    """Unwrap a successful result or raise its error."""
    if result.error is not None:
        raise result.error
    assert result.sheet is not None
    return result.sheet


@dataclass
class SheetBuilder:
    """Fluent wrapper over the builder functions.

    After the first failing step every later step is skipped and
    :meth:`result` reports that failure.
    """

    sheet: SheetModel = field(default_factory=SheetModel)
    router: Router = field(default_factory=ManhattanRouter)
    error: Optional[PlacementError] = None

    def _step(self, func: Callable[..., SheetModel], *args, **kwargs) -> SheetBuilder:
        if self.error is None:
            try:
                self.sheet = func(self.sheet, *args, **kwargs)
            except PlacementError as e:
                logger.debug("Builder step %s failed: %s", func.__name__, e.message)
                self.error = e
        return self

    def place_symbol(self, label: str, component: ComponentType, position: XYPos) -> SheetBuilder:
        return self._step(place_symbol, label, component, position)

    def place_custom_symbol(
        self, label: str, cc_sheet_name: str, project: Project, scale: XYPos, position: XYPos
    ) -> SheetBuilder:
        return self._step(place_custom_symbol, label, cc_sheet_name, project, scale, position)

    def place_wire(self, source: SymbolPort, target: SymbolPort) -> SheetBuilder:
        return self._step(place_wire, source, target, self.router)

    def rotate_symbol(self, label: str, rotation: Rotation) -> SheetBuilder:
        return self._step(rotate_symbol, label, rotation, self.router)

    def flip_symbol(self, label: str, flip: FlipType) -> SheetBuilder:
        return self._step(flip_symbol, label, flip, self.router)

    def scale_symbol(
        self, label: str, v_scale: Optional[float] = None, h_scale: Optional[float] = None
    ) -> SheetBuilder:
        return self._step(scale_symbol, label, v_scale, h_scale)

    def swap_mux_inputs(self, label: str, reversed_inputs: bool = True) -> SheetBuilder:
        return self._step(swap_mux_inputs, label, reversed_inputs, self.router)

    def separate_all_wires(self) -> SheetBuilder:
        return self._step(separate_all_wires, self.router)

    def result(self) -> PlacementResult:
        if self.error is not None:
            return PlacementResult(error=self.error)
        return PlacementResult(sheet=self.sheet)
