"""
sheet-beautify: Schematic sheet beautification with generative property tests.

Tidies an already-placed schematic sheet so that more wires run straight,
without making symbols overlap or leave the sheet.

Modules:
    geometry: Positions, bounding boxes and overlap tests
    sheet: Symbols, ports, wires and the immutable sheet model
    router: Router protocol and the orthogonal reference router
    segments: Visible-segment analysis of routed wires
    builder: Checked sheet construction (place, wire, rotate, flip, scale)
    beautify: The three beautification phases
    gentest: Sample generators, test runner, circuits and suites
    config: TOML configuration

Quick Start::

    from sheet_beautify import SheetBuilder, beautify_sheet, port_of
    from sheet_beautify.geometry import XYPos
    from sheet_beautify.sheet import ComponentKind, ComponentType

    sheet = (
        SheetBuilder()
        .place_symbol("G1", ComponentType.gate(ComponentKind.AND, 2), XYPos(1800, 2000))
        .place_symbol("FF1", ComponentType.dff(), XYPos(2000, 2040))
        .place_wire(port_of("G1", 0), port_of("FF1", 0))
        .result()
        .sheet
    )
    sheet = beautify_sheet(sheet)
"""

__version__ = "0.1.0"

from .beautify import BeautifyOptions, BeautifyReport, beautify_sheet, beautify_sheet_with_report
from .builder import (
    LoadedComponent,
    PlacementResult,
    Project,
    SheetBuilder,
    SymbolPort,
    flip_symbol,
    get_ok_or_fail,
    place_custom_symbol,
    place_symbol,
    place_wire,
    port_of,
    rotate_symbol,
    scale_symbol,
    separate_all_wires,
    swap_mux_inputs,
)
from .config import Config
from .exceptions import (
    ConfigurationError,
    PlacementError,
    PlacementErrorKind,
    RoutingError,
    SheetBeautifyError,
)
from .geometry import BoundingBox, XYPos
from .router import ManhattanRouter, Router
from .sheet import SheetModel

__all__ = [
    "__version__",
    # Model
    "XYPos",
    "BoundingBox",
    "SheetModel",
    # Builder
    "SymbolPort",
    "port_of",
    "LoadedComponent",
    "Project",
    "place_symbol",
    "place_custom_symbol",
    "place_wire",
    "separate_all_wires",
    "rotate_symbol",
    "flip_symbol",
    "scale_symbol",
    "swap_mux_inputs",
    "PlacementResult",
    "get_ok_or_fail",
    "SheetBuilder",
    # Routing
    "Router",
    "ManhattanRouter",
    # Beautify
    "BeautifyOptions",
    "BeautifyReport",
    "beautify_sheet",
    "beautify_sheet_with_report",
    # Config
    "Config",
    # Exceptions
    "SheetBeautifyError",
    "PlacementError",
    "PlacementErrorKind",
    "RoutingError",
    "ConfigurationError",
]
