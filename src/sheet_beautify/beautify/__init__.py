"""
Sheet beautification.

Three phases, each keeping symbols apart and on the sheet:

1. ``single_port``: move single-port symbols to straighten their wire
2. ``scale_align``: stretch symbols so multi-wire connections run parallel
3. ``multi_port``: drag multi-input symbols with their drivers

Example::

    from sheet_beautify.beautify import beautify_sheet, BeautifyOptions

    sheet = beautify_sheet(sheet, router, BeautifyOptions(phases=("single_port",)))
"""

from .engine import (
    PHASE_FUNCTIONS,
    BeautifyOptions,
    BeautifyReport,
    beautify_sheet,
    beautify_sheet_with_report,
)
from .helpers import signed_offset, try_commit
from .multi_port import align_multi_port_symbols, input_source_symbols
from .scale_align import port_pitch, port_ratio, scale_align_symbol_pairs, symbol_pair_wires
from .single_port import align_single_port_symbols

__all__ = [
    "PHASE_FUNCTIONS",
    "BeautifyOptions",
    "BeautifyReport",
    "beautify_sheet",
    "beautify_sheet_with_report",
    "signed_offset",
    "try_commit",
    "align_single_port_symbols",
    "scale_align_symbol_pairs",
    "align_multi_port_symbols",
    "input_source_symbols",
    "port_pitch",
    "port_ratio",
    "symbol_pair_wires",
]
