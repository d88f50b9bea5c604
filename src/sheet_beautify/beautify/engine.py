"""
Beautification driver.

Runs the enabled phases in order and reports how many wires are straight
before and after.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..config import PHASES, Config
from ..exceptions import ConfigurationError
from ..router import ManhattanRouter, Router
from ..segments import straight_wire_count
from ..sheet import SheetModel
from .multi_port import align_multi_port_symbols
from .scale_align import scale_align_symbol_pairs
from .single_port import align_single_port_symbols

logger = logging.getLogger(__name__)

PhaseFunc = Callable[[SheetModel, Router, bool], SheetModel]

PHASE_FUNCTIONS: dict[str, PhaseFunc] = {
    "single_port": align_single_port_symbols,
    "scale_align": scale_align_symbol_pairs,
    "multi_port": align_multi_port_symbols,
}


@dataclass(frozen=True)
class BeautifyOptions:
    """Which phases run and whether off-sheet edits are rolled back."""

    phases: tuple[str, ...] = PHASES
    reject_out_of_bounds: bool = True

    def __post_init__(self):
        unknown = [p for p in self.phases if p not in PHASE_FUNCTIONS]
        if unknown:
            raise ConfigurationError(
                "Unknown beautify phase",
                context={"phases": unknown, "available": list(PHASES)},
                suggestions=["Use one of the available phase names"],
            )

    @classmethod
    def from_config(cls, config: Config) -> BeautifyOptions:
        return cls(
            phases=tuple(config.beautify.phases),
            reject_out_of_bounds=config.beautify.reject_out_of_bounds,
        )


@dataclass(frozen=True)
class BeautifyReport:
    """Straight-wire counts around a beautify run."""

    straight_before: int
    straight_after: int
    total_wires: int
    phases: tuple[str, ...] = field(default=())

    @property
    def improvement(self) -> int:
        return self.straight_after - self.straight_before


def beautify_sheet(
    sheet: SheetModel,
    router: Optional[Router] = None,
    options: Optional[BeautifyOptions] = None,
) -> SheetModel:
    """Run the enabled beautify phases over *sheet* and return the result."""
    result, _ = beautify_sheet_with_report(sheet, router, options)
    return result


def beautify_sheet_with_report(
    sheet: SheetModel,
    router: Optional[Router] = None,
    options: Optional[BeautifyOptions] = None,
) -> tuple[SheetModel, BeautifyReport]:
    router = router or ManhattanRouter()
    options = options or BeautifyOptions()
    sheet = sheet.recompute_bounding_boxes()

    before = straight_wire_count(sheet)
    logger.info("Beautify start: %d of %d wires straight", before, len(sheet.wires))
    # Run in canonical order regardless of how the phases were listed
    phases = tuple(p for p in PHASES if p in options.phases)
    for phase in phases:
        sheet = PHASE_FUNCTIONS[phase](sheet, router, options.reject_out_of_bounds)
        logger.debug("After %s: %d wires straight", phase, straight_wire_count(sheet))
    after = straight_wire_count(sheet)
    logger.info("Beautify done: %d of %d wires straight", after, len(sheet.wires))

    return sheet, BeautifyReport(before, after, len(sheet.wires), phases)
