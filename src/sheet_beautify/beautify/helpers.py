"""Shared pieces of the beautify phases: the commit policy and offset signs."""

from __future__ import annotations

import logging

from ..geometry import XYPos
from ..sheet import SheetModel

logger = logging.getLogger(__name__)


def try_commit(
    before: SheetModel,
    candidate: SheetModel,
    symbol_id: str,
    reject_out_of_bounds: bool = True,
) -> tuple[SheetModel, bool]:
    """Accept *candidate* unless the edited symbol overlaps or leaves the sheet.

    Returns the model to continue with and whether the edit was accepted.
    On rejection *before* is returned untouched.
    """
    candidate = candidate.recompute_bounding_boxes()
    label = candidate.symbols[symbol_id].label
    if candidate.symbol_overlaps(symbol_id):
        logger.debug("Rolled back edit of %s: overlaps another symbol", label)
        return before, False
    if reject_out_of_bounds and not candidate.symbol_in_bounds(symbol_id):
        logger.debug("Rolled back edit of %s: outside the sheet", label)
        return before, False
    return candidate, True


def signed_offset(offset: XYPos, moves_target: bool) -> XYPos:
    """Turn a wire's middle offset into a move that straightens the wire.

    The middle offset points from the source end towards the target end, so
    the source symbol moves along it and the target symbol against it.  For
    symbols in their default orientation the target end is the port on the
    LEFT edge.
    """
    if moves_target:
        return -offset
    return offset
