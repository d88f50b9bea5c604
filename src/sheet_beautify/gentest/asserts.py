"""
Assertions for sheet property tests.

Each assertion takes the sample number and the generated sheet and returns
``None`` when the sheet passes or a message describing the failure.  The
sample number is part of every message so any failing sample can be found
again (and displayed with :func:`fail_on_sample_number`).
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Optional

from ..segments import straight_wire_count, wire_polyline
from ..sheet import SheetModel, Wire

SheetAssertion = Callable[[int, SheetModel], Optional[str]]


def fail_on_sample_number(sample_to_fail: int) -> SheetAssertion:
    """Ignore the sheet and fail on one sample; useful for displaying it."""

    def check(sample: int, _sheet: SheetModel) -> Optional[str]:
        if sample == sample_to_fail:
            return f"Failing forced on Sample {sample_to_fail}."
        return None

    return check


def fail_on_all_tests(sample: int, _sheet: SheetModel) -> Optional[str]:
    """Fail every sample, to step through all generated sheets."""
    return f"Sample {sample}"


def wire_symbol_intersections(sheet: SheetModel, wire: Wire) -> list[str]:
    """Ids of symbols whose interior a visible segment of *wire* passes through."""
    points = wire_polyline(wire)
    hits = []
    for symbol_id, box in sheet.recompute_bounding_boxes().bounding_boxes.items():
        for start, end in zip(points, points[1:]):
            if (end - start).is_zero():
                continue
            if box.intersects_segment(start, end):
                hits.append(symbol_id)
                break
    return hits


def fail_on_wire_intersects_symbol(sample: int, sheet: SheetModel) -> Optional[str]:
    if any(wire_symbol_intersections(sheet, w) for w in sheet.wires.values()):
        return f"Wire intersects a symbol outline in Sample {sample}"
    return None


def fail_on_symbol_intersects_symbol(sample: int, sheet: SheetModel) -> Optional[str]:
    if sheet.recompute_bounding_boxes().overlapping_pairs():
        return f"Symbol outline intersects another symbol outline in Sample {sample}"
    return None


def fail_on_symbol_out_of_bounds(sample: int, sheet: SheetModel) -> Optional[str]:
    sheet = sheet.recompute_bounding_boxes()
    outside = [
        sheet.symbols[sid].label for sid in sheet.symbols if not sheet.symbol_in_bounds(sid)
    ]
    if outside:
        return f"Symbols {', '.join(sorted(outside))} lie outside the sheet in Sample {sample}"
    return None


def fail_on_duplicate_wires(sample: int, sheet: SheetModel) -> Optional[str]:
    pairs = Counter((w.source_port, w.target_port) for w in sheet.wires.values())
    duplicates = [pair for pair, count in pairs.items() if count > 1]
    if duplicates:
        return f"Duplicate wires {duplicates} in Sample {sample}"
    return None


def fail_on_duplicate_labels(sample: int, sheet: SheetModel) -> Optional[str]:
    labels = Counter(sym.label.upper() for sym in sheet.symbols.values())
    duplicates = sorted(label for label, count in labels.items() if count > 1)
    if duplicates:
        return f"Duplicate labels {', '.join(duplicates)} in Sample {sample}"
    return None


def fail_on_no_straight_wires(sample: int, sheet: SheetModel) -> Optional[str]:
    if sheet.wires and straight_wire_count(sheet) == 0:
        return f"No straight wires in Sample {sample}"
    return None


def all_of(*assertions: SheetAssertion) -> SheetAssertion:
    """Combine assertions; the first failure message wins."""

    def check(sample: int, sheet: SheetModel) -> Optional[str]:
        for assertion in assertions:
            message = assertion(sample, sheet)
            if message is not None:
                return message
        return None

    return check


__all__ = [
    "SheetAssertion",
    "fail_on_sample_number",
    "fail_on_all_tests",
    "fail_on_wire_intersects_symbol",
    "fail_on_symbol_intersects_symbol",
    "fail_on_symbol_out_of_bounds",
    "fail_on_duplicate_wires",
    "fail_on_duplicate_labels",
    "fail_on_no_straight_wires",
    "all_of",
    "wire_symbol_intersections",
]
