"""Layout quality metrics over generated sheets.

Counts symbol overlaps, wire/symbol intersections and straight wires so the
effect of a transform (usually :func:`~sheet_beautify.beautify.beautify_sheet`)
can be compared across every sample of a generator.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from ..segments import straight_wire_count
from ..sheet import SheetModel
from .asserts import wire_symbol_intersections
from .gen import Gen

T = TypeVar("T")


class SheetMetrics(BaseModel):
    """Quality counts for one sheet."""

    model_config = ConfigDict(frozen=True)

    symbol_overlaps: int
    wire_symbol_intersections: int
    straight_wires: int
    total_wires: int


class SampleMetrics(BaseModel):
    """Metrics of one generated sample."""

    model_config = ConfigDict(frozen=True)

    sample: int
    metrics: SheetMetrics


def count_metrics(sheet: SheetModel) -> SheetMetrics:
    sheet = sheet.recompute_bounding_boxes()
    return SheetMetrics(
        symbol_overlaps=len(sheet.overlapping_pairs()),
        wire_symbol_intersections=sum(
            len(wire_symbol_intersections(sheet, wire)) for wire in sheet.wires.values()
        ),
        straight_wires=straight_wire_count(sheet),
        total_wires=len(sheet.wires),
    )


def collect_metrics(
    samples: Gen[T],
    sheet_maker: Callable[[T], SheetModel],
    transform: Optional[Callable[[SheetModel], SheetModel]] = None,
) -> list[SampleMetrics]:
    """Build every sample, apply *transform* and measure the result."""
    results = []
    for n in range(samples.size):
        sheet = sheet_maker(samples.data(n))
        if transform is not None:
            sheet = transform(sheet)
        results.append(SampleMetrics(sample=n, metrics=count_metrics(sheet)))
    return results
