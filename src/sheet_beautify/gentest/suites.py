"""
Named test suites.

A suite is an ordered list of sheet property tests that can be run by
index, like entries of a menu.  Running a test records the first failure in
the session store so :func:`next_error` can resume from the sample after it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..beautify import BeautifyOptions, beautify_sheet
from ..config import Config
from ..router import ManhattanRouter, Router
from ..sheet import SheetModel
from .asserts import (
    all_of,
    fail_on_all_tests,
    fail_on_duplicate_labels,
    fail_on_duplicate_wires,
    fail_on_sample_number,
    fail_on_symbol_intersects_symbol,
    fail_on_symbol_out_of_bounds,
)
from .circuits import (
    horiz_line_positions,
    make_demux_mux_circuit,
    make_gate_loop_circuit,
    make_given_connections_circuit,
    make_mux_flip_circuit,
    make_random_connections_circuit,
    make_samples_demux_mux,
    make_samples_gate_loop,
    make_samples_random_wiring,
    make_test1_circuit,
    mux_flip_samples,
)
from .display import DisplaySink, NullDisplay
from .gen import xy_positions
from .harness import run_test_on_sheets
from .runner import TestResult
from .session import SessionStore, record_position_in_test

logger = logging.getLogger(__name__)

RunFunc = Callable[[int, DisplaySink], TestResult]


@dataclass(frozen=True)
class SuiteTest:
    """One runnable entry of a suite."""

    name: str
    description: str
    run: RunFunc


class Suite:
    """An ordered, index-addressable list of tests."""

    def __init__(self, tests: list[SuiteTest]):
        self.tests = list(tests)

    def __len__(self) -> int:
        return len(self.tests)

    def __getitem__(self, index: int) -> SuiteTest:
        return self.tests[index]

    def index_of(self, name: str) -> Optional[int]:
        for i, test in enumerate(self.tests):
            if test.name == name:
                return i
        return None


def run_suite_test(
    suite: Suite,
    test_number: int,
    store: SessionStore,
    display: Optional[DisplaySink] = None,
    first_sample: int = 0,
) -> TestResult:
    """Run one test of *suite* and record where it first failed."""
    test = suite[test_number]
    logger.info("%s", test.name)
    result = test.run(first_sample, display or NullDisplay())
    record_position_in_test(test_number, result, store)
    return result


def next_error(
    suite: Suite, store: SessionStore, display: Optional[DisplaySink] = None
) -> Optional[TestResult]:
    """Re-run the last failing test from the sample after its recorded failure.

    Returns None when no failure is recorded.
    """
    session = store.load()
    if session is None:
        logger.info("Test finished")
        return None
    test_number = session.last_test_number
    if not 0 <= test_number < len(suite):
        test_number = 0
    return run_suite_test(
        suite, test_number, store, display, session.last_test_sample_index + 1
    )


def default_suite(config: Optional[Config] = None) -> Suite:
    """The built-in tests, with router and beautify settings from *config*."""
    config = config or Config()
    router: Router = ManhattanRouter(config.router.nub_length, config.router.separation)
    options = BeautifyOptions.from_config(config)

    def beautified(maker: Callable[..., SheetModel]) -> Callable[..., SheetModel]:
        def make(*args) -> SheetModel:
            return beautify_sheet(maker(*args), router, options)

        return make

    no_overlap = all_of(fail_on_symbol_intersects_symbol, fail_on_symbol_out_of_bounds)

    tests = [
        SuiteTest(
            "and-dff-sample-10",
            "Horizontally positioned AND + DFF: fail on sample 10",
            lambda start, display: run_test_on_sheets(
                "Horizontally positioned AND + DFF: fail on sample 10",
                start,
                horiz_line_positions,
                make_test1_circuit,
                fail_on_sample_number(10),
                display,
            ),
        ),
        SuiteTest(
            "and-dff-all",
            "Horizontally positioned AND + DFF: fail all tests",
            lambda start, display: run_test_on_sheets(
                "Horizontally positioned AND + DFF: fail all tests",
                start,
                horiz_line_positions,
                make_test1_circuit,
                fail_on_all_tests,
                display,
            ),
        ),
        SuiteTest(
            "mux-flips",
            "Flipped muxes with swapped inputs: router keeps wires and labels unique",
            lambda start, display: run_test_on_sheets(
                "Flipped muxes with swapped inputs",
                start,
                mux_flip_samples,
                make_mux_flip_circuit,
                all_of(fail_on_duplicate_wires, fail_on_duplicate_labels),
                display,
            ),
        ),
        SuiteTest(
            "demux-mux-beautify",
            "Demux feeding two muxes, beautified: no symbol overlaps",
            lambda start, display: run_test_on_sheets(
                "Demux feeding two muxes",
                start,
                make_samples_demux_mux(limit=40),
                beautified(lambda s: make_demux_mux_circuit(450.0, s)),
                no_overlap,
                display,
            ),
        ),
        SuiteTest(
            "gate-loop-beautify",
            "Mux and gates in feedback loops, beautified: no symbol overlaps",
            lambda start, display: run_test_on_sheets(
                "Gate loop",
                start,
                make_samples_gate_loop(limit=40),
                beautified(lambda s: make_gate_loop_circuit(200.0, s)),
                no_overlap,
                display,
            ),
        ),
        SuiteTest(
            "given-connections",
            "Gate loop from a connection list, beautified: no symbol overlaps",
            lambda start, display: run_test_on_sheets(
                "Given connections",
                start,
                xy_positions(100),
                beautified(lambda offset: make_given_connections_circuit(200.0, offset)),
                no_overlap,
                display,
            ),
        ),
        SuiteTest(
            "random-connections",
            "Gates chained in seeded random order, beautified: no symbol overlaps",
            lambda start, display: run_test_on_sheets(
                "Random connections",
                start,
                make_samples_random_wiring(limit=40, base_seed=config.testing.seed),
                beautified(lambda s: make_random_connections_circuit(200.0, s)),
                no_overlap,
                display,
            ),
        ),
    ]
    return Suite(tests)
