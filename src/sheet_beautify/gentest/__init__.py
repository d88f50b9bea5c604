"""
Generative property testing of schematic sheets.

Example::

    from sheet_beautify.gentest import run_test_on_sheets, xy_positions
    from sheet_beautify.gentest.asserts import fail_on_symbol_intersects_symbol
    from sheet_beautify.gentest.circuits import make_given_connections_circuit

    result = run_test_on_sheets(
        "Given connections", 0, xy_positions(100),
        lambda offset: make_given_connections_circuit(200.0, offset),
        fail_on_symbol_intersects_symbol,
    )
"""

from .display import ConsoleDisplay, DisplaySink, NullDisplay, RecordingDisplay, make_display
from .gen import (
    Gen,
    from_list,
    map_gen,
    product,
    shuffle_array,
    shuffled,
    truncate,
    xy_positions,
)
from .harness import run_test_on_sheets
from .metrics import SampleMetrics, SheetMetrics, collect_metrics, count_metrics
from .runner import (
    CaughtException,
    PropertyTest,
    StatusKind,
    TestResult,
    TestStatus,
    catch_exception,
    get_ok_or_fail,
    run_tests,
)
from .session import (
    FailureReport,
    ResultReport,
    SessionStore,
    TestSession,
    record_position_in_test,
)
from .suites import Suite, SuiteTest, default_suite, next_error, run_suite_test

__all__ = [
    # Generators
    "Gen",
    "from_list",
    "map_gen",
    "product",
    "shuffle_array",
    "shuffled",
    "truncate",
    "xy_positions",
    # Runner
    "CaughtException",
    "PropertyTest",
    "StatusKind",
    "TestResult",
    "TestStatus",
    "catch_exception",
    "get_ok_or_fail",
    "run_tests",
    "run_test_on_sheets",
    # Display
    "DisplaySink",
    "NullDisplay",
    "RecordingDisplay",
    "ConsoleDisplay",
    "make_display",
    # Metrics
    "SheetMetrics",
    "SampleMetrics",
    "count_metrics",
    "collect_metrics",
    # Session and suites
    "TestSession",
    "SessionStore",
    "FailureReport",
    "ResultReport",
    "record_position_in_test",
    "Suite",
    "SuiteTest",
    "default_suite",
    "next_error",
    "run_suite_test",
]
