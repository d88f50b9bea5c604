"""Run a sheet property test and show its first failing sample."""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from ..sheet import SheetModel
from .asserts import SheetAssertion
from .display import DisplaySink, NullDisplay
from .gen import Gen, map_gen
from .runner import CaughtException, PropertyTest, TestResult, catch_exception, run_tests

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_test_on_sheets(
    name: str,
    sample_to_start: int,
    samples: Gen[T],
    sheet_maker: Callable[[T], SheetModel],
    sheet_checker: SheetAssertion,
    display: Optional[DisplaySink] = None,
) -> TestResult[SheetModel]:
    """Build a sheet per sample, check it, and display the first failure.

    A fault while building a sheet counts as an EXCEPTION outcome for that
    sample.  The failing sample is rebuilt for display; if rebuilding raises,
    nothing is displayed.
    """
    display = display or NullDisplay()
    sheets = map_gen(sheet_maker, samples)
    result = run_tests(PropertyTest(name, sheets, sample_to_start, sheet_checker))

    first = result.first_error
    if first is None:
        logger.info("Test %s has PASSED.", result.test_name)
        return result

    n, status = first
    logger.info("Test %s has FAILED on sample %d with error message:\n%s", result.test_name, n, status)
    sheet = catch_exception("sample regeneration", sheets.data, n)
    if isinstance(sheet, CaughtException):
        logger.warning("Could not rebuild sample %d for display: %s", n, sheet.message)
    else:
        display.show_failing_sample(sheet)
    return result
