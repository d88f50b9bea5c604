"""
Property test runner.

Runs an assertion over every sample of a generator and collects outcomes:

* the assertion returns ``None``: the sample passes,
* it returns a message: a FAIL outcome,
* generating the sample or running the assertion raises: an EXCEPTION
  outcome carrying the message and traceback.

The runner never stops early; bound the generator with
:func:`~sheet_beautify.gentest.gen.truncate` for a shorter run.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from ..builder import get_ok_or_fail
from .gen import Gen

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Assertion = Callable[[int, T], Optional[str]]


class StatusKind(Enum):
    FAIL = "fail"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class TestStatus:
    """Why one sample did not pass."""

    __test__ = False

    kind: StatusKind
    message: str
    traceback: Optional[str] = None

    @classmethod
    def fail(cls, message: str) -> TestStatus:
        return cls(StatusKind.FAIL, message)

    @classmethod
    def exception(cls, message: str, trace: Optional[str] = None) -> TestStatus:
        return cls(StatusKind.EXCEPTION, message, trace)

    def __str__(self) -> str:
        if self.kind is StatusKind.EXCEPTION:
            text = f"Exception: {self.message}"
            if self.traceback:
                text += f"\n{self.traceback}"
            return text
        return self.message


@dataclass(frozen=True)
class PropertyTest(Generic[T]):
    """A named assertion over the samples of a generator."""

    name: str
    samples: Gen[T]
    start_from: int
    assertion: Assertion


@dataclass(frozen=True)
class TestResult(Generic[T]):
    """Outcome of running a :class:`PropertyTest`."""

    __test__ = False

    test_name: str
    test_data: Gen[T]
    first_sample_tested: int
    test_errors: list[tuple[int, TestStatus]] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.test_errors

    @property
    def first_error(self) -> Optional[tuple[int, TestStatus]]:
        return self.test_errors[0] if self.test_errors else None


@dataclass(frozen=True)
class CaughtException:
    """An exception turned into a value."""

    name: str
    message: str
    traceback: str


def catch_exception(name: str, func: Callable[[T], R], arg: T) -> R | CaughtException:
    """Call ``func(arg)``, returning any exception it raises as a value."""
    try:
        return func(arg)
    except Exception as e:
        return CaughtException(name, f"{name}: {type(e).__name__}: {e}", traceback.format_exc())


def run_tests(test: PropertyTest[T]) -> TestResult[T]:
    """Run *test* on every sample from ``start_from`` to the end."""
    errors: list[tuple[int, TestStatus]] = []
    for index in range(test.start_from, test.samples.size):
        sample = catch_exception("sample generation", test.samples.data, index)
        if isinstance(sample, CaughtException):
            errors.append((index, TestStatus.exception(sample.message, sample.traceback)))
            continue
        outcome = catch_exception("assertion", lambda s: test.assertion(index, s), sample)
        if isinstance(outcome, CaughtException):
            errors.append((index, TestStatus.exception(outcome.message, outcome.traceback)))
        elif outcome is not None:
            errors.append((index, TestStatus.fail(outcome)))
    logger.debug("%s: %d failing samples", test.name, len(errors))
    return TestResult(test.name, test.samples, test.start_from, errors)


__all__ = [
    "Assertion",
    "StatusKind",
    "TestStatus",
    "PropertyTest",
    "TestResult",
    "CaughtException",
    "catch_exception",
    "run_tests",
    "get_ok_or_fail",
]
