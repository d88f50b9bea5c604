"""
Test session state.

Remembers which test last failed and on which sample, so a later
"next error" run can resume one sample after it.  The state is a small
JSON file owned by the caller; nothing in the engine depends on it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .runner import StatusKind, TestResult

logger = logging.getLogger(__name__)


class TestSession(BaseModel):
    """Position of the last recorded failure."""

    __test__ = False

    model_config = ConfigDict(frozen=True)

    last_test_number: int
    last_test_sample_index: int


class FailureReport(BaseModel):
    """One failing sample, as reported by the CLI."""

    model_config = ConfigDict(frozen=True)

    sample: int
    kind: StatusKind
    message: str


class ResultReport(BaseModel):
    """Serializable summary of a test run."""

    test_name: str
    first_sample_tested: int
    samples: int
    failures: list[FailureReport]

    @property
    def passed(self) -> bool:
        return not self.failures

    @classmethod
    def from_result(cls, result: TestResult) -> ResultReport:
        return cls(
            test_name=result.test_name,
            first_sample_tested=result.first_sample_tested,
            samples=result.test_data.size,
            failures=[
                FailureReport(sample=n, kind=status.kind, message=status.message)
                for n, status in result.test_errors
            ],
        )


class SessionStore:
    """Reads and writes a :class:`TestSession` as JSON."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Optional[TestSession]:
        if not self.path.is_file():
            return None
        try:
            return TestSession.model_validate_json(self.path.read_text())
        except ValidationError as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None

    def save(self, session: TestSession) -> None:
        self.path.write_text(session.model_dump_json(indent=2))

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


def record_position_in_test(
    test_number: int, result: TestResult, store: SessionStore
) -> Optional[TestSession]:
    """Store the first failure of *result*, or clear the session if it passed."""
    first = result.first_error
    if first is None:
        logger.info("Test finished")
        store.clear()
        return None
    sample, _ = first
    logger.info("Sample %d", sample)
    session = TestSession(last_test_number=test_number, last_test_sample_index=sample)
    store.save(session)
    return session
