import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from execution_logger.format import LogFormat
from execution_logger.logger import ExecutionLogger

START = datetime(2026, 1, 27, 9, 30, 0)


class FakeClock:
    """Deterministic monotonic + wall clock pair, advanced by hand."""

    def __init__(self, start: datetime = START):
        self._ns = 0
        self._start = start

    def monotonic(self) -> int:
        return self._ns

    def now(self) -> datetime:
        return self._start + timedelta(microseconds=self._ns // 1000)

    def advance(self, ms: int) -> None:
        self._ns += ms * 1_000_000


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_logger(clock):
    """Build an ExecutionLogger on the fake clock with the default layout."""
    def _make(name: str = "L", **format_fields) -> ExecutionLogger:
        return ExecutionLogger(
            name,
            log_format=LogFormat(**format_fields),
            clock=clock.monotonic,
            wall_clock=clock.now,
        )
    return _make
