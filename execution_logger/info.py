"""
Execution Info

Tracks one in-flight (or completed) method execution:
identity, wall-clock timestamps, a monotonic timer and its steps.

DESIGN RULES:
- Monotonic clock for durations, wall clock for display only
- Steps are append-only
- Lifecycle is enforced: PENDING -> RUNNING -> STOPPED
"""

import time
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple

from execution_logger.errors import InvalidStateError
from execution_logger.step import ExecutionStep


class ExecutionStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    STOPPED = "stopped"


class ExecutionInfo:
    """
    Timing record for a single method invocation.

    The timer reads 0 until start(), runs until stop() and stays
    frozen afterwards, so elapsed_milliseconds after stop() is the
    total duration of the invocation.
    """

    def __init__(
        self,
        method_name: str,
        clock: Callable[[], int] = time.monotonic_ns,
        wall_clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize an execution record.

        Args:
            method_name: Identity of the method being executed.
            clock: Monotonic clock in nanoseconds, used for durations.
            wall_clock: Calendar clock, used for displayed timestamps.
        """
        self._method_name = method_name
        self._clock = clock
        self._wall_clock = wall_clock
        self._status = ExecutionStatus.PENDING
        self._started: int = 0
        self._stopped: int = 0
        self._start_timestamp: Optional[datetime] = None
        self._end_timestamp: Optional[datetime] = None
        self._steps: List[ExecutionStep] = []

    @property
    def method_name(self) -> str:
        return self._method_name

    @property
    def status(self) -> ExecutionStatus:
        return self._status

    @property
    def start_timestamp(self) -> Optional[datetime]:
        """Wall-clock time of start(), None until started."""
        return self._start_timestamp

    @property
    def end_timestamp(self) -> Optional[datetime]:
        """Wall-clock time of stop(), None until stopped."""
        return self._end_timestamp

    @property
    def steps(self) -> Tuple[ExecutionStep, ...]:
        """Recorded steps in call order."""
        return tuple(self._steps)

    @property
    def elapsed_milliseconds(self) -> int:
        """Current (or frozen) timer reading in whole milliseconds."""
        if self._status == ExecutionStatus.PENDING:
            return 0
        end = self._stopped if self._status == ExecutionStatus.STOPPED else self._clock()
        return max(0, (end - self._started) // 1_000_000)

    def start(self) -> None:
        """Record the start timestamp and start the timer."""
        if self._status != ExecutionStatus.PENDING:
            raise InvalidStateError(
                f"Execution of '{self._method_name}' was already started"
            )
        self._start_timestamp = self._wall_clock()
        self._started = self._clock()
        self._status = ExecutionStatus.RUNNING

    def stop(self) -> None:
        """Record the end timestamp and freeze the timer."""
        self._require_running("stop")
        self._stopped = self._clock()
        self._end_timestamp = self._wall_clock()
        self._status = ExecutionStatus.STOPPED

    def add_step(self, description: str, name: Optional[str] = None) -> ExecutionStep:
        """
        Append a step timed against the running timer.

        Args:
            description: What happened in this step.
            name: Optional step name.

        Returns:
            The recorded ExecutionStep.
        """
        return self.record_step(self.measure_step(description, name))

    def measure_step(self, description: str, name: Optional[str] = None) -> ExecutionStep:
        """
        Time the next step without recording it.

        Lets a caller render the step first and only record it once
        rendering succeeded.
        """
        self._require_running("add a step to")
        elapsed = self.elapsed_milliseconds
        return ExecutionStep(
            description=description,
            elapsed_milliseconds=elapsed,
            delta_with_previous_step=self._delta_with_previous_step(elapsed),
            name=name,
        )

    def record_step(self, step: ExecutionStep) -> ExecutionStep:
        """Append a step returned by measure_step()."""
        self._require_running("add a step to")
        expected_delta = self._delta_with_previous_step(step.elapsed_milliseconds)
        if step.delta_with_previous_step != expected_delta or step.elapsed_milliseconds > self.elapsed_milliseconds:
            raise InvalidStateError(
                f"Step {step.description!r} was not measured as the next step of '{self._method_name}'"
            )
        self._steps.append(step)
        return step

    def get_delta_with_previous_step(self) -> int:
        """Delta of the most recently added step, 0 if there is none."""
        if self._steps:
            return self._steps[-1].delta_with_previous_step
        return 0

    def _delta_with_previous_step(self, elapsed: int) -> int:
        if self._steps:
            return elapsed - self._steps[-1].elapsed_milliseconds
        return 0

    def _require_running(self, action: str) -> None:
        if self._status == ExecutionStatus.PENDING:
            raise InvalidStateError(
                f"Cannot {action} execution of '{self._method_name}': not started"
            )
        if self._status == ExecutionStatus.STOPPED:
            raise InvalidStateError(
                f"Cannot {action} execution of '{self._method_name}': already stopped"
            )
