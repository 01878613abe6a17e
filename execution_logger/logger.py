"""
Execution Logger

Records entry/exit of nested method calls and renders them as an
indented, human-readable text log.

DESIGN RULES:
- One instance per logical flow (no globals, inject it where needed)
- Not thread-safe: serialize access or use one logger per thread/task
- Failed operations never touch already written lines
- Method identity is always passed in by the caller
"""

import logging
import time
from datetime import datetime
from typing import Any, Callable, List, Optional

from execution_logger.errors import InvalidOperationError
from execution_logger.format import LogFormat
from execution_logger.info import ExecutionInfo


logger = logging.getLogger(__name__)


class ExecutionLogger:
    """
    Per-instance method execution logger.

    Usage:
        log = ExecutionLogger("Orders")
        log.start_method("process")
        log.log_method_step("validated input", step_name="validate")
        log.end_method()
        print(log.get_log())

    A "started" line is written at the depth of the call frame before
    it is pushed, and its "ended" line after it is popped, so both
    lines of a pair always share the same indentation.
    """

    def __init__(
        self,
        logger_name: str,
        log_format: Optional[LogFormat] = None,
        clock: Callable[[], int] = time.monotonic_ns,
        wall_clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize an execution logger.

        Args:
            logger_name: Name shown in every line when logger names are enabled.
            log_format: Layout of the log. Defaults to LogFormat.from_settings().
            clock: Monotonic clock in nanoseconds, used for durations.
            wall_clock: Calendar clock, used for displayed timestamps.
        """
        self._logger_name = logger_name
        self._format = log_format if log_format is not None else LogFormat.from_settings()
        self._clock = clock
        self._wall_clock = wall_clock
        self._stack: List[ExecutionInfo] = []
        self._buffer: List[str] = []

    @property
    def logger_name(self) -> str:
        return self._logger_name

    @property
    def nesting_level(self) -> int:
        """Current call depth (0 when no method is active)."""
        return len(self._stack)

    @property
    def current_execution(self) -> Optional[ExecutionInfo]:
        """Innermost active method, None when idle."""
        return self._stack[-1] if self._stack else None

    @property
    def log_format(self) -> LogFormat:
        return self._format

    @log_format.setter
    def log_format(self, value: LogFormat) -> None:
        if not isinstance(value, LogFormat):
            raise TypeError(f"log_format must be a LogFormat, got {type(value).__name__}")
        self._format = value

    def configure(self, **changes: Any) -> None:
        """
        Replace selected layout fields.

        The new format is validated as a whole; on failure the current
        format stays in place and pydantic's ValidationError propagates.

        Example:
            log.configure(enable_logger_name=False, tabulation_prefix="  ")
        """
        merged = {**self._format.model_dump(), **changes}
        self._format = LogFormat.model_validate(merged)

    # ------------------------------------------------------------
    # Method lifecycle
    # ------------------------------------------------------------

    def start_method(self, method_identity: str) -> None:
        """
        Open a new method frame and write its "started" line.

        Args:
            method_identity: Name of the method being entered.
        """
        info = ExecutionInfo(method_identity, clock=self._clock, wall_clock=self._wall_clock)
        info.start()

        fmt = self._format
        self._write_line(
            fmt.method_started_log_prefix,
            fmt.quote(info.method_name),
            fmt.start_at_string,
            fmt.format_timestamp(info.start_timestamp),
        )

        self._stack.append(info)
        logger.debug("[%s] started %s at depth %d", self._logger_name, method_identity, len(self._stack) - 1)

    def log_method_step(self, step_description: str, step_name: Optional[str] = None) -> None:
        """
        Record a step of the innermost active method.

        Args:
            step_description: What happened.
            step_name: Optional step label, rendered with step_name_format.

        Raises:
            InvalidOperationError: If no method is active.
        """
        info = self.current_execution
        if info is None:
            raise InvalidOperationError(
                f"Cannot log step {step_description!r}: no active method on logger '{self._logger_name}'"
            )

        # Render before recording so a failed line leaves no orphan step
        step = info.measure_step(step_description, step_name)

        fmt = self._format
        line = self._render_line(
            fmt.method_step_log_prefix,
            fmt.quote(info.method_name),
            fmt.step_name_separator,
            fmt.format_step_name(step.name),
            step.description,
            fmt.at_string,
            fmt.format_timestamp(self._wall_clock()),
            fmt.format_step_duration(step.elapsed_milliseconds, step.delta_with_previous_step),
        )

        info.record_step(step)
        self._buffer.append(line)

    def end_method(self) -> None:
        """
        Close the innermost method frame and write its "ended" line.

        Ignored when no method is active.
        """
        if not self._stack:
            logger.debug("[%s] end_method ignored: no active method", self._logger_name)
            return

        info = self._stack.pop()
        info.stop()

        fmt = self._format
        self._write_line(
            fmt.method_ended_log_prefix,
            fmt.quote(info.method_name),
            fmt.end_at_string,
            fmt.format_timestamp(info.end_timestamp),
            fmt.format_method_duration(info.elapsed_milliseconds),
        )
        logger.debug(
            "[%s] ended %s after %d ms", self._logger_name, info.method_name, info.elapsed_milliseconds
        )

    # ------------------------------------------------------------
    # Buffer and stack management
    # ------------------------------------------------------------

    def clear_log(self) -> None:
        """Empty the text log; the call stack is kept."""
        self._buffer.clear()

    def clear_logged_methods_stack(self) -> None:
        """Drop all active frames and reset the depth; the text log is kept."""
        if self._stack:
            logger.debug(
                "[%s] discarding %d unfinished method(s)", self._logger_name, len(self._stack)
            )
        self._stack.clear()

    def clear_all(self) -> None:
        self.clear_log()
        self.clear_logged_methods_stack()

    def get_log(self) -> str:
        """Snapshot of the log text. Does not clear it."""
        return "".join(self._buffer)

    def _render_line(self, *parts: str) -> str:
        fmt = self._format
        return "".join((
            fmt.indent(self.nesting_level),
            fmt.format_logger_name(self._logger_name),
            *parts,
            fmt.line_separator,
        ))

    def _write_line(self, *parts: str) -> None:
        self._buffer.append(self._render_line(*parts))
