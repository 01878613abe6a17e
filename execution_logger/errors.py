"""
Execution Logger Errors

Usage errors raised by the logger and its execution records.
These are programmer mistakes, not runtime conditions: they are
raised immediately and never leave a half-written log line behind.
"""


class ExecutionLoggerError(Exception):
    """Base class for all execution logger errors."""
    pass


class InvalidOperationError(ExecutionLoggerError):
    """Raised when an operation needs an active method but the call stack is empty."""
    pass


class InvalidStateError(ExecutionLoggerError):
    """Raised when an ExecutionInfo is used outside its start/stop lifecycle."""
    pass
