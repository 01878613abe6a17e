# Execution Logger Package
from execution_logger.errors import ExecutionLoggerError, InvalidOperationError, InvalidStateError
from execution_logger.format import LogFormat
from execution_logger.info import ExecutionInfo, ExecutionStatus
from execution_logger.logger import ExecutionLogger
from execution_logger.step import ExecutionStep

__all__ = [
    "ExecutionLogger",
    "ExecutionInfo",
    "ExecutionStatus",
    "ExecutionStep",
    "LogFormat",
    "ExecutionLoggerError",
    "InvalidOperationError",
    "InvalidStateError",
]
