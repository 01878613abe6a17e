"""
Log Format

Configuration value object for the text log layout.
Every prefix, separator and template used to assemble log lines lives here.

DESIGN RULES:
- Immutable (replace, don't mutate)
- Templates validated when the format is built, never at format time
- Placeholders are positional: {0}, {1}
"""

from datetime import datetime
from string import Formatter
from typing import Any, List, Optional, Set, Tuple, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from execution_logger.core.config import Settings


def placeholder_fields(template: str) -> List[str]:
    """
    List the replacement field names referenced by a template.

    Raises:
        ValueError: If the template has unbalanced braces.
    """
    return [
        field_name
        for _, field_name, _, _ in Formatter().parse(template)
        if field_name is not None
    ]


def _check_template(template: str, expected: Set[str], sample_args: Tuple[Any, ...]) -> str:
    """
    Validate a template against the placeholders it must use and the
    argument types it will be rendered with.
    """
    for _, field_name, format_spec, _ in Formatter().parse(template):
        if field_name is None:
            continue
        if not field_name.isdigit():
            raise ValueError(
                f"Template {template!r} must use positional placeholders only ({{0}}, {{1}})"
            )
        if format_spec and ("{" in format_spec or "}" in format_spec):
            raise ValueError(f"Template {template!r} must not nest fields in a format spec")

    fields = set(placeholder_fields(template))
    if fields != expected:
        wanted = ", ".join("{" + f + "}" for f in sorted(expected))
        raise ValueError(f"Template {template!r} must reference exactly {wanted}")

    try:
        template.format(*sample_args)
    except (ValueError, IndexError, KeyError, TypeError) as e:
        raise ValueError(f"Template {template!r} cannot be rendered: {e}") from e
    return template


class LogFormat(BaseModel):
    """
    Layout of the execution log.

    Build a new instance (or use model_validate on a merged dict)
    to change the layout; instances are frozen.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    tabulation_prefix: str = "\t"
    method_started_log_prefix: str = " >> Method "
    method_step_log_prefix: str = " Method "
    method_ended_log_prefix: str = " << Method "
    logger_name_format: str = "[{0}] "
    enable_logger_name: bool = True
    step_name_format: str = "[Step: {0}]: "
    start_at_string: str = " start at "
    end_at_string: str = " end at "
    at_string: str = " at "
    method_name_quote_string: str = "'"
    step_name_separator: str = ": "
    method_execution_duration_format: str = ", duration: {0} ms"
    method_step_duration_format: str = ", elapsed from start: {0} ms, delta={1} ms"

    # strftime pattern for displayed timestamps
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    line_separator: str = "\n"

    @field_validator("logger_name_format", "step_name_format")
    @classmethod
    def check_name_template(cls, value: str) -> str:
        return _check_template(value, {"0"}, ("name",))

    @field_validator("method_execution_duration_format")
    @classmethod
    def check_duration_template(cls, value: str) -> str:
        return _check_template(value, {"0"}, (0,))

    @field_validator("method_step_duration_format")
    @classmethod
    def check_step_duration_template(cls, value: str) -> str:
        return _check_template(value, {"0", "1"}, (0, 0))

    @classmethod
    def from_settings(cls, source: Optional["Settings"] = None) -> "LogFormat":
        """
        Build the default format, honouring application settings.

        Args:
            source: Settings to read. Defaults to the process settings.
        """
        if source is None:
            from execution_logger.core.config import settings as source
        return cls(
            enable_logger_name=source.enable_logger_name,
            tabulation_prefix=source.tabulation_prefix,
            timestamp_format=source.timestamp_format,
        )

    def indent(self, level: int) -> str:
        return self.tabulation_prefix * level

    def format_logger_name(self, logger_name: str) -> str:
        """Logger name segment, empty when logger names are disabled."""
        if not self.enable_logger_name:
            return ""
        return self.logger_name_format.format(logger_name)

    def format_step_name(self, step_name: Optional[str]) -> str:
        if step_name is None:
            return ""
        return self.step_name_format.format(step_name)

    def format_method_duration(self, elapsed_ms: int) -> str:
        return self.method_execution_duration_format.format(elapsed_ms)

    def format_step_duration(self, elapsed_ms: int, delta_ms: int) -> str:
        return self.method_step_duration_format.format(elapsed_ms, delta_ms)

    def format_timestamp(self, timestamp: datetime) -> str:
        return timestamp.strftime(self.timestamp_format)

    def quote(self, method_name: str) -> str:
        return f"{self.method_name_quote_string}{method_name}{self.method_name_quote_string}"
