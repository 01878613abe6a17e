"""
Settings and logging setup tests
"""

import logging

import pytest

from execution_logger.core.config import Settings
from execution_logger.core.logging import PACKAGE_LOGGER, configure_logging


def test_settings_defaults(monkeypatch):
    for var in ("ENABLE_LOGGER_NAME", "TABULATION_PREFIX", "TIMESTAMP_FORMAT", "LOG_LEVEL"):
        monkeypatch.delenv(f"EXECUTION_LOGGER_{var}", raising=False)

    settings = Settings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.enable_logger_name is True
    assert settings.tabulation_prefix == "\t"


def test_settings_env_override(monkeypatch):
    monkeypatch.setenv("EXECUTION_LOGGER_ENABLE_LOGGER_NAME", "false")
    monkeypatch.setenv("EXECUTION_LOGGER_LOG_LEVEL", "DEBUG")

    settings = Settings(_env_file=None)

    assert settings.enable_logger_name is False
    assert settings.log_level == "DEBUG"


@pytest.fixture
def restore_package_logger():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = package_logger.level
    yield package_logger
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = True


def test_configure_logging_is_idempotent(restore_package_logger):
    configured = configure_logging("DEBUG")
    configure_logging("DEBUG")

    assert configured is restore_package_logger
    assert configured.level == logging.DEBUG
    assert len(configured.handlers) == 1
    assert configured.propagate is False
    # Root logger untouched
    assert all(h not in logging.getLogger().handlers for h in configured.handlers)
