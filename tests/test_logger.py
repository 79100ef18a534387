"""Unit tests for log-level resolution and logging configuration."""

import logging

import pytest

import transcript_analyzer.utils.logger as logger_utils


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handler_levels = [
        (handler, handler.level) for handler in root_logger.handlers
    ]
    original_configured = logger_utils._LOGGING_CONFIGURED
    yield
    root_logger.setLevel(original_level)
    for handler, level in original_handler_levels:
        handler.setLevel(level)
    logger_utils._LOGGING_CONFIGURED = original_configured


def test_configure_logging_defaults_to_info(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Default configuration should resolve to INFO when LOG_LEVEL is unset."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert logger_utils.configure_logging() == logging.INFO


def test_configure_logging_reads_log_level_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")

    assert logger_utils.configure_logging() == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_explicit_level_overrides_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Explicit runtime level should override LOG_LEVEL."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    assert logger_utils.configure_logging("DEBUG") == logging.DEBUG


def test_configure_logging_unknown_level_falls_back_to_info(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert logger_utils.configure_logging("LOUD") == logging.INFO


def test_get_logger_does_not_reapply_env_after_configuration(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Once configured, later logger retrieval keeps the applied level."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    logger_utils.configure_logging("INFO")

    logger = logger_utils.get_logger("transcript_analyzer.test")

    assert logger.name == "transcript_analyzer.test"
    assert logging.getLogger().level == logging.INFO
