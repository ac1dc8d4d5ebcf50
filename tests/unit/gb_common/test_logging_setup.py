"""Tests for logging configuration and env parsing."""

from __future__ import annotations

import logging

import pytest

from gb_common.config.env import parse_bool_env
from gb_common.logging import configure_logging


pytestmark = pytest.mark.unit_common


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, None), ("1", True), ("Yes", True), ("on", True), ("0", False), ("nope", False)],
)
def test_parse_bool_env(raw, expected) -> None:
    assert parse_bool_env(raw) is expected


def test_configure_logging_uses_env_level(monkeypatch, restore_root_logger) -> None:
    monkeypatch.setenv("GB_LOG_LEVEL", "error")
    configure_logging(force=True)
    assert restore_root_logger.level == logging.ERROR


def test_configure_logging_debug_wins(monkeypatch, restore_root_logger) -> None:
    monkeypatch.setenv("GB_LOG_LEVEL", "error")
    configure_logging(debug=True, force=True)
    assert restore_root_logger.level == logging.DEBUG


def test_configure_logging_writes_log_file(tmp_path, restore_root_logger) -> None:
    log_file = tmp_path / "gb.log"
    configure_logging(level="INFO", log_file=str(log_file), json=True, force=True)
    logging.getLogger("gb.test").info("stored report")
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert "stored report" in log_file.read_text()
