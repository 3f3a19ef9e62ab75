"""Tests for graphql_response.logging."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from graphql_response.logging import (
    LOG_FILE_NAME,
    ROOT_LOGGER,
    ConsoleFormatter,
    JSONLFormatter,
    log_with_context,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """setup_logging() reconfigures the package logger; undo it after each test."""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def _record(
    message: str = "hello", level: int = logging.INFO, **extra: object
) -> logging.LogRecord:
    record = logging.LogRecord("graphql_response.test", level, __file__, 42, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONLFormatter:
    def test_basic_entry(self) -> None:
        entry = json.loads(JSONLFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "graphql_response.test"
        assert entry["message"] == "hello"
        assert entry["timestamp"].endswith("Z")
        assert "context" not in entry
        assert "source" not in entry

    def test_context_is_included(self) -> None:
        entry = json.loads(JSONLFormatter().format(_record(context={"status": 400})))
        assert entry["context"] == {"status": 400}

    def test_warnings_carry_source(self) -> None:
        entry = json.loads(JSONLFormatter().format(_record(level=logging.WARNING)))
        assert entry["source"]["line"] == 42

    def test_single_line(self) -> None:
        assert "\n" not in JSONLFormatter().format(_record("multi\nline"))


class TestConsoleFormatter:
    def test_info_has_no_level_name(self) -> None:
        line = ConsoleFormatter().format(_record())
        assert "[graphql_response.test]" in line
        assert "INFO" not in line
        assert line.endswith("hello")

    def test_other_levels_and_context(self) -> None:
        line = ConsoleFormatter().format(
            _record(level=logging.DEBUG, context={"status": 405, "method": "PUT"})
        )
        assert "DEBUG" in line
        assert line.endswith("(status=405 method=PUT)")


class TestSetupLogging:
    def test_console_only(self) -> None:
        logger = setup_logging(level=logging.DEBUG)
        assert logger.name == ROOT_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, ConsoleFormatter)

    def test_json_console(self) -> None:
        logger = setup_logging(json_console=True)
        assert isinstance(logger.handlers[0].formatter, JSONLFormatter)

    def test_file_handler_writes_jsonl(self, tmp_path: Path) -> None:
        setup_logging(level=logging.INFO, log_dir=tmp_path / "logs")
        logger = logging.getLogger("graphql_response.response")
        log_with_context(logger, logging.INFO, "served", status=200)
        for handler in logging.getLogger(ROOT_LOGGER).handlers:
            handler.flush()

        lines = (tmp_path / "logs" / LOG_FILE_NAME).read_text().splitlines()
        entry = json.loads(lines[-1])
        assert entry["message"] == "served"
        assert entry["logger"] == "graphql_response.response"
        assert entry["context"] == {"status": 200}

    def test_repeated_setup_replaces_handlers(self, tmp_path: Path) -> None:
        setup_logging(log_dir=tmp_path)
        logger = setup_logging()
        assert len(logger.handlers) == 1


class TestLogWithContext:
    def test_merges_context_and_kwargs(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("graphql_response.test")
        with caplog.at_level(logging.INFO, logger=ROOT_LOGGER):
            log_with_context(logger, logging.INFO, "msg", {"a": 1}, b=2)
        assert caplog.records[-1].context == {"a": 1, "b": 2}

    def test_no_context(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("graphql_response.test")
        with caplog.at_level(logging.INFO, logger=ROOT_LOGGER):
            log_with_context(logger, logging.INFO, "msg")
        assert not hasattr(caplog.records[-1], "context")
