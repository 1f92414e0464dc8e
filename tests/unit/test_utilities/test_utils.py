"""Tests for logging and module loading utilities."""

import io
import json
import logging
import sys
from collections.abc import Generator

import pytest

from sqlmigrate.utils.logging import StructuredFormatter, configure_logging, get_logger, log_with_context
from sqlmigrate.utils.module_loader import import_string


@pytest.fixture
def restore_root_logger() -> "Generator[logging.Logger, None, None]":
    root = logging.getLogger("sqlmigrate")
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate


def test_get_logger_namespace() -> None:
    """Test loggers are placed under the sqlmigrate namespace."""
    assert get_logger().name == "sqlmigrate"
    assert get_logger("migrations.commands").name == "sqlmigrate.migrations.commands"
    assert get_logger("sqlmigrate.cli").name == "sqlmigrate.cli"


def test_structured_logging(restore_root_logger: logging.Logger) -> None:
    """Test structured records are JSON with extra fields."""
    stream = io.StringIO()
    configure_logging(level="INFO", format_style="structured", stream=stream)

    log_with_context(get_logger("test"), logging.INFO, "migration.command.summary", command="up", status="complete")

    entry = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert entry["message"] == "migration.command.summary"
    assert entry["logger"] == "sqlmigrate.test"
    assert entry["level"] == "INFO"
    assert entry["command"] == "up"
    assert entry["status"] == "complete"


def test_simple_logging(restore_root_logger: logging.Logger) -> None:
    """Test the simple format writes plain text."""
    stream = io.StringIO()
    configure_logging(level="DEBUG", format_style="simple", stream=stream)

    get_logger("test").warning("Finished after %s", "1s")

    assert "sqlmigrate.test - WARNING - Finished after 1s" in stream.getvalue()


def test_configure_logging_replaces_handlers(restore_root_logger: logging.Logger) -> None:
    """Test reconfiguring leaves exactly one console handler and stops propagation."""
    configure_logging(level="INFO", format_style="simple", stream=io.StringIO())
    stream = io.StringIO()
    configure_logging(level="INFO", format_style="structured", stream=stream)

    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.handlers[0].stream is stream  # type: ignore[attr-defined]
    assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)
    assert restore_root_logger.propagate is False


def test_log_with_context_respects_level(restore_root_logger: logging.Logger) -> None:
    """Test records below the configured level are dropped."""
    stream = io.StringIO()
    configure_logging(level="WARNING", format_style="structured", stream=stream)

    log_with_context(get_logger("test"), logging.INFO, "ignored")

    assert stream.getvalue() == ""


def test_structured_formatter_exception() -> None:
    """Test exception info is included."""
    try:
        raise ValueError("bad")
    except ValueError:
        record = logging.getLogger("x").makeRecord("x", logging.ERROR, "f", 1, "failed", (), sys.exc_info())

    entry = json.loads(StructuredFormatter().format(record))
    assert "ValueError: bad" in entry["exception"]


def test_import_string() -> None:
    """Test dotted and colon paths resolve attributes."""
    assert import_string("sqlmigrate.migrations.paths.normalize_directory")("./x") == "x/"
    assert import_string("sqlmigrate.migrations.paths:normalize_directory")("./x") == "x/"


@pytest.mark.parametrize("path", ["sqlmigrate.migrations.paths.missing", "not_a_module_xyz", "sqlmigrate:missing"])
def test_import_string_errors(path: str) -> None:
    """Test unresolvable paths raise ImportError."""
    with pytest.raises(ImportError):
        import_string(path)
