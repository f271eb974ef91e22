"""Tests for verbose logging."""

from __future__ import annotations

import logging
from pathlib import Path

from checkbench.verbose import setup_logger


def test_verbose_logger_creates_debug_log(tmp_path: Path):
    """Logger should always create debug.log file."""
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_verbose_logger_writes_to_file(tmp_path: Path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "DEBUG checkbench:" in content


def test_library_loggers_propagate_to_debug_file(tmp_path: Path):
    """Module loggers are children of "checkbench" and land in the same file."""
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    logging.getLogger("checkbench.runner").debug("from the runner")

    assert "checkbench.runner: from the runner" in debug_file.read_text()


def test_verbose_mode_adds_stderr_handler(tmp_path: Path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    assert len(logger.handlers) == 2
    handler_types = [type(h).__name__ for h in logger.handlers]
    assert "StreamHandler" in handler_types
    assert "FileHandler" in handler_types


def test_non_verbose_mode_only_file_handler(tmp_path: Path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=False)

    assert [type(h).__name__ for h in logger.handlers] == ["FileHandler"]


def test_logger_creates_parent_directories(tmp_path: Path):
    debug_file = tmp_path / "nested" / "dir" / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    assert debug_file.exists()


def test_unique_logger_names_create_separate_instances(tmp_path: Path):
    """Different logger names write to their own files."""
    log1 = tmp_path / "one.log"
    log2 = tmp_path / "two.log"

    logger1 = setup_logger(log1, logger_name="checkbench_isolation_one")
    logger2 = setup_logger(log2, logger_name="checkbench_isolation_two")

    assert logger1 is not logger2

    logger1.debug("Message from one")
    logger2.debug("Message from two")

    assert "Message from one" in log1.read_text()
    assert "Message from two" not in log1.read_text()
    assert "Message from two" in log2.read_text()
    assert "Message from one" not in log2.read_text()


def test_reconfiguring_replaces_previous_handlers(tmp_path: Path):
    """A second setup for the same name points the logger at the new file only."""
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    setup_logger(first, logger_name="checkbench_reused")
    logger = setup_logger(second, logger_name="checkbench_reused")
    logger.debug("after reconfigure")

    assert len(logger.handlers) == 1
    assert "after reconfigure" in second.read_text()
    assert "after reconfigure" not in first.read_text()
