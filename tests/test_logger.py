"""
Tests for the logger factory
"""
import logging

import pytest

from bitkeys.logger import get_logger


def test_no_duplicate_handlers():
    first = get_logger("bitkeys.tests.logger")
    second = get_logger("bitkeys.tests.logger", log_level="DEBUG")

    assert first is second
    assert len(first.handlers) == 1
    assert first.level == logging.WARNING


def test_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "bitkeys.log"
    logger = get_logger("bitkeys.tests.file_logger", log_level="INFO", log_file=log_file)
    logger.info("derived child")

    for handler in logger.handlers:
        handler.flush()

    assert log_file.exists()
    assert "derived child" in log_file.read_text()


def test_level_names_and_numbers():
    assert get_logger("bitkeys.tests.numeric_logger", log_level=logging.DEBUG).level == logging.DEBUG
    assert get_logger("bitkeys.tests.named_logger", log_level="error").level == logging.ERROR

    with pytest.raises(ValueError):
        get_logger("bitkeys.tests.bad_level_logger", log_level="LOUD")
