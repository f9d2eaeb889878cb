import logging
from importlib import import_module

import pytest

from py_unitconv.logger import disable_file_logging, enable_file_logging, logger, set_log_level

logger_module = import_module("py_unitconv.logger")


@pytest.fixture
def debug_level():
    previous = logger.level
    set_log_level(logging.DEBUG)
    yield
    logger.setLevel(previous)


class TestLogLevel:

    @pytest.mark.parametrize("level, expected", [("warning", logging.WARNING), (logging.ERROR, logging.ERROR)])
    def test_set_log_level(self, level, expected):
        previous = logger.level
        try:
            set_log_level(level)
            assert logger.level == expected
        finally:
            logger.setLevel(previous)


class TestFileLogging:

    def test_enable_and_disable(self, tmp_path, converter, debug_level):
        log_file = tmp_path / 'conversions.log'
        enable_file_logging(str(log_file))
        try:
            assert logger_module.file_handler in logger.handlers
            converter.to("1 mi", "km")
        finally:
            disable_file_logging()
        assert logger_module.file_handler is None
        assert "length: mi -> km via mi -> ft" in log_file.read_text(encoding='utf-8')

    def test_handler_level(self, tmp_path, converter, debug_level):
        log_file = tmp_path / 'warnings.log'
        enable_file_logging(str(log_file), level=logging.WARNING)
        try:
            converter.to("1 mi", "km")
        finally:
            disable_file_logging()
        assert log_file.read_text(encoding='utf-8') == ""

    def test_reenable_replaces_handler(self, tmp_path):
        enable_file_logging(str(tmp_path / 'first.log'))
        first = logger_module.file_handler
        enable_file_logging(str(tmp_path / 'second.log'))
        try:
            assert first not in logger.handlers
            assert logger_module.file_handler is not first
        finally:
            disable_file_logging()

    def test_disable_is_idempotent(self):
        disable_file_logging()
        disable_file_logging()
        assert logger_module.file_handler is None
