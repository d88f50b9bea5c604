"""Tests for package logging setup."""

import io
import logging

from sheet_beautify.logging import disable_verbose, enable_verbose


class TestVerboseLogging:
    """Test enabling and disabling verbose output."""

    def test_enable_adds_stream_handler(self):
        logger = logging.getLogger("sheet_beautify")
        try:
            enable_verbose("DEBUG")
            assert logger.level == logging.DEBUG
            streams = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
            assert len(streams) == 1
            enable_verbose("INFO")
            streams = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
            assert len(streams) == 1
        finally:
            disable_verbose()

    def test_disable_keeps_null_handler(self):
        logger = logging.getLogger("sheet_beautify")
        enable_verbose()
        disable_verbose()
        assert logger.level == logging.WARNING
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_module_loggers_propagate(self, caplog):
        with caplog.at_level(logging.INFO, logger="sheet_beautify"):
            logging.getLogger("sheet_beautify.beautify.engine").info("moved G1")
        assert "moved G1" in caplog.text

    def test_custom_stream_and_format(self):
        stream = io.StringIO()
        try:
            enable_verbose(logging.DEBUG, fmt="%(message)s", stream=stream)
            logging.getLogger("sheet_beautify.builder").debug("placed A")
        finally:
            disable_verbose()
        assert stream.getvalue() == "placed A\n"
