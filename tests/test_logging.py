"""
Tests for the logging setup.
"""

import logging

import pytest

from email_hint.shared.logging import LIBRARY_LOGGERS, configure_logging


class TestConfigureLogging:
    def test_library_loggers_quiet_by_default(self) -> None:
        assert configure_logging("INFO") == logging.INFO

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        for name in LIBRARY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_debug_echoes_sql(self) -> None:
        configure_logging("debug")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    @pytest.mark.parametrize("level", ["LOUD", ""])
    def test_unknown_level_falls_back_to_info(self, level) -> None:
        assert configure_logging(level) == logging.INFO
