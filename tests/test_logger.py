# tests/test_logger.py
"""Unit tests for the central logging setup."""

import logging
import os
from logging.handlers import RotatingFileHandler

from compliance_scheduler.utils.logger import get_logger, log_file_path


class TestLogger:
    def test_returns_named_logger(self):
        assert get_logger("compliance_scheduler.services.materializer").name == "compliance_scheduler.services.materializer"

    def test_root_configured_only_once(self):
        get_logger("a")
        before = list(logging.getLogger().handlers)
        get_logger("b")
        assert logging.getLogger().handlers == before

    def test_rotating_file_handler_writes_to_configured_path(self):
        get_logger("c")
        files = [h.baseFilename for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
        assert os.path.abspath(log_file_path()) in files
        assert log_file_path().endswith("scheduler.log")

    def test_sql_logging_off_by_default(self):
        get_logger("d")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
