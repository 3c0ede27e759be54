"""
Tests for logging setup.
"""

import logging

import pytest

from hn_companion.logging_config import get_logger, log_performance, setup_logging


class TestLogging:

    def teardown_method(self):
        logging.basicConfig(level=logging.WARNING, force=True)

    def test_setup_logging_level_and_file(self, tmp_path):
        log_file = tmp_path / "run.log"

        logger = setup_logging("debug", str(log_file))
        get_logger("Sample").debug("hello from sample")

        assert logger.name == "hn_companion"
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING
        assert "hn_companion.Sample - DEBUG - hello from sample" in log_file.read_text()

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")

        assert logging.getLogger().level == logging.INFO

    def test_get_logger_namespacing(self):
        assert get_logger("Cache").name == "hn_companion.Cache"
        assert get_logger("hn_companion.gateway").name == "hn_companion.gateway"
        assert get_logger("hn_companionish").name == "hn_companion.hn_companionish"


class TestLogPerformance:

    def test_success_logged(self, caplog):
        caplog.set_level(logging.DEBUG)

        @log_performance(get_logger("perf"), "probing")
        def fetch_answer():
            return 42

        assert fetch_answer() == 42
        assert any("Completed probing" in record.message for record in caplog.records)

    def test_failure_logged_and_reraised(self, caplog):
        @log_performance(get_logger("perf"), "probing")
        def fetch_answer():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            fetch_answer()
        assert any(record.levelno == logging.ERROR and "boom" in record.message for record in caplog.records)
