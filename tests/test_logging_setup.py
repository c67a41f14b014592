"""
Unit tests for logging setup and the access-log filter.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from postboard.backend.core.utils.logging_setup import (
    UVICORN_LOGGERS,
    setup_logging,
    setup_logging_from_config,
)


class TestSetupLogging:
    def test_single_rich_console_handler(self, restore_logging) -> None:
        setup_logging("info")
        setup_logging("info")
        handlers = restore_logging.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert restore_logging.level == logging.INFO

    def test_uvicorn_loggers_propagate_to_root(self, restore_logging) -> None:
        logging.getLogger("uvicorn.access").addHandler(logging.NullHandler())
        logging.getLogger("uvicorn.error").propagate = False

        setup_logging(logging.WARNING)

        for name in UVICORN_LOGGERS:
            server_logger = logging.getLogger(name)
            assert server_logger.handlers == []
            assert server_logger.propagate

    def test_client_loggers_are_quieted(self, restore_logging) -> None:
        setup_logging(logging.DEBUG)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_log_file_receives_debug(self, restore_logging, tmp_path) -> None:
        log_file = tmp_path / "logs" / "postboard.log"
        setup_logging(logging.WARNING, log_file=log_file)

        logging.getLogger("postboard.test").debug("written to file only")
        for handler in restore_logging.handlers:
            handler.flush()

        assert "written to file only" in log_file.read_text(encoding="utf-8")

    def test_from_config(self, restore_logging) -> None:
        setup_logging_from_config({"level": "error", "file": None})
        assert restore_logging.level == logging.ERROR

    def test_explicit_level_wins_over_config(self, restore_logging) -> None:
        setup_logging_from_config({"level": "error"}, level=logging.DEBUG)
        assert restore_logging.level == logging.DEBUG

    def test_empty_config_defaults_to_info(self, restore_logging) -> None:
        setup_logging_from_config({})
        assert restore_logging.level == logging.INFO


class TestAccessLogFilter:
    def test_health_polls_are_dropped(self, app, caplog) -> None:
        access = logging.getLogger("uvicorn.access")
        with caplog.at_level(logging.INFO, logger="uvicorn.access"):
            access.info('127.0.0.1:5000 - "GET /api/health HTTP/1.1" 200')
            access.info('127.0.0.1:5000 - "GET / HTTP/1.1" 200')

        messages = [r.getMessage() for r in caplog.records if r.name == "uvicorn.access"]
        assert messages == ['127.0.0.1:5000 - "GET / HTTP/1.1" 200']
