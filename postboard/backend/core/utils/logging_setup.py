"""
Logging for the CLI and the web server.

All output goes through a single Rich console handler on the root logger.
uvicorn is started without its own logging config, and its loggers are
stripped of handlers here so server and access records reach that handler
too (and the access-log filter installed by the app applies to them).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Chatty below WARNING: one line per RPC call from PostboardClient
CLIENT_LOGGERS = ("httpx", "httpcore")

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | str | None = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level, as a number or a name such as ``"info"``
        log_file: Optional file; it also receives DEBUG records the console hides
    """
    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file else level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging_from_config(log_cfg: dict[str, Any], level: int | str | None = None) -> None:
    """Apply the ``logging`` config section; an explicit ``level`` wins over it."""
    setup_logging(
        level if level is not None else log_cfg.get("level") or logging.INFO,
        log_file=log_cfg.get("file"),
    )
