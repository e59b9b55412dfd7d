"""Logging setup shared by the API and the command line."""
from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Attach file and console handlers to the root logger, once per process.

    Explicit arguments win over ``STUDYLENS_LOG_LEVEL`` / ``STUDYLENS_LOG_FILE``.
    An empty log file name disables the file handler.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = (level or os.getenv("STUDYLENS_LOG_LEVEL", "INFO")).upper()
    if log_file is None:
        log_file = os.getenv("STUDYLENS_LOG_FILE", "studylens.log")

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
