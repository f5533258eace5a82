"""File logging setup; the terminal itself belongs to the dashboard."""

from __future__ import annotations

import copy
import logging
import logging.config
import os
import tempfile

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

BASE_LOG_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple_file": {
            "format": "%(asctime)s - %(name)22s:%(lineno)-4d - %(levelname)-7s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "file_handler": {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "simple_file",
            "filename": "netdash.log",
            "encoding": "utf-8",
        },
    },
    "loggers": {
        "netdash_core": {
            "handlers": ["file_handler"],
            "propagate": False,
            "level": "INFO",
        },
    },
    "root": {
        "handlers": ["file_handler"],
        "level": "WARNING",
    },
}


def default_log_path() -> str:
    return os.path.join(tempfile.gettempdir(), "netdash.log")


def setup_logging(level: str = "INFO", log_file: str | None = None) -> tuple[str, str]:
    """Route all logging to a file.

    Returns ``(log_file_path, level)``; unknown levels fall back to INFO.
    """
    level = level.upper()
    if level not in VALID_LEVELS:
        level = "INFO"

    log_path = log_file or default_log_path()
    parent = os.path.dirname(log_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    log_cfg: dict = copy.deepcopy(BASE_LOG_CFG)
    log_cfg["handlers"]["file_handler"]["filename"] = log_path
    log_cfg["loggers"]["netdash_core"]["level"] = level
    log_cfg["root"]["level"] = level if level == "DEBUG" else "WARNING"
    logging.config.dictConfig(log_cfg)
    logging.getLogger(__name__).info("logging initialized at %s -> %s", level, log_path)
    return log_path, level
