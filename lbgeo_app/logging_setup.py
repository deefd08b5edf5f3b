from __future__ import annotations

import logging
from pathlib import Path

from lbgeo_app.config import AppConfig

PACKAGE_LOGGER = "lbgeo_app"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(config: AppConfig) -> logging.Logger:
    """Attach console and file handlers to the package logger (once)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.getLevelName(config.log_level)
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    logs_dir = Path(config.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = (logs_dir / "lbgeo.log").resolve()
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(
        isinstance(handler, logging.FileHandler)
        and Path(handler.baseFilename) == log_path
        for handler in logger.handlers
    ):
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not any(
        type(handler) is logging.StreamHandler for handler in logger.handlers
    ):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    return logger
