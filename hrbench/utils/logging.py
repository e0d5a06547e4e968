"""Lightweight benchmark logging."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_file_logger(log_path: Path, level: int = logging.DEBUG) -> logging.Logger:
    """Route the ``hrbench`` loggers to a file."""

    logger = logging.getLogger("hrbench")
    logger.setLevel(level)
    logger.handlers.clear()
    handler = logging.FileHandler(log_path, mode="w")
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
