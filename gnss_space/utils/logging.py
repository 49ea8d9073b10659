"""Logging helpers for the GPS space segment."""

from __future__ import annotations

import logging


def get_logger(name: str = "gnss_space", level: int | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if name == "gnss_space" and not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    if level is not None:
        logger.setLevel(level)
    return logger
