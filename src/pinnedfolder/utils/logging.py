"""Application logger helpers."""

from __future__ import annotations

import logging
from typing import Optional, Union

APP_LOGGER_NAME = "pinnedfolder"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the application logger or one of its children."""

    if not name:
        return logging.getLogger(APP_LOGGER_NAME)
    if name == APP_LOGGER_NAME or name.startswith(APP_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Attach a stream handler to the application logger once."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    if not any(getattr(handler, "_pinnedfolder", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._pinnedfolder = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
