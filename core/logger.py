"""Logging helpers for the application.

`get_logger` hands out loggers that share one stream handler and one
rotating file handler, so every module writes the same format to the console
and to `LOG_DIR/nutriguide.log`.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from core.config import Config

LOG_DIR = Config.LOG_DIR
os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(LOG_DIR, "nutriguide.log")

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)


def get_logger(name: str = __name__, level: int = None) -> logging.Logger:
    """Return a logger wired to the shared stream and file handlers.

    Handlers are attached once per logger name, so repeated calls from the
    same module do not duplicate output. The level defaults to `LOG_LEVEL`.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level if level is not None else logging.getLevelName(Config.LOG_LEVEL))
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
