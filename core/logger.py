"""Logging helpers for the dietary recommendation service.

`get_logger` hands out loggers that share one stream handler and one
rotating file handler, so every module writes the same format to stderr and
to `logs/dietary.log`. The directory and default level can be overridden
with `DIETARY_LOG_DIR` and `DIETARY_LOG_LEVEL`.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_DIR = os.getenv("DIETARY_LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))
os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(LOG_DIR, "dietary.log")
LOG_LEVEL = logging.getLevelName(os.getenv("DIETARY_LOG_LEVEL", "INFO").upper())

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)


def get_logger(name: str = __name__, level: int = LOG_LEVEL) -> logging.Logger:
    """Return a logger wired to the shared stream and rotating file handlers.

    Handlers are attached once per logger name, so repeated calls from the
    same module do not duplicate output.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
