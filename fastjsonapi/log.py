"""Package logger setup."""

from __future__ import annotations

import logging
import sys

from fastjsonapi.config import get_settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def init_logging(loglevel: int | str | None = None) -> logging.Logger:
    """
    Attach a stderr handler to the ``fastjsonapi`` logger once.
    Module loggers are children of it, so they share the handler and level.
    """
    log = logging.getLogger("fastjsonapi")
    if log.level == logging.NOTSET:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.setLevel(loglevel if loglevel is not None else get_settings().log_level.upper())
        log.addHandler(handler)
    return log
