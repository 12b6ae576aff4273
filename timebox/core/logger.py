"""
Logging setup shared by the application modules.
"""

import logging
import sys

from timebox.core.config import get_settings

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a configured logger for a module.

    Handlers are attached once per logger name, so repeated calls are safe.
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(logging.DEBUG if get_settings().DEBUG else logging.INFO)
    return log


logger = setup_logger("timebox")
