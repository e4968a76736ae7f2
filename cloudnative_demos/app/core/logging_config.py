"""
Logging configuration shared by both demo services.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger.  Every line carries the timestamp, level
and logger name so that output from several instances behind a load
balancer can be told apart once the host identity is logged at
startup.  Configuration happens only once per process even though the
launcher builds two applications.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that are chatty at DEBUG level.
QUIET_LOGGERS = ("urllib3", "redis")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file to mirror log messages to.  Empty or ``None``
        means console only.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured, e.g. by pytest or by an earlier factory call.
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
