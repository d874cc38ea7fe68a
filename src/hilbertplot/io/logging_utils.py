"""
logging_utils.py
================

One place to configure logging for a script run.

setup_logger() attaches handlers to the package logger "hilbertplot" only.
Library modules never configure logging; they log through child loggers
("hilbertplot.pipeline", ...) whose records propagate up to these handlers.

Output
------
• console (stderr), always
• <out_dir>/run.log, when a path is given (overwritten per run)
"""

import logging
from pathlib import Path
from typing import Optional, Union


LOGGER_NAME = "hilbertplot"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from_name(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logger(log_path: Optional[Path] = None, level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Configure and return the "hilbertplot" logger.

    Parameters
    ----------
    log_path : Path or None
        File to log to in addition to the console.
    level : str or int
        "DEBUG" ... "CRITICAL" (case-insensitive); unknown names fall back
        to INFO.

    Calling it again while handlers are attached is a no-op, so scripts and
    tests can call it freely without doubling every line.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(_level_from_name(level))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if log_path is not None:
        log_path = Path(log_path).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="w", encoding="utf-8"))

    for h in handlers:
        h.setLevel(logger.level)
        h.setFormatter(formatter)
        logger.addHandler(h)

    if log_path is not None:
        logger.info("Logging to file: %s", log_path)
    return logger


def reset_logger() -> None:
    """Detach and close every handler on the "hilbertplot" logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
