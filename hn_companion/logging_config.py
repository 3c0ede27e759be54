"""
Logging setup shared by the CLI and every component.
"""

import logging
import sys
import time
from functools import wraps
from typing import Optional

LOGGER_NAMESPACE = "hn_companion"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty at DEBUG; capped at WARNING
NOISY_LIBRARIES = ("requests", "urllib3", "bs4")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger once for the whole process.

    Components never switch logging on or off themselves; the caller decides
    the level here.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to INFO
        log_file: Also append records to this file

    Returns:
        The package logger
    """
    log_level = getattr(logging, str(level).upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    # stdout carries the summary, so records go to stderr
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    for name in NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.debug(f"Logging at {logging.getLevelName(log_level)}" + (f", also to {log_file}" if log_file else ""))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a component, nested under the package namespace."""
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def log_performance(logger: logging.Logger, operation: str):
    """
    Time a network-bound call.

    Start is logged at DEBUG, completion at INFO and failure at ERROR; the
    exception is re-raised unchanged.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger.debug(f"Starting {operation}")
            started = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Failed {operation} after {time.time() - started:.2f}s: {e}")
                raise
            logger.info(f"Completed {operation} in {time.time() - started:.2f}s")
            return result
        return wrapper
    return decorator
