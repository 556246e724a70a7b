"""
Logging for the workforce analytics engine.

The engine is embedded in a host service, so by default it only attaches a
NullHandler to the package logger and leaves output to the host. Scripts and
notebooks call ``setup_logging`` to get engine records on stderr.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = 'workforce_analytics'
LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(log_level: Union[str, int] = "WARNING",
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Route engine records to stderr and, optionally, a file.

    Calling it again replaces the handlers installed by the previous call;
    handlers added by the host are left alone. Records still propagate to
    the root logger.

    Args:
        log_level: Level name or number for the package logger
        log_file: Optional path that also receives every record at that level

    Returns:
        The package logger
    """
    level = _resolve_level(log_level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if getattr(h, '_workforce_analytics', False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._workforce_analytics = True
        logger.addHandler(handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Module loggers (``get_logger(__name__)``) are children of the package logger."""
    return logging.getLogger(name)
