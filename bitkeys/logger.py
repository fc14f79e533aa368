"""
Logger setup shared by the bitkeys modules
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from bitkeys.core.formats import LOGGING

__all__ = ["get_logger"]


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


def get_logger(name: str, log_level: int | str | None = None, log_file: Optional[Path | str] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Returns the named logger with a stdout handler and, if log_file is given, a file handler.

    Handlers are attached on the first call only; later calls return the logger as already configured. The level
    defaults to LOGGING.LEVEL and may be a level name or number.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level(log_level if log_level is not None else LOGGING.LEVEL))
    formatter = logging.Formatter(format_string or LOGGING.FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(stream=sys.stdout)]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
