"""Logging configuration and utilities for py_unitconv library.

The module exposes the library logger and helpers to adjust its verbosity and to mirror
its records into a file. By default only the console handler is attached and the level
is INFO; DEBUG records trace configuration discovery and conversion path resolution.

Global Variables:
    - logger: Library logger, named `py_unitconv`.
    - file_handler: Active file handler, None while file logging is disabled.

Functions:
    set_log_level: Change the library logger level.
    enable_file_logging: Mirror log records into a file.
    disable_file_logging: Detach and close the file handler.

Examples:
    ```python
    from py_unitconv.logger import logger, set_log_level, enable_file_logging, disable_file_logging

    set_log_level("DEBUG")
    enable_file_logging("conversions.log")
    # ... conversions, e.g. "length: mi -> km via mi -> ft -> in -> cm -> m -> km" ...
    disable_file_logging()
    ```
"""
import logging
from typing import Optional, Union

__all__ = ('logger',
           'set_log_level',
           'enable_file_logging',
           'disable_file_logging',
)

LOGGER_NAME = 'py_unitconv'
CONSOLE_FORMAT = "%(levelname)s:%(name)s:%(message)s"
FILE_FORMAT = "%(asctime)s:%(levelname)s:%(name)s:%(message)s"

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

logger: logging.Logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

file_handler: Optional[logging.FileHandler] = None


def set_log_level(level: Union[int, str]) -> None:
    """Set the library logger level, e.g. `logging.DEBUG` or `"DEBUG"`."""
    logger.setLevel(level.upper() if isinstance(level, str) else level)


def enable_file_logging(filename: str = "py_unitconv.log", level: int = logging.DEBUG) -> None:
    """Mirror library log records of `level` and above into `filename`.

    A previously enabled file handler is closed and replaced. The file is opened in append mode.
    Records below the logger's own level are dropped before reaching any handler, so lower it
    with `set_log_level` to capture DEBUG traces.
    """
    global file_handler
    disable_file_logging()
    handler = logging.FileHandler(filename, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(handler)
    file_handler = handler


def disable_file_logging() -> None:
    """Detach and close the file handler; no-op while file logging is disabled."""
    global file_handler
    if file_handler is None:
        return
    logger.removeHandler(file_handler)
    file_handler.close()
    file_handler = None
