"""
Logging setup for the ``yapmesh`` command line.

The library itself only creates module loggers; handlers are installed
here, on the ``yapmesh`` namespace logger, when the CLI starts.  Output
goes to stderr so that report lines on stdout stay machine readable.
"""
import logging
import sys
from typing import Optional, TextIO, Union

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_CONSOLE_FORMAT = '%(levelname)s %(name)s: %(message)s'
_FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def level_from_name(level: Union[int, str]) -> int:
    """Return the numeric level for ``level``, a name such as ``'DEBUG'`` or an int."""
    if isinstance(level, int):
        return level
    name = str(level).upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}, expected one of {LOG_LEVELS}")
    return getattr(logging, name)


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None,
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the ``yapmesh`` logger and return it.

    Args:
        level: numeric level or level name, e.g. ``'DEBUG'``.
        log_file: optional path; the file receives timestamped records.
        stream: console stream, stderr when omitted.

    Calling this again replaces the handlers installed by the previous call.
    """
    numeric = level_from_name(level)
    logger = logging.getLogger("yapmesh")
    logger.setLevel(numeric)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(file_handler)

    logger.debug(f"Logging at {logging.getLevelName(numeric)}")
    return logger
