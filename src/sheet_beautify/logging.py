"""
Package logging for sheet-beautify.

Modules log through ``logging.getLogger(__name__)``; everything propagates to
the ``sheet_beautify`` logger, which stays silent until a caller turns on
verbose output (the CLI does so for ``-v``).
"""

import logging
from typing import IO, Optional, Union

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_logger = logging.getLogger("sheet_beautify")
_logger.addHandler(logging.NullHandler())


def _drop_stream_handlers() -> None:
    for handler in list(_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)


def enable_verbose(
    level: Union[str, int] = "INFO",
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Print package log records, replacing any earlier verbose handler.

    Beautify phases log each move, rotation, scale and rollback at DEBUG;
    test runs log pass/fail and failing sample numbers at INFO.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or number
        fmt: Format string (default: level, logger name, message)
        stream: Where to write (default: stderr)

    Returns:
        The installed handler
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    _drop_stream_handlers()
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    _logger.addHandler(handler)
    _logger.setLevel(level)
    return handler


def disable_verbose() -> None:
    """Silence package logging again."""
    _drop_stream_handlers()
    _logger.setLevel(logging.WARNING)
