"""
Logging setup for the genesis CLI.

Records go to stderr. stdout belongs to the tools genesis runs (premake,
git, msbuild, make stream their output there) and to ``--json``
documents, so log lines never end up inside either.
"""

from __future__ import annotations

import logging
import sys

_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler, plus a file handler when *log_file* is set.

    Unknown level names mean WARNING. The file handler logs at
    *log_file_level*, or at *level* when that is not given.
    """
    console_level = _level(level)
    handlers = [_handler(logging.StreamHandler(sys.stderr), console_level, _CONSOLE_FORMAT)]

    if log_file:
        file_level = _level(log_file_level) if log_file_level else console_level
        handlers.append(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), file_level, _FILE_FORMAT)
        )

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(handler.level for handler in handlers))


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.WARNING)
