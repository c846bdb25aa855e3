"""
Logging setup and small helpers shared across cargo-vanish.

Records up to INFO are written to stdout and WARNING and above to stderr. The
initial level comes from the LOG_LEVEL environment variable and can be changed
later with set_log_level, e.g. from the --log-level option.
"""

import functools
import logging
import os
import pathlib
import sys
from typing import Any, Mapping

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def logger(source: str) -> logging.Logger:
    """
    Get the logger for a module.

    Args:
        source: Module file path, usually __file__. The file stem becomes the
                logger name, so cargo_vanish/discover.py logs as "discover".
    """
    _configure_root_logger()
    return logging.getLogger(pathlib.Path(source).stem)


def log_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Resolve a level name such as "debug" or a numeric level to a logging level."""
    if isinstance(value, int):
        return value
    if value:
        return logging.getLevelNamesMapping().get(value.strip().upper(), default)
    return default


def is_log_level(value: str) -> bool:
    return log_level(value, default=-1) >= 0


def set_log_level(value: str | int | None):
    """Override the root log level after the handlers have been configured."""
    _configure_root_logger()
    logging.getLogger().setLevel(log_level(value))


@functools.cache
def _configure_root_logger():
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(lambda record: record.levelno <= logging.INFO)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    logging.basicConfig(
        level=log_level(os.getenv("LOG_LEVEL")),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[stdout_handler, stderr_handler],
    )


def mapping_get(data: Mapping | None, *path: str, default: Any = None) -> Any:
    """
    Look up a value in nested mappings, such as a parsed TOML document.

    Example:
        mapping_get({"package": {"name": "foo"}}, "package", "name") returns "foo"

    Returns:
        The value at the path, or default if any key is missing, the value is
        None, or an intermediate value is not a mapping.
    """
    current: Any = data
    for key in path:
        if not isinstance(current, Mapping):
            return default
        current = current.get(key)
    return default if current is None else current
