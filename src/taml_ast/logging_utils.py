#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/taml_ast/logging_utils.py
"""Handler setup for the ``taml_ast`` logger hierarchy.

The library only emits records: DEBUG when a node is detached before being
reattached, WARNING for ``reattach_policy="overwrite"`` and for problems
found by non-strict tree validation. Nothing is printed until an
application attaches handlers, either its own or through
:func:`configure_logging`.

Examples
--------
    >>> from taml_ast.logging_utils import configure_logging
    >>> configure_logging("DEBUG")
    <Logger taml_ast (DEBUG)>

"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "taml_ast"

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Route ``taml_ast`` tree diagnostics to stderr and optionally a file.

    Only the package logger is touched; the root logger and other libraries'
    handlers are left alone. Calling this again replaces the handlers it
    installed before.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name; unknown names fall back to INFO
    log_file : str, optional
        Path to append records to as well
    trace_mode : bool, default False
        Include timestamps and the emitting module (``taml_ast.nodes``,
        ``taml_ast.visitors``) in each record

    Returns
    -------
    logging.Logger
        The ``taml_ast`` package logger

    """
    level = _resolve_level(log_level)
    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    _add_handler(package_logger, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            _add_handler(package_logger, file_handler, level, formatter)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger


def _add_handler(target: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    target.addHandler(handler)


__all__ = ["PACKAGE_LOGGER_NAME", "configure_logging"]
