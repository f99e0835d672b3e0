"""Logging setup for the htmlmark command line.

Library modules only create ``logging.getLogger(__name__)`` loggers and never
install handlers. The CLI calls ``configure_logging`` once, before any
conversion, to route those records to stderr and optionally to a file.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import logging
import sys
from typing import Optional

from htmlmark.constants import DEFAULT_LOG_LEVEL, LOG_FORMAT, TRACE_LOG_DATE_FORMAT, TRACE_LOG_FORMAT


def resolve_log_level(log_level: int | str, trace_mode: bool = False) -> int:
    """Turn a level name or number into a numeric logging level.

    Parameters
    ----------
    log_level : int | str
        Numeric level or a level name in any case (``"debug"``, ``"INFO"``)
    trace_mode : bool, default False
        Trace mode always logs at DEBUG

    Returns
    -------
    int
        Numeric level; unknown names fall back to WARNING

    Examples
    --------
        >>> resolve_log_level("info")
        20
        >>> resolve_log_level("ERROR", trace_mode=True)
        10

    """
    if trace_mode:
        return logging.DEBUG
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).strip().upper())
    return level if isinstance(level, int) else logging.getLevelName(DEFAULT_LOG_LEVEL)


def _attach_handler(
    root_logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install the CLI's log handlers on the root logger.

    Any handlers already on the root logger are replaced, so calling this
    twice does not duplicate output.

    Parameters
    ----------
    log_level : int | str
        Level for both the logger and its handlers (see ``resolve_log_level``)
    log_file : str, optional
        File that receives the same records as stderr, appended to. A file
        that cannot be opened is reported as a warning and skipped.
    trace_mode : bool, default False
        Log everything, with timestamps and logger names

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = resolve_log_level(log_level, trace_mode)
    if trace_mode:
        formatter = logging.Formatter(TRACE_LOG_FORMAT, datefmt=TRACE_LOG_DATE_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    _attach_handler(root_logger, logging.StreamHandler(sys.stderr), level, formatter)

    if not log_file:
        return root_logger

    try:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as e:
        root_logger.warning("Could not open log file %s: %s", log_file, e)
        return root_logger

    _attach_handler(root_logger, file_handler, level, formatter)
    root_logger.debug("Also logging to %s", log_file)
    return root_logger
