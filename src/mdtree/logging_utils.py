#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup helper for applications embedding mdtree.

The library itself only creates module loggers; handlers are installed
here, on request.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from mdtree.tree.debug import debug_env_enabled


def resolve_log_level(log_level: int | str | None) -> int:
    """Turn a level name, number or None into a numeric logging level.

    ``None`` selects DEBUG when ``MDTREE_DEBUG=true`` and WARNING otherwise.
    Unknown level names fall back to INFO.
    """
    if log_level is None:
        return logging.DEBUG if debug_env_enabled() else logging.WARNING
    if isinstance(log_level, int):
        return log_level
    resolved = logging.getLevelName(str(log_level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    log_level: int | str | None = None,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for an application using mdtree.

    Parameters
    ----------
    log_level : int | str | None
        Numeric logging level or string name (e.g., "INFO"). When omitted,
        the ``MDTREE_DEBUG`` environment variable decides between DEBUG and
        WARNING.
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
