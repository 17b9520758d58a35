"""
Logging configuration — one call at CLI startup.

Modules log through ``logging.getLogger(__name__)``; this module decides
where those records go and how much detail they carry.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  PODSYNC_LOG_LEVEL  >  WARNING

A second, file-only destination is enabled with PODSYNC_LOG_FILE
(level from PODSYNC_LOG_FILE_LEVEL, defaulting to the console level).
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV_VAR = "PODSYNC_LOG_LEVEL"
FILE_ENV_VAR = "PODSYNC_LOG_FILE"
FILE_LEVEL_ENV_VAR = "PODSYNC_LOG_FILE_LEVEL"

# (format, datefmt) per console verbosity; the file always gets the debug layout
_DEBUG_LAYOUT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S")
_INFO_LAYOUT = ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S")
_PLAIN_LAYOUT = ("%(message)s", None)
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: dict[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LEVEL_ENV_VAR, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install console (stderr) and optional file handlers on the root logger.

    Args:
        level: Console level name.
        log_file: Optional path of a log file.
        log_file_level: Level name for the file, defaults to ``level``.
    """
    console_level = parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_DEBUG_LAYOUT[0], datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    logging.raiseExceptions = False


def _console_handler(level: int) -> logging.Handler:
    if level <= logging.DEBUG:
        fmt, datefmt = _DEBUG_LAYOUT
    elif level <= logging.INFO:
        fmt, datefmt = _INFO_LAYOUT
    else:
        fmt, datefmt = _PLAIN_LAYOUT
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown or empty names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
