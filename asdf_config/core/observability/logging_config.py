"""
Logging configuration for the asdf-config CLI.

Everything the user is meant to read (progress lines, results, errors)
is printed with click on stdout. Logging is the diagnostic channel: it
goes to stderr, is silent at the default WARNING level during a normal
run, and opens up with ``--verbose`` (each asdf step) or ``--debug``
(every command line and its exit status).

Levels are resolved in precedence order:
    --debug / --verbose / --quiet  >  ASDF_CONFIG_LOG_LEVEL  >  WARNING

ASDF_CONFIG_LOG_FILE mirrors the log to a file, at
ASDF_CONFIG_LOG_FILE_LEVEL if set.
"""

from __future__ import annotations

import logging
import sys

# Console: bare messages, plus the logger name once steps are being traced.
_FMT_CONSOLE = "%(message)s"
_FMT_TRACE = "  [%(name)s] %(message)s"

# File and --debug: timestamped, with the source line.
_FMT_DETAILED = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console log level from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return logging.Formatter(_FMT_DETAILED, datefmt=_DATEFMT)
    if level <= logging.INFO:
        return logging.Formatter(_FMT_TRACE)
    return logging.Formatter(_FMT_CONSOLE)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the stderr handler, and the file handler when asked.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to WARNING.
        log_file: Optional path the log is also written to.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAILED, datefmt=_DATEFMT))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)


def _parse_level(level: str | None) -> int:
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
