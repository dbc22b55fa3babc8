"""
Logging configuration for the buildpack CLI.

``setup_logging`` runs once per phase invocation (detect, compile, release).
Module loggers under ``jre_buildpack`` inherit from the root logger.

Console level precedence:
    --debug  >  --verbose  >  --quiet  >  $BP_LOG_LEVEL  >  WARNING

``$BP_LOG_FILE`` adds a file handler, at ``$BP_LOG_FILE_LEVEL`` when set and
at the console level otherwise.  Staging output goes to stdout, so console
records go to stderr.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LEVEL_ENV = "BP_LOG_LEVEL"
FILE_ENV = "BP_LOG_FILE"
FILE_LEVEL_ENV = "BP_LOG_FILE_LEVEL"

DEFAULT_LEVEL = "WARNING"

_FMT_CONSOLE = "%(message)s"
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s — %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LEVEL_ENV) or DEFAULT_LEVEL


def setup_logging(
    level: str = DEFAULT_LEVEL,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler and, if ``log_file`` is given, a file handler.

    Args:
        level: Console level name. Unknown names fall back to WARNING.
        log_file: Optional path of a log file, opened for append.
        log_file_level: Level for the log file; defaults to ``level``.
    """
    console_level = parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    if console_level < logging.WARNING:
        console.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_CONSOLE))
    else:
        console.setFormatter(logging.Formatter(_FMT_CONSOLE))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Numeric level for ``level``; WARNING when empty or unknown."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.strip().upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
