"""Diagnostics location shared by staging and the recovery script."""

from __future__ import annotations

from pathlib import Path

# Directory, relative to the application root, holding diagnostic files
DIAGNOSTICS_DIRECTORY = ".buildpack-diagnostics"

# Log file the recovery script appends to
LOG_FILE_NAME = "buildpack.log"


def get_diagnostic_directory(app_dir: Path) -> Path:
    """Return the diagnostics directory for an application."""
    return Path(app_dir) / DIAGNOSTICS_DIRECTORY
