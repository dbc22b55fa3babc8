"""
Killjava installer — the script the JVM runs on OutOfMemoryError.

The packaged template carries a ``@@LOG_FILE_NAME@@`` placeholder which is
replaced with the diagnostics log file name before the script is written
(executable) into the application's diagnostics directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jre_buildpack.core.errors import FilesystemError, TemplateError
from jre_buildpack.core.services.jre.diagnostics import LOG_FILE_NAME, get_diagnostic_directory

logger = logging.getLogger(__name__)

# Filename of killjava script used to kill the JVM on OOM
KILLJAVA_FILE_NAME = "killjava"

LOG_FILE_PLACEHOLDER = "@@LOG_FILE_NAME@@"

_TEMPLATE_DIR = Path(__file__).resolve().parents[3] / "resources" / "diagnostics"


def template_path() -> Path:
    return _TEMPLATE_DIR / KILLJAVA_FILE_NAME


def render_killjava(template: Path | None = None, log_file_name: str = LOG_FILE_NAME) -> str:
    """Read the template and substitute every placeholder occurrence.

    Raises:
        TemplateError: If the template is missing or unreadable.
    """
    source = template or template_path()
    try:
        content = source.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot read killjava template {source}: {e}") from e
    return content.replace(LOG_FILE_PLACEHOLDER, log_file_name)


def install_killjava(app_dir: Path, template: Path | None = None) -> Path:
    """Write the killjava script into the application's diagnostics directory.

    Any existing script is overwritten.

    Returns:
        Path of the installed script.

    Raises:
        TemplateError: If the template is missing or unreadable.
        FilesystemError: If the directory or script cannot be written.
    """
    content = render_killjava(template)

    diagnostic_dir = get_diagnostic_directory(app_dir)
    target = diagnostic_dir / KILLJAVA_FILE_NAME
    try:
        diagnostic_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        target.chmod(0o755)
    except OSError as e:
        raise FilesystemError(f"Cannot install {target}: {e}", path=str(target)) from e

    logger.debug("Installed %s", target)
    return target
