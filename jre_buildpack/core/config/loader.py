"""
Configuration loader — reads ibmjdk.yml into a validated mapping.

The packaged default lives in ``jre_buildpack/resources/config/ibmjdk.yml``.
An explicit file may replace it, and the ``JBP_CONFIG_IBMJDK`` environment
variable may carry a YAML mapping of overrides, e.g.::

    JBP_CONFIG_IBMJDK='version: 1.8.+'
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from jre_buildpack.core.errors import ConfigError
from jre_buildpack.core.models.config import JreConfiguration

logger = logging.getLogger(__name__)

# Default config filename
JRE_CONFIG_FILE = "ibmjdk.yml"

# Environment variable holding YAML overrides
CONFIG_OVERRIDE_ENV = "JBP_CONFIG_IBMJDK"

_RESOURCES_DIR = Path(__file__).resolve().parent.parent.parent / "resources"


def default_config_path() -> Path:
    """Path of the packaged default JRE configuration."""
    return _RESOURCES_DIR / "config" / JRE_CONFIG_FILE


def _read_yaml_mapping(raw: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {source}, got {type(data).__name__}")
    return data


def load_jre_config(
    path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Load and validate the JRE configuration.

    Args:
        path: Explicit path to a YAML config. Defaults to the packaged file.
        overrides: Keys that replace values from the file.
        environ: Environment to read ``JBP_CONFIG_IBMJDK`` from
            (default: ``os.environ``).

    Returns:
        The validated configuration as a plain dict.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        path = default_config_path()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading JRE config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    data = _read_yaml_mapping(raw, str(path))

    env = os.environ if environ is None else environ
    env_overrides = env.get(CONFIG_OVERRIDE_ENV, "").strip()
    if env_overrides:
        logger.info("Applying JRE config overrides from $%s", CONFIG_OVERRIDE_ENV)
        data.update(_read_yaml_mapping(env_overrides, f"${CONFIG_OVERRIDE_ENV}"))

    if overrides:
        data.update(overrides)

    try:
        config = JreConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid JRE configuration: {e}") from e

    logger.info("Loaded JRE config: version %s from %s", config.version, config.repository_root)
    return config.model_dump()
