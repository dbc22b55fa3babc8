"""
Configured item lookup — resolve ``(version, uri)`` from a configuration.

The configuration names a ``repository_root`` and a ``version`` (possibly a
wildcard).  The repository serves an ``index.yml`` mapping versions to
download URIs::

    1.7.0: https://example.com/ibm-java-jre-7.0-x86_64.tgz
    1.7.1: https://example.com/ibm-java-jre-7.1-x86_64.tgz
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Mapping
from typing import Any

import yaml

from jre_buildpack.core.errors import ArtifactFetchError, ResolutionError, VersionError
from jre_buildpack.core.models.version import TokenizedVersion
from jre_buildpack.core.services.application_cache import ApplicationCache
from jre_buildpack.core.services.repository.version_resolver import resolve_version

logger = logging.getLogger(__name__)

KEY_REPOSITORY_ROOT = "repository_root"
KEY_VERSION = "version"

INDEX_FILE = "index.yml"

_ARCH_MAP = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "arm64": "aarch64",
}


def expand_repository_root(root: str) -> str:
    """Substitute ``{platform}`` and ``{architecture}`` in a repository root."""
    machine = platform.machine().lower()
    return (
        root.replace("{platform}", platform.system().lower())
        .replace("{architecture}", _ARCH_MAP.get(machine, machine))
        .rstrip("/")
    )


def load_index(repository_root: str, application_cache: ApplicationCache) -> dict[str, str]:
    """Fetch and parse ``<repository_root>/index.yml``.

    Raises:
        ResolutionError: If the index cannot be fetched or is not a mapping.
    """
    index_uri = f"{repository_root}/{INDEX_FILE}"
    try:
        with application_cache.get(index_uri, refresh=True) as f:
            data = yaml.safe_load(f)
    except ArtifactFetchError as e:
        raise ResolutionError(f"Unable to fetch repository index {index_uri}: {e}") from e
    except yaml.YAMLError as e:
        raise ResolutionError(f"Invalid YAML in repository index {index_uri}: {e}") from e

    if not isinstance(data, dict) or not data:
        raise ResolutionError(f"Repository index {index_uri} must be a non-empty mapping")

    return {str(k): str(v) for k, v in data.items()}


def find_item(
    configuration: Mapping[str, Any],
    application_cache: ApplicationCache | None = None,
) -> tuple[TokenizedVersion, str]:
    """Find the version and download URI selected by ``configuration``.

    Raises:
        ResolutionError: If the configuration is incomplete, the index is
            unavailable, or no indexed version matches.
    """
    root = configuration.get(KEY_REPOSITORY_ROOT)
    if not root:
        raise ResolutionError(f"Configuration is missing '{KEY_REPOSITORY_ROOT}'")

    candidate = configuration.get(KEY_VERSION)
    candidate = str(candidate) if candidate is not None else None

    repository_root = expand_repository_root(str(root))
    index = load_index(repository_root, application_cache or ApplicationCache())

    try:
        version = resolve_version(candidate, index.keys())
    except VersionError as e:
        raise ResolutionError(f"Cannot resolve version '{candidate}' in {repository_root}: {e}") from e

    if version is None:
        raise ResolutionError(
            f"No version resolvable for '{candidate}' in {', '.join(sorted(index))}"
        )

    uri = index[str(version)]
    logger.debug("Resolved %s to version %s at %s", candidate, version, uri)
    return version, uri
