"""
Application cache — download-once storage for staging artifacts.

Artifacts are keyed by the SHA-256 of their URI and kept under the cache
directory as ``<digest>.cached``.  A cached copy is reused without touching
the network unless the caller asks for a refresh (repository indexes);
otherwise the URI is fetched to a temp file in the cache directory and
renamed into place, so a partial download never looks like a cached one.

Cache directory precedence:
    constructor argument  >  $BUILDPACK_CACHE  >  ~/.cache/jre-buildpack
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import tempfile
import urllib.error
import urllib.request
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from jre_buildpack import __version__
from jre_buildpack.core.errors import ArtifactFetchError
from jre_buildpack.core.services.download_helpers import fmt_size

logger = logging.getLogger(__name__)

CACHE_ENV = "BUILDPACK_CACHE"

_DEFAULT_CACHE_DIR = Path.home() / ".cache" / "jre-buildpack"

_USER_AGENT = f"jre-buildpack/{__version__}"


def get_cache_dir() -> Path:
    """Return the cache directory from the environment or the default."""
    return Path(os.environ.get(CACHE_ENV, str(_DEFAULT_CACHE_DIR)))


class ApplicationCache:
    """Fetches artifacts by URI, reusing previously downloaded copies."""

    def __init__(self, cache_dir: Path | None = None, timeout: int = 60) -> None:
        self.cache_dir = Path(cache_dir) if cache_dir else get_cache_dir()
        self.timeout = timeout

    def cached_path(self, uri: str) -> Path:
        """Where the artifact for ``uri`` is (or would be) stored."""
        digest = hashlib.sha256(uri.encode("utf-8")).hexdigest()
        return self.cache_dir / f"{digest}.cached"

    @contextmanager
    def get(self, uri: str, refresh: bool = False) -> Iterator[BinaryIO]:
        """Yield an open binary handle on the artifact at ``uri``.

        The handle's ``name`` is a stable local path for the duration of the
        ``with`` block.

        Args:
            uri: Location of the artifact.
            refresh: Download again even when a cached copy exists. The
                cached copy is used only if that download fails.

        Raises:
            ArtifactFetchError: If the artifact cannot be downloaded and no
                cached copy exists.
        """
        path = self.cached_path(uri)
        if path.is_file() and not refresh:
            logger.debug("Cache hit for %s (%s)", uri, path.name)
        elif path.is_file():
            try:
                self._download(uri, path)
            except ArtifactFetchError as e:
                logger.warning("Using cached copy of %s: %s", uri, e)
        else:
            self._download(uri, path)

        try:
            handle = open(path, "rb")
        except OSError as e:
            raise ArtifactFetchError(f"Cannot open cached artifact for {uri}: {e}", uri=uri) from e

        with handle:
            yield handle

    def clear(self) -> None:
        """Remove every cached artifact."""
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
        logger.info("Cleared application cache at %s", self.cache_dir)

    def _download(self, uri: str, dest: Path) -> None:
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactFetchError(f"Cannot create cache directory {dest.parent}: {e}", uri=uri) from e

        logger.info("Downloading %s", uri)
        request = urllib.request.Request(uri, headers={"User-Agent": _USER_AGENT})

        fd, tmp_name = tempfile.mkstemp(dir=dest.parent, prefix=".download_", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as out, urllib.request.urlopen(request, timeout=self.timeout) as resp:
                shutil.copyfileobj(resp, out)
            tmp_path.replace(dest)
        except (urllib.error.URLError, OSError, ValueError) as e:
            tmp_path.unlink(missing_ok=True)
            raise ArtifactFetchError(f"Failed to download {uri}: {e}", uri=uri) from e

        logger.debug("Cached %s as %s (%s)", uri, dest.name, fmt_size(dest.stat().st_size))
