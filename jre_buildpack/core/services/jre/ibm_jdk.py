"""
IBM JRE component — detect, compile and release for an IBM JDK runtime.

Lifecycle, one instance per staging run::

    jre = IBMJdk(context)          # selects (version, uri), sets java_home
    jre.detect()                   # "ibmjdk-1.7.1"
    receipt = jre.compile()        # download, expand into .java, install killjava
    jre.release(receipt)           # append OOM + memory flags to java_opts

When ``compile`` and ``release`` run in separate processes, rebuild the
receipt with ``jre.receipt()``.
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jre_buildpack.core.context import StagingContext
from jre_buildpack.core.errors import FilesystemError, RuntimeSelectionError
from jre_buildpack.core.models.receipt import CompileReceipt
from jre_buildpack.core.models.version import TokenizedVersion
from jre_buildpack.core.services.application_cache import ApplicationCache
from jre_buildpack.core.services.archive import expand_tarball
from jre_buildpack.core.services.download_helpers import format_duration
from jre_buildpack.core.services.jre.diagnostics import DIAGNOSTICS_DIRECTORY, get_diagnostic_directory
from jre_buildpack.core.services.jre.killjava import KILLJAVA_FILE_NAME, install_killjava
from jre_buildpack.core.services.jre.memory_heuristics import memory_opts
from jre_buildpack.core.services.jre.memory_limit import MemoryBudget, MemoryLimit
from jre_buildpack.core.services.repository.configured_item import find_item

logger = logging.getLogger(__name__)

# Runtime home, relative to the application directory
JAVA_HOME = ".java"

RUNTIME_FAMILY = "ibmjdk"

Resolver = Callable[[Mapping[str, Any]], tuple[TokenizedVersion, str]]


class IBMJdk:
    """Selects, stages and tunes an IBM JRE for one application."""

    def __init__(
        self,
        context: StagingContext,
        *,
        memory_limit: MemoryBudget | None = None,
        application_cache: ApplicationCache | None = None,
        resolver: Resolver | None = None,
    ) -> None:
        self._app_dir = Path(context.app_dir)
        self._java_opts = context.java_opts
        self._configuration = context.configuration
        self._memory_limit = memory_limit if memory_limit is not None else MemoryLimit()
        self._application_cache = application_cache or ApplicationCache()

        self._version, self._uri = self._find_ibmjdk(resolver or self._find_in_repository, self._configuration)

        context.java_home += JAVA_HOME

    @staticmethod
    def _find_ibmjdk(resolver: Resolver, configuration: Mapping[str, Any]) -> tuple[TokenizedVersion, str]:
        try:
            return resolver(configuration)
        except Exception as e:
            raise RuntimeSelectionError(f"IBM JRE error: {e}") from e

    def _find_in_repository(self, configuration: Mapping[str, Any]) -> tuple[TokenizedVersion, str]:
        return find_item(configuration, self._application_cache)

    @property
    def version(self) -> TokenizedVersion:
        return self._version

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def java_home(self) -> Path:
        return self._app_dir / JAVA_HOME

    @property
    def killjava_path(self) -> Path:
        return get_diagnostic_directory(self._app_dir) / KILLJAVA_FILE_NAME

    # ── lifecycle ───────────────────────────────────────────────

    def detect(self) -> str:
        """Return ``ibmjdk-<version>``.

        Always returns a value, so only call it once the application is
        known to need Java.
        """
        return f"{RUNTIME_FAMILY}-{self._version}"

    def compile(self) -> CompileReceipt:
        """Download and expand the JRE, then install the killjava script.

        Safe to re-run: the runtime home is wiped before every expansion.

        Raises:
            ArtifactFetchError: If the JRE cannot be downloaded.
            FilesystemError: If the runtime home cannot be reset or the
                archive cannot be expanded.
            TemplateError: If the killjava template is unavailable.
        """
        download_start = time.monotonic()
        logger.info("Downloading IBM %s JRE from %s", self._version, self._uri)

        with self._application_cache.get(self._uri) as file:
            download_seconds = time.monotonic() - download_start
            logger.info("Downloaded IBM %s JRE (%s)", self._version, format_duration(download_seconds))
            expand_seconds = self._expand(Path(file.name))

        killjava = install_killjava(self._app_dir)

        return CompileReceipt(
            version=str(self._version),
            java_home=str(self.java_home),
            killjava_path=str(killjava),
            uri=self._uri,
            download_seconds=round(download_seconds, 3),
            expand_seconds=round(expand_seconds, 3),
        )

    def receipt(self) -> CompileReceipt:
        """Rebuild the compile receipt from what a previous ``compile`` left on disk.

        Raises:
            FilesystemError: If the runtime home or killjava script is missing.
        """
        if not self.java_home.is_dir():
            raise FilesystemError(f"JRE has not been compiled: {self.java_home} is missing", path=str(self.java_home))
        if not self.killjava_path.is_file():
            raise FilesystemError(
                f"JRE has not been compiled: {self.killjava_path} is missing",
                path=str(self.killjava_path),
            )
        return CompileReceipt(
            version=str(self._version),
            java_home=str(self.java_home),
            killjava_path=str(self.killjava_path),
            uri=self._uri,
        )

    def release(self, receipt: CompileReceipt) -> list[str]:
        """Append the OOM handler and memory flags to the context's java_opts.

        Existing entries are left untouched.

        Returns:
            The (shared) java_opts list.
        """
        if receipt.version != str(self._version):
            raise RuntimeSelectionError(
                f"Compile receipt is for IBM JRE {receipt.version}, but {self._version} is selected"
            )

        self._java_opts.append(f"-XX:OnOutOfMemoryError=./{DIAGNOSTICS_DIRECTORY}/{KILLJAVA_FILE_NAME}")
        self._java_opts.extend(memory_opts(self._memory_limit.current()))
        return self._java_opts

    # ── helpers ─────────────────────────────────────────────────

    def _expand(self, archive: Path) -> float:
        expand_start = time.monotonic()
        logger.info("Expanding JRE to %s", JAVA_HOME)

        self._reset_java_home()
        count = expand_tarball(archive, self.java_home, strip_components=1)

        elapsed = time.monotonic() - expand_start
        logger.info("Expanded %d entries to %s (%s)", count, JAVA_HOME, format_duration(elapsed))
        return elapsed

    def _reset_java_home(self) -> None:
        target = self.java_home
        try:
            if target.is_symlink() or target.is_file():
                target.unlink()
            elif target.exists():
                shutil.rmtree(target)
            target.mkdir(parents=True)
        except OSError as e:
            raise FilesystemError(f"Cannot reset {target}: {e}", path=str(target)) from e
