"""
Error taxonomy for JRE staging.

Every failure during construction or ``compile`` surfaces as one of these.
Nothing is recovered locally: the CLI prints the message and exits non-zero,
which aborts staging.
"""

from __future__ import annotations


class BuildpackError(Exception):
    """Base class for all staging failures."""


class ConfigError(BuildpackError):
    """Raised when the JRE configuration is invalid or missing."""


class ResolutionError(BuildpackError):
    """Raised when no version/download location can be picked from the repository."""


class RuntimeSelectionError(BuildpackError):
    """Raised at construction when the JRE cannot be selected.

    Always chained (``raise ... from``) to the underlying resolver failure.
    """


class ArtifactFetchError(BuildpackError):
    """Raised when an artifact cannot be downloaded or read from the cache."""

    def __init__(self, message: str, uri: str = "") -> None:
        super().__init__(message)
        self.uri = uri


class FilesystemError(BuildpackError):
    """Raised on directory reset, archive expansion or script install failures."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class TemplateError(BuildpackError):
    """Raised when the recovery script template is missing or unreadable."""


class MemorySizeError(BuildpackError, ValueError):
    """Raised for malformed or negative memory quantities."""


class VersionError(BuildpackError, ValueError):
    """Raised for malformed version strings or invalid comparisons."""
