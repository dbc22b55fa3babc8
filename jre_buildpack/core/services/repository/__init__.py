"""Repository lookups — pick a version and its download URI from ``index.yml``."""

from jre_buildpack.core.services.repository.configured_item import find_item  # noqa: F401
from jre_buildpack.core.services.repository.version_resolver import resolve_version  # noqa: F401
