"""
Memory budget accessors.

The platform exposes the container's memory ceiling as ``MEMORY_LIMIT``
(e.g. ``512m``).  The accessor is passed to ``IBMJdk`` explicitly so tests
can supply a fixed budget instead of patching the environment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Protocol

from jre_buildpack.core.models.memory import MemorySize

logger = logging.getLogger(__name__)

MEMORY_LIMIT_ENV = "MEMORY_LIMIT"


class MemoryBudget(Protocol):
    """Anything that reports an optional total memory ceiling."""

    def current(self) -> MemorySize | None: ...


class MemoryLimit:
    """Reads the memory budget from the process environment."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def current(self) -> MemorySize | None:
        """Return the budget, or None when no limit is set.

        Raises:
            MemorySizeError: If ``MEMORY_LIMIT`` is malformed or negative.
        """
        raw = self._environ.get(MEMORY_LIMIT_ENV, "").strip()
        if not raw:
            return None
        limit = MemorySize(raw)
        logger.debug("Memory limit from $%s: %s", MEMORY_LIMIT_ENV, limit)
        return limit


class StaticMemoryLimit:
    """A fixed budget (or none)."""

    def __init__(self, limit: MemorySize | str | None = None) -> None:
        if isinstance(limit, str):
            limit = MemorySize(limit)
        self._limit = limit

    def current(self) -> MemorySize | None:
        return self._limit
