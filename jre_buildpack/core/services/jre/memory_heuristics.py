"""
Memory heuristics — JVM tuning flags derived from a memory budget.

Without a budget the JVM picks its own heap size; only compressed
references are disabled.  With a budget ``M``:

    -Xnocompressedrefs      only when M < 512M
    -Xtune:virtualized      always
    -Xmx<M * 0.75>          the rest is left for non-heap memory

A zero budget still yields ``-Xmx0``.
"""

from __future__ import annotations

from jre_buildpack.core.models.memory import MemorySize

# The ratio of heap reservation to total reserved memory
HEAP_SIZE_RATIO = 0.75

# Budgets below this keep compressed references off
COMPRESSED_REFS_THRESHOLD = MemorySize("512M")

NO_COMPRESSED_REFS = "-Xnocompressedrefs"
TUNE_VIRTUALIZED = "-Xtune:virtualized"


def max_heap(limit: MemorySize) -> MemorySize:
    """Heap share of a memory budget, rounded down."""
    return limit * HEAP_SIZE_RATIO


def memory_opts(limit: MemorySize | None) -> list[str]:
    """Return the memory flags for ``limit``, in launch order."""
    if limit is None:
        return [NO_COMPRESSED_REFS, TUNE_VIRTUALIZED]

    opts: list[str] = []
    if limit < COMPRESSED_REFS_THRESHOLD:
        opts.append(NO_COMPRESSED_REFS)
    opts.append(TUNE_VIRTUALIZED)
    opts.append(f"-Xmx{max_heap(limit)}")
    return opts
