"""
Memory size — an immutable byte quantity with ``<integer><unit>`` syntax.

The same grammar is used on the way in (``MEMORY_LIMIT=512m``) and on the
way out (``-Xmx384M``), so ``str()`` always yields something the JVM accepts.
"""

from __future__ import annotations

import functools
import math
import re

from jre_buildpack.core.errors import MemorySizeError

KILO = 1024
MEGA = KILO * 1024
GIGA = MEGA * 1024

_UNITS = {"": 1, "k": KILO, "m": MEGA, "g": GIGA}

# Largest unit first, used for formatting
_FORMAT_UNITS = (("G", GIGA), ("M", MEGA), ("K", KILO))

_SIZE_RE = re.compile(r"^\s*(?P<amount>-?\d+)\s*(?P<unit>[kKmMgG]?)[bB]?\s*$")


@functools.total_ordering
class MemorySize:
    """A non-negative number of bytes.

    Examples::

        MemorySize("512M") < MemorySize("1G")      # True
        str(MemorySize("1G") * 0.75)               # "768M"
    """

    __slots__ = ("_bytes",)

    def __init__(self, value: str | int) -> None:
        if isinstance(value, bool):
            raise MemorySizeError(f"Invalid memory size: {value!r}")
        if isinstance(value, int):
            amount = value
        elif isinstance(value, str):
            amount = self._parse(value)
        else:
            raise MemorySizeError(f"Invalid memory size: {value!r}")

        if amount < 0:
            raise MemorySizeError(f"Memory size must not be negative: {value!r}")
        self._bytes = amount

    @staticmethod
    def _parse(text: str) -> int:
        m = _SIZE_RE.match(text)
        if not m:
            raise MemorySizeError(f"Invalid memory size: {text!r}")
        return int(m.group("amount")) * _UNITS[m.group("unit").lower()]

    @property
    def byte_count(self) -> int:
        return self._bytes

    def __mul__(self, ratio: float) -> MemorySize:
        if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
            return NotImplemented
        if ratio < 0:
            raise MemorySizeError(f"Cannot scale a memory size by a negative ratio: {ratio}")
        # Floor so a scaled size never exceeds what it was derived from
        return MemorySize(math.floor(self._bytes * ratio))

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemorySize):
            return NotImplemented
        return self._bytes == other._bytes

    def __lt__(self, other: MemorySize) -> bool:
        if not isinstance(other, MemorySize):
            return NotImplemented
        return self._bytes < other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __str__(self) -> str:
        if self._bytes == 0:
            return "0"
        for suffix, factor in _FORMAT_UNITS:
            if self._bytes % factor == 0:
                return f"{self._bytes // factor}{suffix}"
        return str(self._bytes)

    def __repr__(self) -> str:
        return f"MemorySize({str(self)!r})"
