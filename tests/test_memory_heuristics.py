"""
Tests for memory heuristics and memory budget accessors.
"""

import pytest

from jre_buildpack.core.errors import MemorySizeError
from jre_buildpack.core.models.memory import MemorySize
from jre_buildpack.core.services.jre.memory_heuristics import max_heap, memory_opts
from jre_buildpack.core.services.jre.memory_limit import MemoryLimit, StaticMemoryLimit


class TestMemoryOpts:
    def test_no_budget(self):
        assert memory_opts(None) == ["-Xnocompressedrefs", "-Xtune:virtualized"]

    def test_small_budget(self):
        assert memory_opts(MemorySize("256M")) == [
            "-Xnocompressedrefs",
            "-Xtune:virtualized",
            "-Xmx192M",
        ]

    def test_large_budget(self):
        assert memory_opts(MemorySize("1024M")) == ["-Xtune:virtualized", "-Xmx768M"]

    def test_threshold_is_strict(self):
        opts = memory_opts(MemorySize("512M"))
        assert "-Xnocompressedrefs" not in opts
        assert opts == ["-Xtune:virtualized", "-Xmx384M"]

    def test_just_below_threshold(self):
        opts = memory_opts(MemorySize("511M"))
        assert opts[0] == "-Xnocompressedrefs"

    def test_zero_budget_still_sets_heap(self):
        # Degenerate, kept as-is: a zero budget produces a zero heap
        assert memory_opts(MemorySize(0)) == [
            "-Xnocompressedrefs",
            "-Xtune:virtualized",
            "-Xmx0",
        ]

    def test_heap_is_three_quarters_rounded_down(self):
        assert max_heap(MemorySize("1G")) == MemorySize("768M")
        assert max_heap(MemorySize(1001)).byte_count == 750


class TestMemoryLimit:
    def test_unset(self):
        assert MemoryLimit({}).current() is None

    def test_empty(self):
        assert MemoryLimit({"MEMORY_LIMIT": " "}).current() is None

    def test_set(self):
        assert MemoryLimit({"MEMORY_LIMIT": "512m"}).current() == MemorySize("512M")

    def test_malformed(self):
        with pytest.raises(MemorySizeError):
            MemoryLimit({"MEMORY_LIMIT": "lots"}).current()

    def test_negative(self):
        with pytest.raises(MemorySizeError):
            MemoryLimit({"MEMORY_LIMIT": "-512m"}).current()

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MEMORY_LIMIT", "1G")
        assert MemoryLimit().current() == MemorySize("1G")


class TestStaticMemoryLimit:
    def test_none(self):
        assert StaticMemoryLimit().current() is None

    def test_string(self):
        assert StaticMemoryLimit("2G").current() == MemorySize("2G")

    def test_size(self):
        assert StaticMemoryLimit(MemorySize("1G")).current() == MemorySize("1G")
