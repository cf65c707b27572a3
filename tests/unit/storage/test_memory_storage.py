"""Unit tests for InMemoryStorage."""

from __future__ import annotations

import pytest

from mathrush.storage.memory_storage import InMemoryStorage


class TestInMemoryStorage:
    def test_empty_by_default(self) -> None:
        assert InMemoryStorage().read("k") is None

    def test_initial_slots_are_copied(self) -> None:
        initial = {"k": "v"}
        storage = InMemoryStorage(initial)
        storage.write("k", "w")
        assert initial == {"k": "v"}
        assert storage.read("k") == "w"

    def test_write_log_records_each_write(self) -> None:
        storage = InMemoryStorage()
        storage.write("a", "1")
        storage.write("a", "2")
        assert storage.write_log == [("a", "1"), ("a", "2")]

    def test_fail_reads(self) -> None:
        storage = InMemoryStorage({"k": "v"})
        storage.fail_reads = True
        with pytest.raises(OSError):
            storage.read("k")

    def test_fail_writes(self) -> None:
        storage = InMemoryStorage()
        storage.fail_writes = True
        with pytest.raises(OSError):
            storage.write("k", "v")
        assert storage.slots == {}
        assert storage.write_log == []
