"""In-memory storage implementation for testing and throwaway sessions.

Keeps slots in a plain dict and records writes so tests can assert on them
without touching the filesystem.
"""

from __future__ import annotations

from mathrush.core.interfaces.storage import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """A :class:`KeyValueStorage` that lives only as long as the process.

    Attributes:
        slots: Current key → blob mapping.
        write_log: Ordered list of ``(key, value)`` tuples, one per write.
        fail_reads: When ``True``, :meth:`read` raises ``OSError``.
        fail_writes: When ``True``, :meth:`write` raises ``OSError``
            (simulates an exhausted quota).
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.slots: dict[str, str] = dict(initial or {})
        self.write_log: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False

    def read(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError(f"simulated read failure for {key!r}")
        return self.slots.get(key)

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError(f"simulated write failure for {key!r}")
        self.slots[key] = value
        self.write_log.append((key, value))
