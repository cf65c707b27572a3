"""Durable key-value storage interface.

The JSON-file and in-memory backends both implement this ABC, so the score
store can be exercised in tests without touching the filesystem.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """A flat namespace of string slots addressed by fixed keys."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the blob stored under *key*, or ``None`` if the slot is empty.

        Implementations may raise ``OSError`` or ``ValueError`` when the
        underlying medium is unreadable.
        """

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the blob stored under *key* with *value*."""
