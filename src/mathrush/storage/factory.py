"""Storage factory — picks the backend named by ``system.storage_path``."""

from __future__ import annotations

import logging

from mathrush.core.interfaces.storage import KeyValueStorage
from mathrush.core.models.config import MathRushConfig

_log = logging.getLogger(__name__)

MEMORY_STORAGE = ":memory:"


def create_storage(config: MathRushConfig) -> KeyValueStorage:
    """Return the :class:`KeyValueStorage` for *config*.

    * ``":memory:"`` (or an empty path) → ``InMemoryStorage``; scores are
      lost when the process exits.
    * Anything else → ``JsonFileStorage`` at that path.
    """
    path = config.system.storage_path.strip()
    if not path or path == MEMORY_STORAGE:
        from mathrush.storage.memory_storage import InMemoryStorage

        _log.info("Using InMemoryStorage — scores will not survive a restart")
        return InMemoryStorage()

    from mathrush.storage.json_file_storage import JsonFileStorage

    _log.info("Using JsonFileStorage at %s", path)
    return JsonFileStorage(path)
