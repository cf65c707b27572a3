"""JSON-file key-value storage.

The file holds one JSON object mapping slot keys to string blobs.  Writes
go through a temp file + ``replace`` so a crash mid-write never leaves a
half-written file behind.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

from mathrush.core.interfaces.storage import KeyValueStorage

_log = logging.getLogger(__name__)


class JsonFileStorage(KeyValueStorage):
    """Durable :class:`KeyValueStorage` backed by a single JSON file.

    Args:
        path: Location of the file.  Parent directories are created on the
            first write.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str) -> None:
        data = self._load_for_update()
        data[key] = value
        _atomic_write_json(self._path, data)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        if not self._path.is_file():
            return {}
        raw = json.loads(self._path.read_text(encoding="utf-8"))
        return raw if isinstance(raw, dict) else {}

    def _load_for_update(self) -> dict[str, Any]:
        try:
            return self._load()
        except ValueError:
            _log.warning("Storage file %s is corrupt — rewriting from scratch", self._path)
            return {}


def _atomic_write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with open(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)
            handle.write("\n")
        Path(tmp_name).replace(path)
    finally:
        tmp_path = Path(tmp_name)
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)
