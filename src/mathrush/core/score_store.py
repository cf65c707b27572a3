"""Score store — append-only leaderboard kept in one key-value slot.

The whole collection round-trips as a single JSON array
(``[{"name": ..., "score": ..., "date": ...}, ...]``).  Reads never raise:
an absent, empty, unreadable or malformed slot reads as no scores.  Writes
are best-effort: failures are logged and swallowed so gameplay is never
affected.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from mathrush.core.interfaces.storage import KeyValueStorage
from mathrush.core.models.score import ScoreRecord
from mathrush.log_config.logger import ContextualLogger, get_logger

STORAGE_KEY = "math_game_scores"
DEFAULT_TOP_LIMIT = 5


class ScoreStore:
    """Reads and appends :class:`ScoreRecord` entries.

    Read-modify-write is not safe for concurrent writers; there is exactly
    one game session mutating the slot.

    Args:
        storage: Backend holding the serialized collection.
        key: Slot name inside *storage*.
    """

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._log = ContextualLogger(get_logger(__name__), key=key)

    def get_top_scores(self, limit: int = DEFAULT_TOP_LIMIT) -> list[ScoreRecord]:
        """Return up to *limit* records, best score first.

        Ties keep their insertion order (``sorted`` is stable, also in reverse).
        """
        ranked = sorted(self._read_all(), key=lambda r: r.score, reverse=True)
        return ranked[: max(limit, 0)]

    def save_score(self, name: str, score: int) -> None:
        """Append a record stamped with the current time and write back."""
        try:
            record = ScoreRecord(name=name, score=score)
        except ValidationError as exc:
            self._log.warning(
                "Rejected score name=%r score=%r (%d validation errors)",
                name,
                score,
                exc.error_count(),
            )
            return

        records = self._read_all()
        records.append(record)
        blob = json.dumps([r.model_dump(mode="json") for r in records])
        try:
            self._storage.write(self._key, blob)
        except Exception:
            self._log.exception("Error saving score for %r", record.name)
            return
        self._log.info("Saved score %d for %r (%d total)", record.score, record.name, len(records))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read_all(self) -> list[ScoreRecord]:
        try:
            raw = self._storage.read(self._key)
        except Exception:
            self._log.warning("Score storage unreadable — treating as empty", exc_info=True)
            return []
        if not raw:
            return []

        try:
            entries: Any = json.loads(raw)
        except ValueError:
            self._log.warning("Stored scores are not valid JSON — treating as empty")
            return []
        if not isinstance(entries, list):
            self._log.warning("Stored scores are not a list — treating as empty")
            return []

        records: list[ScoreRecord] = []
        for entry in entries:
            try:
                records.append(ScoreRecord.model_validate(entry))
            except ValidationError:
                self._log.debug("Skipping malformed score entry %r", entry)
        return records
