"""Leaderboard record model."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

MAX_NAME_LENGTH = 20


class ScoreRecord(BaseModel):
    """One saved result.  Serialized as ``{"name", "score", "date"}``."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    score: int = Field(ge=0)
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
