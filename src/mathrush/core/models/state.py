"""Game state snapshot and phase enumeration."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from mathrush.core.models.problem import Problem
from mathrush.core.models.score import ScoreRecord

DEFAULT_ROUND_SECONDS = 30


class GamePhase(str, Enum):
    """Coarse-grained mode of the game."""

    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class GameState(BaseModel):
    """Immutable snapshot of the whole game.

    Transitions never mutate a snapshot; the reducer returns a replacement
    built with :meth:`model_copy`.
    """

    model_config = ConfigDict(frozen=True)

    phase: GamePhase = Field(default=GamePhase.MENU)
    current_problem: Problem | None = Field(default=None)
    user_input: str = Field(default="", description="Raw, untrusted text typed by the player")
    score: int = Field(default=0, ge=0)
    time_remaining: int = Field(default=DEFAULT_ROUND_SECONDS, ge=0)
    show_success: bool = Field(default=False)
    top_scores: tuple[ScoreRecord, ...] = Field(default=())
    pending_save_name: str | None = Field(
        default=None, description="Name staged for persistence after a finished round"
    )
