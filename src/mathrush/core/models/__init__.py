"""Pydantic models for problems, scores, game state, events and configuration."""
from mathrush.core.models.config import GameSettings, MathRushConfig, SystemConfig
from mathrush.core.models.event import Event
from mathrush.core.models.problem import Operation, Problem
from mathrush.core.models.score import ScoreRecord
from mathrush.core.models.state import GamePhase, GameState

__all__ = [
    "GameSettings",
    "MathRushConfig",
    "SystemConfig",
    "Event",
    "Operation",
    "Problem",
    "ScoreRecord",
    "GamePhase",
    "GameState",
]
