"""Core services: problem generation, score store, reducer, controller, event bus."""

from mathrush.core.event_bus import EventBus
from mathrush.core.game_controller import GameController
from mathrush.core.problem_generator import ProblemGenerator, is_correct
from mathrush.core.reducer import GameReducer
from mathrush.core.score_store import ScoreStore

__all__ = [
    "EventBus",
    "GameController",
    "GameReducer",
    "ProblemGenerator",
    "ScoreStore",
    "is_correct",
]
