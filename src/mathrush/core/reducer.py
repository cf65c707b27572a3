"""Game reducer — the pure state machine behind a round of Math Rush.

``GameReducer.reduce(state, event)`` maps the current snapshot and one event
to the next snapshot.  Events that are not valid in the current phase (or
unknown event types) return the *same* object, which callers can detect with
``is``.

Phase transitions::

    MENU ──start──▶ PLAYING ──tick to 0──▶ GAME_OVER ──start──▶ PLAYING
      ▲                                        │
      └────────────── return to menu ◀─────────┘   (return is valid anywhere)

Apart from drawing problems and reading the leaderboard the reducer has no
side effects; persisting a score is left to the controller, which watches
``pending_save_name``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from mathrush.core import events
from mathrush.core.models.config import GameSettings
from mathrush.core.models.event import Event
from mathrush.core.models.problem import Problem
from mathrush.core.models.score import ScoreRecord
from mathrush.core.models.state import GamePhase, GameState
from mathrush.core.score_store import ScoreStore

_log = logging.getLogger(__name__)

_Handler = Callable[[GameState, dict[str, Any]], GameState]


class ProblemSource(Protocol):
    def generate(self) -> Problem: ...


class GameReducer:
    """Transition function for :class:`GameState`.

    Args:
        generator: Supplies a fresh problem on start and after each correct answer.
        store: Leaderboard read on ``LOAD_SCORES`` and ``RETURN_TO_MENU``.
        settings: Round length, leaderboard size and name length.
    """

    def __init__(
        self,
        generator: ProblemSource,
        store: ScoreStore,
        settings: GameSettings | None = None,
    ) -> None:
        self._generator = generator
        self._store = store
        self._settings = settings or GameSettings()
        self._handlers: dict[str, _Handler] = {
            events.START_GAME: self._start_game,
            events.UPDATE_INPUT: self._update_input,
            events.CORRECT_ANSWER: self._correct_answer,
            events.HIDE_SUCCESS: self._hide_success,
            events.TICK: self._tick,
            events.SAVE_SCORE: self._save_score,
            events.RETURN_TO_MENU: self._return_to_menu,
            events.LOAD_SCORES: self._load_scores,
        }

    def initial_state(self) -> GameState:
        return GameState(time_remaining=self._settings.round_seconds)

    def reduce(self, state: GameState, event: Event) -> GameState:
        handler = self._handlers.get(event.event_type)
        if handler is None:
            _log.debug("Ignoring unknown event %s", event.event_type)
            return state
        new_state = handler(state, event.payload)
        if new_state is state:
            _log.debug("Event %s is a no-op in phase %s", event.event_type, state.phase.value)
        return new_state

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _start_game(self, state: GameState, _payload: dict[str, Any]) -> GameState:
        if state.phase not in (GamePhase.MENU, GamePhase.GAME_OVER):
            return state
        return state.model_copy(
            update={
                "phase": GamePhase.PLAYING,
                "current_problem": self._generator.generate(),
                "score": 0,
                "time_remaining": self._settings.round_seconds,
                "user_input": "",
                "show_success": False,
                "pending_save_name": None,
            }
        )

    def _update_input(self, state: GameState, payload: dict[str, Any]) -> GameState:
        if state.phase is not GamePhase.PLAYING:
            return state
        text = payload.get("text")
        return state.model_copy(update={"user_input": "" if text is None else str(text)})

    def _correct_answer(self, state: GameState, _payload: dict[str, Any]) -> GameState:
        if state.phase is not GamePhase.PLAYING:
            return state
        return state.model_copy(
            update={
                "score": state.score + 1,
                "current_problem": self._generator.generate(),
                "user_input": "",
                "show_success": True,
            }
        )

    def _hide_success(self, state: GameState, _payload: dict[str, Any]) -> GameState:
        if state.phase is not GamePhase.PLAYING:
            return state
        return state.model_copy(update={"show_success": False})

    def _tick(self, state: GameState, _payload: dict[str, Any]) -> GameState:
        if state.phase is not GamePhase.PLAYING:
            return state
        remaining = max(0, state.time_remaining - 1)
        phase = GamePhase.GAME_OVER if remaining == 0 else state.phase
        return state.model_copy(update={"time_remaining": remaining, "phase": phase})

    def _save_score(self, state: GameState, payload: dict[str, Any]) -> GameState:
        if state.phase is not GamePhase.GAME_OVER or state.pending_save_name is not None:
            return state
        name = str(payload.get("name") or "").strip()[: self._settings.max_name_length].strip()
        if not name:
            return state
        return state.model_copy(update={"pending_save_name": name})

    def _return_to_menu(self, state: GameState, _payload: dict[str, Any]) -> GameState:
        return self.initial_state().model_copy(update={"top_scores": self._top_scores()})

    def _load_scores(self, state: GameState, _payload: dict[str, Any]) -> GameState:
        return state.model_copy(update={"top_scores": self._top_scores()})

    def _top_scores(self) -> tuple[ScoreRecord, ...]:
        return tuple(self._store.get_top_scores(self._settings.top_scores_limit))
