"""Game controller — owns the live :class:`GameState` and its side effects.

Every event goes through :meth:`GameController.dispatch`: the reducer computes
the next snapshot, then effect handlers look at ``(old, new, event)`` and
may queue follow-up events, which are reduced in the same call.  Once the
queue is empty the final snapshot is published as ``game.state.changed``.

Effects:
* **Countdown** — entering ``PLAYING`` starts a task that dispatches
  ``TICK`` every ``tick_interval_seconds``; leaving ``PLAYING`` cancels it.
* **Auto-validate** — when the input or the problem changes, a matching
  answer immediately raises ``CORRECT_ANSWER``.
* **Success flash** — each ``CORRECT_ANSWER`` (re)arms a one-shot timer that
  dispatches ``HIDE_SUCCESS`` after ``success_flash_ms``.  The timer is not
  tied to the problem it was armed for.
* **Persist-on-save** — a staged ``pending_save_name`` is written through
  the score store in the default executor; the transition never waits for
  it.  ``LOAD_SCORES`` follows once the write has finished.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Coroutine

from mathrush.core import events
from mathrush.core.event_bus import EventBus
from mathrush.core.models.config import GameSettings
from mathrush.core.models.event import Event
from mathrush.core.models.state import GamePhase, GameState
from mathrush.core.problem_generator import ProblemGenerator, is_correct
from mathrush.core.reducer import GameReducer, ProblemSource
from mathrush.core.score_store import ScoreStore

_log = logging.getLogger(__name__)


class GameController:
    """Single owner of the game state for one session.

    Args:
        event_bus: Bus carrying player events in and state snapshots out.
        store: Leaderboard storage.
        generator: Problem source; defaults to an unseeded
            :class:`ProblemGenerator`.
        settings: Timing and leaderboard parameters.
    """

    def __init__(
        self,
        event_bus: EventBus,
        store: ScoreStore,
        generator: ProblemSource | None = None,
        settings: GameSettings | None = None,
    ) -> None:
        self._bus = event_bus
        self._store = store
        self._settings = settings or GameSettings()
        self._reducer = GameReducer(generator or ProblemGenerator(), store, self._settings)
        self._state = self._reducer.initial_state()

        self._sub_ids: list[str] = []
        self._timer_task: asyncio.Task[None] | None = None
        self._flash_task: asyncio.Task[None] | None = None
        self._background: set[asyncio.Task[Any]] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    async def start(self) -> None:
        """Subscribe to player events and load the leaderboard."""
        for event_type in events.GAME_EVENTS:
            self._sub_ids.append(self._bus.subscribe(event_type, self._on_bus_event))
        await self.dispatch(events.LOAD_SCORES)
        _log.info("Game controller started (%d scores loaded)", len(self._state.top_scores))

    async def stop(self) -> None:
        """Unsubscribe and cancel every pending timer and save."""
        for sub_id in self._sub_ids:
            self._bus.unsubscribe(sub_id)
        self._sub_ids.clear()

        pending = [t for t in (self._timer_task, self._flash_task) if t is not None]
        pending.extend(self._background)
        self._timer_task = None
        self._flash_task = None
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        _log.info("Game controller stopped")

    async def dispatch(self, event_type: str, payload: dict[str, Any] | None = None) -> GameState:
        """Apply one event (plus its follow-ups) and return the new snapshot."""
        return await self._apply(Event(event_type=event_type, payload=payload or {}))

    # ------------------------------------------------------------------
    # Transition loop
    # ------------------------------------------------------------------

    async def _on_bus_event(self, event: Event) -> None:
        await self._apply(event)

    async def _apply(self, event: Event) -> GameState:
        before = self._state
        queue: deque[Event] = deque([event])
        while queue:
            current = queue.popleft()
            old = self._state
            new = self._reducer.reduce(old, current)
            if new is old:
                continue
            self._state = new
            queue.extend(self._run_effects(old, new, current))

        if self._state is not before and self._bus.is_running:
            await self._bus.publish(events.STATE_CHANGED, {"state": self._state})
        return self._state

    def _run_effects(self, old: GameState, new: GameState, event: Event) -> list[Event]:
        follow_ups: list[Event] = []

        if new.phase is GamePhase.PLAYING and old.phase is not GamePhase.PLAYING:
            self._start_timer()
        elif old.phase is GamePhase.PLAYING and new.phase is not GamePhase.PLAYING:
            self._cancel_timer()
            _log.info("Round over — final score %d", new.score)

        if self._should_validate(old, new) and is_correct(new.current_problem, new.user_input):
            follow_ups.append(Event(event_type=events.CORRECT_ANSWER))

        if event.event_type == events.CORRECT_ANSWER:
            self._arm_flash()

        if event.event_type == events.SAVE_SCORE and new.pending_save_name is not None:
            self._spawn(
                self._persist(new.pending_save_name, new.score), name="save-score"
            )

        return follow_ups

    @staticmethod
    def _should_validate(old: GameState, new: GameState) -> bool:
        if new.phase is not GamePhase.PLAYING or new.current_problem is None:
            return False
        if not new.user_input:
            return False
        return new.user_input != old.user_input or new.current_problem is not old.current_problem

    # ------------------------------------------------------------------
    # Countdown
    # ------------------------------------------------------------------

    def _start_timer(self) -> None:
        self._cancel_timer()
        self._timer_task = asyncio.create_task(self._run_timer(), name="game-countdown")

    def _cancel_timer(self) -> None:
        task, self._timer_task = self._timer_task, None
        # The countdown ends the round itself; it must not cancel itself mid-dispatch.
        if task is not None and task is not asyncio.current_task():
            task.cancel()

    async def _run_timer(self) -> None:
        interval = self._settings.tick_interval_seconds
        while self._state.phase is GamePhase.PLAYING:
            await asyncio.sleep(interval)
            if self._state.phase is not GamePhase.PLAYING:
                break
            await self._apply(Event(event_type=events.TICK))

    # ------------------------------------------------------------------
    # Success flash
    # ------------------------------------------------------------------

    def _arm_flash(self) -> None:
        self._cancel_flash()
        self._flash_task = asyncio.create_task(self._hide_success_later(), name="success-flash")

    def _cancel_flash(self) -> None:
        task, self._flash_task = self._flash_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()

    async def _hide_success_later(self) -> None:
        await asyncio.sleep(self._settings.success_flash_ms / 1000)
        self._flash_task = None
        await self._apply(Event(event_type=events.HIDE_SUCCESS))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def _persist(self, name: str, score: int) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._store.save_score, name, score)
        except Exception:
            _log.exception("Saving score %d for %r failed", score, name)
        await self._apply(Event(event_type=events.LOAD_SCORES))

    def _spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        task = asyncio.create_task(coro, name=name)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
