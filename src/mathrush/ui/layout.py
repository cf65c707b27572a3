"""Main page layout — single-page NiceGUI application.

Provides the ``@ui.page('/')`` route.  Each connected client gets a
:class:`_ClientScreen` that redraws from the latest ``game.state.changed``
snapshot.  The whole screen is rebuilt only when the phase changes; within
a phase the existing widgets are updated in place so the answer box keeps
keyboard focus while the player types.
"""

from __future__ import annotations

import logging
from typing import Any

from nicegui import ui

from mathrush.core import events
from mathrush.core.event_bus import EventBus
from mathrush.core.models.config import MathRushConfig
from mathrush.core.models.event import Event
from mathrush.core.models.state import GameState
from mathrush.ui.views import GameOverView, MenuView, PlayingView, ScreenView, render

_log = logging.getLogger(__name__)

_PAGE_BACKGROUNDS = {
    MenuView: "linear-gradient(135deg, #6366f1, #a855f7, #ec4899)",
    PlayingView: "linear-gradient(135deg, #3b82f6, #14b8a6, #22c55e)",
    GameOverView: "linear-gradient(135deg, #f97316, #ef4444, #ec4899)",
}


class GameLayout:
    """Registers the game page and fans state snapshots out to every client.

    Args:
        event_bus: The bus the controller publishes snapshots on.
        config: Application configuration (round length, name length).
    """

    def __init__(self, event_bus: EventBus, config: MathRushConfig) -> None:
        self._bus = event_bus
        self._config = config
        self._state = GameState(time_remaining=config.game.round_seconds)
        self._clients: set[_ClientScreen] = set()
        self._sub_id: str | None = None

    def setup_page(self) -> None:
        """Register the ``@ui.page('/')`` route and the snapshot subscription."""
        if self._sub_id is None:
            self._sub_id = self._bus.subscribe(events.STATE_CHANGED, self._on_state_changed)

        @ui.page("/")
        def index():
            self._build_page()

    def _build_page(self) -> None:
        ui.query("body").style("margin: 0; padding: 0;")
        with ui.column().classes("w-full min-h-screen items-center justify-center p-4") as root:
            pass
        client = _ClientScreen(root, self._bus, self._config)
        self._clients.add(client)
        client.show(self._view())

    def _view(self) -> ScreenView:
        return render(self._state, self._config.game.round_seconds)

    async def _on_state_changed(self, event: Event) -> None:
        state = event.payload.get("state")
        if not isinstance(state, GameState):
            _log.warning("Ignoring state event without a GameState payload")
            return
        self._state = state
        view = self._view()
        for client in list(self._clients):
            try:
                client.show(view)
            except RuntimeError:
                # Client disconnected; its elements are gone.
                self._clients.discard(client)


class _ClientScreen:
    """Widgets for one browser tab."""

    def __init__(self, root: ui.element, event_bus: EventBus, config: MathRushConfig) -> None:
        self._root = root
        self._bus = event_bus
        self._config = config
        self._view_type: type | None = None
        self._widgets: dict[str, Any] = {}

    def show(self, view: ScreenView) -> None:
        if type(view) is not self._view_type:
            self._rebuild(view)
        else:
            self._update(view)

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def _rebuild(self, view: ScreenView) -> None:
        self._root.clear()
        self._widgets = {}
        self._view_type = type(view)
        self._root.style(f"background: {_PAGE_BACKGROUNDS[type(view)]};")
        with self._root:
            with ui.card().classes("w-full max-w-2xl items-center p-8 rounded-2xl"):
                if isinstance(view, MenuView):
                    self._build_menu(view)
                elif isinstance(view, PlayingView):
                    self._build_playing(view)
                else:
                    self._build_game_over(view)

    def _build_menu(self, view: MenuView) -> None:
        ui.label(view.title).classes("text-5xl font-black text-gray-800")
        ui.label(view.subtitle).classes("text-lg text-gray-600 mb-4")
        ui.button("PLAY", icon="play_arrow", on_click=self._on_start).classes("text-lg")

        if not view.show_leaderboard:
            return
        ui.separator().classes("my-4")
        ui.label(f"🏆 Top {len(view.leaderboard)} players").classes("text-2xl font-bold")
        for row in view.leaderboard:
            with ui.row().classes("w-full justify-between items-center bg-gray-50 rounded-lg p-3"):
                with ui.row().classes("items-center gap-3"):
                    ui.label(row.rank_label).classes("font-bold text-gray-400")
                    ui.label(row.name).classes("text-gray-800 font-medium")
                ui.label(str(row.score)).classes("text-2xl font-bold text-purple-600")

    def _build_playing(self, view: PlayingView) -> None:
        with ui.row().classes("w-full justify-around"):
            self._widgets["score"] = ui.label().classes("text-2xl font-bold text-green-600")
            self._widgets["time"] = ui.label().classes("text-2xl font-bold text-red-600")
        self._widgets["progress"] = ui.linear_progress(value=1.0, show_value=False).classes("w-full")
        self._widgets["problem"] = ui.label().classes("text-6xl font-black text-gray-800 my-6")
        self._widgets["answer"] = (
            ui.input(placeholder="?", on_change=self._on_answer_changed)
            .props('autofocus input-class="text-center text-5xl font-bold" type=number')
            .classes("w-64")
        )
        self._widgets["success"] = ui.label("✓ Correct!").classes(
            "text-4xl font-bold text-white bg-green-500 rounded-3xl px-12 py-8"
        )
        self._update(view)

    def _build_game_over(self, view: GameOverView) -> None:
        ui.icon("emoji_events", size="80px").classes("text-yellow-500")
        ui.label("Game over!").classes("text-4xl font-black text-gray-800")
        ui.label("Your final score").classes("text-lg text-gray-600")
        ui.label(str(view.final_score)).classes("text-7xl font-black text-purple-600 mb-4")

        with ui.column().classes("items-center") as save_box:
            name_input = ui.input(placeholder="Your name").props(
                f"maxlength={self._config.game.max_name_length}"
            )
            ui.button(
                "Save score",
                on_click=lambda: self._on_save(name_input.value),
            )
        self._widgets["save_box"] = save_box
        self._widgets["saved"] = ui.label("✓ Score saved!").classes(
            "text-green-600 font-bold text-xl"
        )
        ui.button("Back to menu", icon="home", on_click=self._on_return)
        self._update(view)

    # ------------------------------------------------------------------
    # In-place updates
    # ------------------------------------------------------------------

    def _update(self, view: ScreenView) -> None:
        if isinstance(view, PlayingView):
            self._widgets["score"].text = f"Score: {view.score}"
            self._widgets["time"].text = f"Time: {view.time_label}"
            self._widgets["progress"].value = view.progress_percent / 100
            self._widgets["problem"].text = view.problem_text
            self._widgets["success"].set_visibility(view.show_success)
            # Only push resets; echoing partial input back would fight the typist.
            answer = self._widgets["answer"]
            if view.user_input == "" and answer.value:
                answer.value = ""
        elif isinstance(view, GameOverView):
            self._widgets["save_box"].set_visibility(view.can_save)
            self._widgets["saved"].set_visibility(not view.can_save)
        elif isinstance(view, MenuView):
            # The leaderboard may arrive after the menu was first drawn.
            self._rebuild(view)

    # ------------------------------------------------------------------
    # Player input → events
    # ------------------------------------------------------------------

    async def _on_start(self) -> None:
        await self._bus.publish(events.START_GAME)

    async def _on_answer_changed(self, e: Any) -> None:
        await self._bus.publish(events.UPDATE_INPUT, {"text": e.value or ""})

    async def _on_save(self, name: str | None) -> None:
        await self._bus.publish(events.SAVE_SCORE, {"name": name or ""})

    async def _on_return(self) -> None:
        await self._bus.publish(events.RETURN_TO_MENU)
