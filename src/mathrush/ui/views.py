"""View models — pure functions from a :class:`GameState` snapshot to what
each screen shows.

Nothing here touches NiceGUI, so every screen's content is testable without
a browser.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from mathrush.core.models.state import GamePhase, GameState

TITLE = "🧮 Math Rush"


class LeaderboardRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: int
    name: str
    score: int

    @property
    def rank_label(self) -> str:
        return f"#{self.rank}"


class MenuView(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str
    leaderboard: tuple[LeaderboardRow, ...]

    @property
    def show_leaderboard(self) -> bool:
        return bool(self.leaderboard)


class PlayingView(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    time_label: str
    progress_percent: float
    problem_text: str
    user_input: str
    show_success: bool


class GameOverView(BaseModel):
    model_config = ConfigDict(frozen=True)

    final_score: int
    can_save: bool
    saved_name: str | None


ScreenView = MenuView | PlayingView | GameOverView


def render(state: GameState, round_seconds: int) -> ScreenView:
    """Return the view model for the screen matching ``state.phase``."""
    if state.phase is GamePhase.PLAYING:
        return _playing(state, round_seconds)
    if state.phase is GamePhase.GAME_OVER:
        return GameOverView(
            final_score=state.score,
            can_save=state.pending_save_name is None,
            saved_name=state.pending_save_name,
        )
    return _menu(state, round_seconds)


def _menu(state: GameState, round_seconds: int) -> MenuView:
    rows = tuple(
        LeaderboardRow(rank=idx, name=record.name, score=record.score)
        for idx, record in enumerate(state.top_scores, start=1)
    )
    return MenuView(
        title=TITLE,
        subtitle=f"{round_seconds} seconds to show off your arithmetic!",
        leaderboard=rows,
    )


def _playing(state: GameState, round_seconds: int) -> PlayingView:
    problem = state.current_problem
    progress = 100.0 * state.time_remaining / round_seconds if round_seconds > 0 else 0.0
    return PlayingView(
        score=state.score,
        time_label=f"{state.time_remaining}s",
        progress_percent=min(100.0, max(0.0, progress)),
        problem_text=f"{problem} = ?" if problem is not None else "",
        user_input=state.user_input,
        show_success=state.show_success,
    )
