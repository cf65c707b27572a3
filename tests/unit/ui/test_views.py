"""Tests for the pure view-model renderer."""

from __future__ import annotations

import pytest

from mathrush.core.models.problem import Operation
from mathrush.core.models.score import ScoreRecord
from mathrush.core.models.state import GamePhase, GameState
from mathrush.ui.views import GameOverView, MenuView, PlayingView, render
from tests.helpers.problems import problem


class TestMenuView:
    def test_empty_leaderboard_hidden(self):
        view = render(GameState(), 30)
        assert isinstance(view, MenuView)
        assert view.title == "🧮 Math Rush"
        assert "30 seconds" in view.subtitle
        assert view.show_leaderboard is False

    def test_ranked_rows(self):
        state = GameState(
            top_scores=(ScoreRecord(name="Bea", score=9), ScoreRecord(name="Al", score=4))
        )
        view = render(state, 30)
        assert [(r.rank_label, r.name, r.score) for r in view.leaderboard] == [
            ("#1", "Bea", 9),
            ("#2", "Al", 4),
        ]
        assert view.show_leaderboard is True


class TestPlayingView:
    @pytest.fixture
    def state(self) -> GameState:
        return GameState(
            phase=GamePhase.PLAYING,
            current_problem=problem(6, Operation.MULTIPLICATION, 7),
            user_input="4",
            score=3,
            time_remaining=15,
            show_success=True,
        )

    def test_fields(self, state):
        view = render(state, 30)
        assert isinstance(view, PlayingView)
        assert view.problem_text == "6 × 7 = ?"
        assert view.time_label == "15s"
        assert view.score == 3
        assert view.user_input == "4"
        assert view.show_success is True

    @pytest.mark.parametrize(("remaining", "percent"), [(30, 100.0), (15, 50.0), (0, 0.0)])
    def test_progress(self, state, remaining, percent):
        view = render(state.model_copy(update={"time_remaining": remaining}), 30)
        assert view.progress_percent == pytest.approx(percent)

    def test_progress_clamped(self, state):
        view = render(state.model_copy(update={"time_remaining": 40}), 30)
        assert view.progress_percent == pytest.approx(100.0)


class TestGameOverView:
    def test_can_save_until_name_staged(self):
        over = GameState(phase=GamePhase.GAME_OVER, score=11, time_remaining=0)
        view = render(over, 30)
        assert isinstance(view, GameOverView)
        assert view.final_score == 11
        assert view.can_save is True

        saved = render(over.model_copy(update={"pending_save_name": "Ada"}), 30)
        assert saved.can_save is False
        assert saved.saved_name == "Ada"
