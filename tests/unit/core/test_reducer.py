"""Tests for the GameReducer state machine."""

from __future__ import annotations

import pytest

from mathrush.core import events
from mathrush.core.models.config import GameSettings
from mathrush.core.models.event import Event
from mathrush.core.models.problem import Operation
from mathrush.core.models.state import GamePhase, GameState
from mathrush.core.reducer import GameReducer
from mathrush.core.score_store import STORAGE_KEY, ScoreStore
from mathrush.storage.memory_storage import InMemoryStorage
from tests.helpers.problems import SequenceGenerator, problem, scores_blob

FIRST = problem(3, Operation.ADDITION, 4)
SECOND = problem(8, Operation.DIVISION, 2)


def ev(event_type: str, **payload) -> Event:
    return Event(event_type=event_type, payload=payload)


@pytest.fixture
def generator() -> SequenceGenerator:
    return SequenceGenerator([FIRST, SECOND])


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage({STORAGE_KEY: scores_blob(("a", 5), ("b", 9), ("c", 2))})


@pytest.fixture
def reducer(generator, storage) -> GameReducer:
    return GameReducer(generator, ScoreStore(storage), GameSettings(top_scores_limit=2))


@pytest.fixture
def playing(reducer) -> GameState:
    return reducer.reduce(reducer.initial_state(), ev(events.START_GAME))


@pytest.fixture
def game_over(reducer, playing) -> GameState:
    state = playing.model_copy(update={"score": 4, "time_remaining": 1})
    return reducer.reduce(state, ev(events.TICK))


class TestInitialState:
    def test_starts_in_menu(self, reducer):
        state = reducer.initial_state()
        assert state.phase is GamePhase.MENU
        assert state.current_problem is None
        assert state.user_input == ""
        assert state.score == 0
        assert state.time_remaining == 30
        assert state.show_success is False
        assert state.top_scores == ()
        assert state.pending_save_name is None

    def test_round_length_from_settings(self, generator, storage):
        r = GameReducer(generator, ScoreStore(storage), GameSettings(round_seconds=10))
        assert r.initial_state().time_remaining == 10


class TestStartGame:
    def test_from_menu(self, playing, generator):
        assert playing.phase is GamePhase.PLAYING
        assert playing.current_problem == FIRST
        assert playing.score == 0
        assert playing.time_remaining == 30
        assert generator.calls == 1

    def test_from_game_over_resets_round(self, reducer, game_over):
        state = game_over.model_copy(update={"pending_save_name": "Ada"})
        restarted = reducer.reduce(state, ev(events.START_GAME))
        assert restarted.phase is GamePhase.PLAYING
        assert restarted.score == 0
        assert restarted.time_remaining == 30
        assert restarted.pending_save_name is None

    def test_ignored_while_playing(self, reducer, playing, generator):
        assert reducer.reduce(playing, ev(events.START_GAME)) is playing
        assert generator.calls == 1


class TestUpdateInput:
    def test_sets_buffer(self, reducer, playing):
        state = reducer.reduce(playing, ev(events.UPDATE_INPUT, text="12"))
        assert state.user_input == "12"
        assert state.phase is GamePhase.PLAYING

    def test_missing_text_clears(self, reducer, playing):
        state = reducer.reduce(playing, ev(events.UPDATE_INPUT, text="1"))
        assert reducer.reduce(state, ev(events.UPDATE_INPUT)).user_input == ""

    def test_ignored_in_menu(self, reducer):
        menu = reducer.initial_state()
        assert reducer.reduce(menu, ev(events.UPDATE_INPUT, text="1")) is menu

    def test_does_not_mutate_previous_snapshot(self, reducer, playing):
        reducer.reduce(playing, ev(events.UPDATE_INPUT, text="5"))
        assert playing.user_input == ""


class TestCorrectAnswer:
    def test_scores_and_draws_new_problem(self, reducer, playing):
        typed = reducer.reduce(playing, ev(events.UPDATE_INPUT, text="7"))
        state = reducer.reduce(typed, ev(events.CORRECT_ANSWER))
        assert state.score == 1
        assert state.current_problem == SECOND
        assert state.user_input == ""
        assert state.show_success is True

    def test_ignored_outside_playing(self, reducer, game_over):
        assert reducer.reduce(game_over, ev(events.CORRECT_ANSWER)) is game_over


class TestHideSuccess:
    def test_clears_flag(self, reducer, playing):
        shown = reducer.reduce(playing, ev(events.CORRECT_ANSWER))
        assert reducer.reduce(shown, ev(events.HIDE_SUCCESS)).show_success is False

    def test_ignored_in_menu(self, reducer):
        menu = reducer.initial_state()
        assert reducer.reduce(menu, ev(events.HIDE_SUCCESS)) is menu


class TestTick:
    def test_counts_down(self, reducer, playing):
        state = reducer.reduce(playing, ev(events.TICK))
        assert state.time_remaining == 29
        assert state.phase is GamePhase.PLAYING

    def test_reaching_zero_ends_round_once(self, reducer, playing):
        state = playing.model_copy(update={"time_remaining": 1})
        phases = []
        for _ in range(5):
            state = reducer.reduce(state, ev(events.TICK))
            phases.append(state.phase)
            assert state.time_remaining >= 0
        assert phases == [GamePhase.GAME_OVER] * 5
        assert state.time_remaining == 0

    def test_ignored_after_game_over(self, reducer, game_over):
        assert reducer.reduce(game_over, ev(events.TICK)) is game_over

    def test_keeps_score(self, game_over):
        assert game_over.phase is GamePhase.GAME_OVER
        assert game_over.score == 4


class TestSaveScore:
    def test_stages_trimmed_name(self, reducer, game_over):
        state = reducer.reduce(game_over, ev(events.SAVE_SCORE, name="  Ada  "))
        assert state.pending_save_name == "Ada"
        assert state.phase is GamePhase.GAME_OVER

    def test_truncates_long_names(self, reducer, game_over):
        state = reducer.reduce(game_over, ev(events.SAVE_SCORE, name="x" * 30))
        assert state.pending_save_name == "x" * 20

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_is_noop(self, reducer, game_over, name):
        assert reducer.reduce(game_over, ev(events.SAVE_SCORE, name=name)) is game_over

    def test_only_once_per_round(self, reducer, game_over):
        saved = reducer.reduce(game_over, ev(events.SAVE_SCORE, name="Ada"))
        assert reducer.reduce(saved, ev(events.SAVE_SCORE, name="Bob")) is saved

    def test_ignored_while_playing(self, reducer, playing):
        assert reducer.reduce(playing, ev(events.SAVE_SCORE, name="Ada")) is playing


class TestReturnToMenu:
    @pytest.mark.parametrize("fixture_name", ["playing", "game_over"])
    def test_resets_round_and_refreshes_scores(self, request, reducer, fixture_name):
        state = request.getfixturevalue(fixture_name).model_copy(
            update={"user_input": "3", "score": 6, "show_success": True}
        )
        menu = reducer.reduce(state, ev(events.RETURN_TO_MENU))
        assert menu.phase is GamePhase.MENU
        assert menu.score == 0
        assert menu.time_remaining == 30
        assert menu.user_input == ""
        assert menu.current_problem is None
        assert menu.show_success is False
        assert menu.pending_save_name is None
        assert [r.score for r in menu.top_scores] == [9, 5]

    def test_valid_from_menu(self, reducer):
        menu = reducer.reduce(reducer.initial_state(), ev(events.RETURN_TO_MENU))
        assert menu.phase is GamePhase.MENU
        assert len(menu.top_scores) == 2


class TestLoadScores:
    def test_loads_without_phase_change(self, reducer, playing):
        state = reducer.reduce(playing, ev(events.LOAD_SCORES))
        assert state.phase is GamePhase.PLAYING
        assert [r.name for r in state.top_scores] == ["b", "a"]

    def test_sees_new_saves(self, reducer, storage, playing):
        ScoreStore(storage).save_score("z", 50)
        state = reducer.reduce(playing, ev(events.LOAD_SCORES))
        assert state.top_scores[0].name == "z"


class TestUnknownEvents:
    def test_unknown_type_is_noop(self, reducer, playing):
        assert reducer.reduce(playing, ev("game.bogus")) is playing
