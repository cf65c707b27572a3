"""Well-known event type constants.

Defined centrally so the renderer, the reducer and the controller reference
the same strings.
"""

# --- Player / renderer events (UI → game) --------------------------------

START_GAME = "game.start"
UPDATE_INPUT = "game.input.updated"  # payload: {"text": str}
SAVE_SCORE = "game.score.save"  # payload: {"name": str}
RETURN_TO_MENU = "game.menu.return"

# --- Internal events (raised by effect handlers) --------------------------

CORRECT_ANSWER = "game.answer.correct"
HIDE_SUCCESS = "game.success.hide"
TICK = "game.timer.tick"
LOAD_SCORES = "game.scores.load"

# --- Output events (game → UI) --------------------------------------------

STATE_CHANGED = "game.state.changed"  # payload: {"state": GameState}

GAME_EVENTS = (
    START_GAME,
    UPDATE_INPUT,
    CORRECT_ANSWER,
    HIDE_SUCCESS,
    TICK,
    SAVE_SCORE,
    RETURN_TO_MENU,
    LOAD_SCORES,
)
