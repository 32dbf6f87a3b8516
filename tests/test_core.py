from __future__ import annotations

import pytest

from lumines_rl.game import (
    AutoRepeat,
    DroppedPiece,
    GameConfig,
    Idle,
    Key,
    LuminesGame,
    Piece,
    Started,
)


def drop_until_committed(game: LuminesGame, held=frozenset(), limit: int = 60) -> int:
    """Press down, then tick with ``held`` until the piece commits. Returns ticks used."""
    if game.tick({Key.DOWN}).committed:
        return 1
    for n in range(2, limit):
        if game.tick(held).committed:
            return n
    raise AssertionError("piece never landed")


def test_initial_state(game):
    assert len(game.queue) == game.config.queue_depth
    assert isinstance(game.piece, Piece)
    assert game.piece.column == 7
    assert game.piece.row == -2
    assert game.handling == Idle()
    assert all(game.grid.column_height(c) == 0 for c in range(game.config.cols))


def test_hold_right_twelve_ticks(game):
    for _ in range(12):
        game.tick({Key.RIGHT})
    # immediate move, DAS move on tick 10, then ARR on ticks 11 and 12
    assert game.piece.column == 7 + 4


def test_movement_clamped_to_board(game):
    for _ in range(40):
        game.tick({Key.RIGHT})
    assert game.piece.column == game.config.cols - 2
    game.tick(set())
    for _ in range(40):
        game.tick({Key.LEFT})
    assert game.piece.column == 0


def test_rotation_needs_a_fresh_press(game):
    game.tick({Key.ROTATE_CW})
    game.tick({Key.ROTATE_CW})
    assert game.piece.rotation == 1
    game.tick(set())
    game.tick({Key.ROTATE_CW})
    game.tick({Key.ROTATE_CCW})
    assert game.piece.rotation == 1


def test_drop_commits_both_columns(game):
    palette = game.config.palette
    game.piece.config = 0b0110
    upcoming = game.queue[0]

    game.tick({Key.DOWN})
    assert isinstance(game.piece, DroppedPiece)
    ticks = 1
    while isinstance(game.piece, DroppedPiece):
        game.tick(set())
        ticks += 1
    # from row -2 at 0.75 rows/tick onto an empty floor at row 8
    assert ticks == 14
    assert game.grid.columns[7] == [palette.color2, palette.color1]
    assert game.grid.columns[8] == [palette.color1, palette.color2]
    assert game.piece is upcoming
    assert len(game.queue) == game.config.queue_depth
    assert game.handling == Idle()


def test_drop_onto_uneven_stack(game):
    game.grid.place(7, [1, 2, 1, 2])
    game.piece.config = 0b0110
    ticks = drop_until_committed(game)
    assert ticks == 14
    assert game.grid.column_height(7) == 6
    assert game.grid.column_height(8) == 2


def test_overflow_is_trimmed(game):
    stack = [1, 2] * 4 + [1]
    game.grid.place(7, stack)
    game.grid.place(8, stack)
    ticks = drop_until_committed(game)
    assert ticks == 2
    assert game.grid.column_height(7) == game.config.rows
    assert game.grid.column_height(8) == game.config.rows
    assert game.grid.columns[7][:9] == stack


def test_das_buffered_during_drop_goes_to_auto_repeat(game):
    drop_until_committed(game, held={Key.RIGHT})
    assert isinstance(game.handling, AutoRepeat)
    assert game.piece.column == 7
    game.tick({Key.RIGHT})
    assert game.piece.column == 8


def test_short_buffer_resumes_das():
    game = LuminesGame(GameConfig(fall_speed=5.0, random_seed=2))
    game.tick({Key.DOWN})
    result = game.tick({Key.RIGHT})
    assert result.committed
    assert game.handling == Started(1, 1)
    assert game.piece.column == 7
    game.tick({Key.RIGHT})
    assert game.handling == Started(1, 2)
    assert game.piece.column == 7


def test_timeline_clears_swept_match(fast_timeline_game):
    game = fast_timeline_game
    color = game.config.palette.color1
    game.grid.place(0, [color, color])
    game.grid.place(1, [color, color])
    game.grid.update_matches()

    cleared = sum(game.tick(set()).cleared for _ in range(20))
    assert cleared == 4
    assert game.cells_cleared_total == 4
    assert game.grid.columns[0] == [] and game.grid.columns[1] == []


def test_timeline_wrap_clears_right_edge(fast_timeline_game):
    game = fast_timeline_game
    color = game.config.palette.color2
    game.grid.place(14, [color, color])
    game.grid.place(15, [color, color])
    game.grid.update_matches()

    cleared = sum(game.tick(set()).cleared for _ in range(70))
    assert cleared == 4
    assert game.grid.column_height(14) == 0
    assert game.grid.column_height(15) == 0


def test_match_waits_for_timeline(game):
    color = game.config.palette.color1
    game.grid.place(12, [color, color])
    game.grid.place(13, [color, color])
    game.grid.update_matches()
    for _ in range(10):
        assert game.tick(set()).cleared == 0
    assert game.grid.column_height(12) == 2


def test_snapshots(game):
    palette = game.config.palette
    game.grid.place(0, [palette.color1, palette.color2])
    encoded = game.encoded_grid()
    assert encoded[9, 0] == 1
    assert encoded[8, 0] == 2
    assert encoded[7, 0] == 0

    state = game.get_state()
    assert state["piece"]["kind"] == "piece"
    assert state["grid"][0] == [palette.color1, palette.color2]
    assert len(state["queue"]) == game.config.queue_depth

    game.tick({Key.DOWN})
    assert game.get_state()["piece"]["kind"] == "dropped"


def test_reset_with_seed_is_reproducible():
    game = LuminesGame(GameConfig(random_seed=3))
    configs = [game.piece.config] + [p.config for p in game.queue]
    game.tick({Key.DOWN})
    game.reset(seed=3)
    assert [game.piece.config] + [p.config for p in game.queue] == configs
    assert game.time_ms == 0.0
    assert game.handling == Idle()


@pytest.mark.parametrize(
    "kwargs",
    [{"cols": 1}, {"rows": 1}, {"bpm": 0}, {"fall_speed": -1.0}, {"queue_depth": 0}, {"spawn_column": 15}],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)
