import pytest

from noughts.engine import GameEngine
from noughts.game_logic import (
    Cell, GameMode, IllegalMove, InvalidCellIndex, NoughtsError, Outcome,
    select_mode,
)

EMPTY = (Cell.EMPTY,) * 9


def marks(engine, symbol):
    return [i for i, c in enumerate(engine.board()) if c is symbol]


def test_computer_replies_after_delay(make_engine, scheduler):
    engine = make_engine()
    assert not engine.is_computer_pending()
    engine.apply_move(4)
    assert engine.is_computer_pending()
    assert engine.turn() is Cell.O
    scheduler.advance(499)
    assert engine.is_computer_pending()
    assert marks(engine, Cell.O) == []
    scheduler.advance(1)
    assert not engine.is_computer_pending()
    assert len(marks(engine, Cell.O)) == 1
    assert marks(engine, Cell.X) == [4]
    assert engine.turn() is Cell.X


def test_human_move_ignored_while_computer_pending(make_engine, scheduler):
    engine = make_engine()
    engine.apply_move(0)
    board = engine.board()
    assert engine.check_move(1) is IllegalMove.COMPUTER_PENDING
    assert engine.apply_move(1) is Outcome.ACTIVE
    assert engine.board() == board
    assert engine.turn() is Cell.O
    scheduler.advance(500)
    assert engine.check_move(1) in (None, IllegalMove.CELL_OCCUPIED)


def test_computer_opens_when_it_starts(make_engine, scheduler):
    engine = make_engine(starting=Cell.O)
    assert engine.is_computer_pending()
    assert engine.board() == EMPTY
    scheduler.advance(500)
    assert len(marks(engine, Cell.O)) == 1
    assert engine.turn() is Cell.X
    assert not engine.is_computer_pending()
    scheduler.advance(5000)
    assert len(marks(engine, Cell.O)) == 1
    assert scheduler.tasks == []


def test_computer_can_play_x(make_engine, scheduler):
    engine = make_engine(starting=Cell.X, computer=Cell.X)
    assert engine.is_computer_pending()
    scheduler.advance(500)
    assert len(marks(engine, Cell.X)) == 1


def test_reset_cancels_pending_move(make_engine, scheduler):
    engine = make_engine()
    engine.apply_move(4)
    stale = scheduler.tasks[0][2]
    engine.reset()
    assert not engine.is_computer_pending()
    assert scheduler.tasks == []
    scheduler.advance(1000)
    assert engine.board() == EMPTY
    # even if the timer fires anyway it must not touch the new board
    stale()
    assert engine.board() == EMPTY
    assert engine.turn() is Cell.X


def test_reset_with_computer_start_schedules_again(make_engine, scheduler):
    engine = make_engine(starting=Cell.O)
    scheduler.advance(500)
    engine.reset()
    assert engine.board() == EMPTY
    assert engine.is_computer_pending()
    assert len(scheduler.tasks) == 1
    scheduler.advance(500)
    assert len(marks(engine, Cell.O)) == 1


def test_reset_terminal_game(make_engine):
    engine = make_engine(mode=GameMode.PLAYER_VS_PLAYER)
    for i in (0, 3, 1, 4, 2):
        engine.apply_move(i)
    assert engine.outcome() is Outcome.X_WON
    old_id = engine.session.session_id
    engine.reset()
    assert engine.board() == EMPTY
    assert engine.outcome() is Outcome.ACTIVE
    assert engine.turn() is Cell.X
    assert engine.session.mode is GameMode.PLAYER_VS_PLAYER
    assert engine.session.session_id != old_id


def test_terminal_game_rejects_moves(make_engine):
    engine = make_engine(mode=GameMode.PLAYER_VS_PLAYER)
    for i in (0, 3, 1, 4, 2):
        engine.apply_move(i)
    board, turn = engine.board(), engine.turn()
    assert engine.apply_move(8) is Outcome.X_WON
    assert engine.board() == board and engine.turn() is turn


def test_player_mode_never_schedules(make_engine, scheduler):
    engine = make_engine(mode=GameMode.PLAYER_VS_PLAYER, starting=Cell.O)
    engine.apply_move(0)
    engine.apply_move(1)
    assert scheduler.tasks == []
    assert not engine.is_computer_pending()
    assert engine.board()[0] is Cell.O and engine.board()[1] is Cell.X


def test_no_computer_move_after_human_wins(make_engine, scheduler):
    engine = make_engine()
    # drive the game: human takes the first empty cell each turn
    while engine.outcome() is Outcome.ACTIVE:
        if engine.is_computer_pending():
            scheduler.advance(500)
        else:
            engine.apply_move(engine.session.empty_cells()[0])
    assert not engine.is_computer_pending()
    assert scheduler.tasks == []
    filled = 9 - engine.board().count(Cell.EMPTY)
    assert filled == engine.session.move_count
    x, o = len(marks(engine, Cell.X)), len(marks(engine, Cell.O))
    assert x - o in (0, 1)


def test_occupied_cell_changes_nothing(make_engine, scheduler):
    engine = make_engine()
    engine.apply_move(0)
    scheduler.advance(500)
    board, turn = engine.board(), engine.turn()
    engine.apply_move(0)
    assert engine.board() == board and engine.turn() is turn
    assert not engine.is_computer_pending()


def test_out_of_range_raises(make_engine):
    engine = make_engine()
    with pytest.raises(InvalidCellIndex):
        engine.apply_move(9)
    with pytest.raises(InvalidCellIndex):
        engine.apply_move(-1)


def test_on_change_sees_every_update(make_engine, scheduler):
    seen = []
    engine = make_engine(on_change=seen.append)
    engine.apply_move(4)
    scheduler.advance(500)
    boards = [s.board for s in seen]
    assert boards[0] == EMPTY
    assert boards[-1] == engine.board()
    assert any(s.board[4] is Cell.X and s.board.count(Cell.O) == 0 for s in seen)


def test_needs_session(scheduler):
    engine = GameEngine(scheduler)
    with pytest.raises(NoughtsError):
        engine.board()
    with pytest.raises(NoughtsError):
        engine.start(select_mode(GameMode.PLAYER_VS_PLAYER))


def test_stop_drops_pending_move(make_engine, scheduler):
    engine = make_engine(starting=Cell.O)
    engine.stop()
    scheduler.advance(1000)
    assert engine.board() == EMPTY
    assert not engine.is_computer_pending()


def test_human_cannot_place_computer_mark_after_stop(make_engine, scheduler):
    engine = make_engine(starting=Cell.O)
    engine.stop()
    assert not engine.is_computer_pending()
    assert engine.check_move(0) is IllegalMove.COMPUTER_TURN
    assert engine.apply_move(0) is Outcome.ACTIVE
    assert engine.board() == EMPTY
    assert engine.turn() is Cell.O
