import itertools
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

log = logging.getLogger(__name__)

BOARD_SIZE = 3                          # fixed 3x3 grid
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# scan order matters: first match wins
WIN_PATTERNS = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),    # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),    # cols
    (0, 4, 8), (2, 4, 6),               # diags
)


class NoughtsError(Exception):
    """base for game errors"""


class InvalidCellIndex(NoughtsError, IndexError):
    """
    cell index outside 0..8, caller bug
    """
    def __init__(self, index):
        super().__init__(f"cell index {index!r} not in 0..{CELL_COUNT - 1}")
        self.index = index


class Cell(Enum):
    EMPTY = ''
    X = 'X'
    O = 'O'

    def opposite(self):
        # swap marks, empty stays empty
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        return Cell.EMPTY


class GameMode(Enum):
    PLAYER_VS_PLAYER = "pvp"
    PLAYER_VS_COMPUTER = "pvc"


class Outcome(Enum):
    ACTIVE = "active"
    DRAW = "draw"
    X_WON = "x_won"
    O_WON = "o_won"

    @property
    def text(self):
        return _OUTCOME_TEXT[self]

    @property
    def is_terminal(self):
        return self is not Outcome.ACTIVE

    @classmethod
    def won_by(cls, symbol):
        return cls.X_WON if symbol is Cell.X else cls.O_WON


_OUTCOME_TEXT = {
    Outcome.ACTIVE: "Game in Progress",
    Outcome.DRAW: "It's a Draw!",
    Outcome.X_WON: "X Wins!",
    Outcome.O_WON: "O Wins!",
}


class IllegalMove(Enum):
    """
    why a move was ignored; never raised, the ui just drops the tap
    """
    NOT_STARTED = "no starting symbol chosen"
    GAME_OVER = "game is over"
    CELL_OCCUPIED = "cell taken"
    COMPUTER_PENDING = "computer is thinking"
    COMPUTER_TURN = "it is the computer's turn"


Board = Tuple[Cell, ...]
EMPTY_BOARD: Board = (Cell.EMPTY,) * CELL_COUNT

_session_ids = itertools.count(1)


@dataclass(frozen=True)
class GameSession:
    """
    one game: board, whose turn, mode, result

    turn is None until a starting symbol is chosen. the session is a value;
    every operation below hands back a new one.
    """
    mode: GameMode
    board: Board = EMPTY_BOARD
    turn: Optional[Cell] = None
    outcome: Outcome = Outcome.ACTIVE
    starting_symbol: Optional[Cell] = None
    computer_symbol: Optional[Cell] = None
    session_id: int = 0

    @property
    def move_count(self):
        return sum(1 for c in self.board if c is not Cell.EMPTY)

    @property
    def is_started(self):
        return self.turn is not None

    @property
    def is_computer_turn(self):
        return (self.mode is GameMode.PLAYER_VS_COMPUTER
                and self.outcome is Outcome.ACTIVE
                and self.turn is not None
                and self.turn is self.computer_symbol)

    def empty_cells(self):
        return [i for i, c in enumerate(self.board) if c is Cell.EMPTY]


def select_mode(mode, computer_symbol=Cell.O):
    """
    new session for mode; the computer only gets a symbol in pvc
    """
    mode = GameMode(mode)
    if mode is GameMode.PLAYER_VS_COMPUTER:
        if computer_symbol not in (Cell.X, Cell.O):
            raise ValueError(f"computer symbol must be X or O, got {computer_symbol!r}")
    else:
        computer_symbol = None
    session = GameSession(mode=mode, computer_symbol=computer_symbol,
                          session_id=next(_session_ids))
    log.debug("session %d created, mode=%s", session.session_id, mode.value)
    return session


def select_starting_symbol(session, symbol):
    """
    pick who moves first; must come before any move
    """
    if symbol not in (Cell.X, Cell.O):
        raise ValueError(f"starting symbol must be X or O, got {symbol!r}")
    if session.move_count:
        raise NoughtsError("starting symbol can't change once play has begun")
    return replace(session, starting_symbol=symbol, turn=symbol)


def check_index(index):
    # bools are ints, reject them too
    if isinstance(index, bool) or not isinstance(index, int) \
       or not 0 <= index < CELL_COUNT:
        raise InvalidCellIndex(index)


def validate_move(session, index, computer_pending=False):
    """
    None if the move is legal, otherwise the IllegalMove reason.
    raises InvalidCellIndex for an out of range index.
    """
    check_index(index)
    if not session.is_started:
        return IllegalMove.NOT_STARTED
    if session.outcome is not Outcome.ACTIVE:
        return IllegalMove.GAME_OVER
    if session.board[index] is not Cell.EMPTY:
        return IllegalMove.CELL_OCCUPIED
    if computer_pending:
        return IllegalMove.COMPUTER_PENDING
    return None


def apply_move(session, index):
    """
    place current turn's mark at index, evaluate, flip turn.
    illegal moves hand back the very same session.
    """
    reason = validate_move(session, index)
    if reason is not None:
        log.debug("move %d ignored: %s", index, reason.value)
        return session
    board = list(session.board)
    board[index] = session.turn
    board = tuple(board)
    outcome = evaluate_outcome(board)
    # flips even on the final move; terminal sessions reject all moves
    return replace(session, board=board, outcome=outcome,
                   turn=session.turn.opposite())


def reset_session(session):
    """
    clear board, back to starting symbol, keep mode and symbols
    """
    return replace(session, board=EMPTY_BOARD, outcome=Outcome.ACTIVE,
                   turn=session.starting_symbol,
                   session_id=next(_session_ids))


def winning_line(board):
    """first pattern (in scan order) holding three equal marks, or None"""
    for pattern in WIN_PATTERNS:
        a, b, c = (board[i] for i in pattern)
        if a is not Cell.EMPTY and a is b and b is c:
            return pattern
    return None


def evaluate_outcome(board):
    """
    scan win patterns, then check for a full board
    """
    if len(board) != CELL_COUNT:
        raise ValueError(f"board must have {CELL_COUNT} cells, got {len(board)}")
    line = winning_line(board)
    if line is not None:
        return Outcome.won_by(board[line[0]])
    if Cell.EMPTY not in board:
        return Outcome.DRAW
    return Outcome.ACTIVE
