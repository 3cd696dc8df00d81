import logging
import random

from .game_logic import Cell, NoughtsError

log = logging.getLogger(__name__)


class NoMoveAvailable(NoughtsError):
    """agent asked to move on a full board; outcome check should prevent it"""


def choose_move(board, rng=None):
    """
    pick an empty cell uniformly at random.
    pure over the board: no memory, no lookahead.
    """
    empty = [i for i, c in enumerate(board) if c is Cell.EMPTY]
    if not empty:
        raise NoMoveAvailable("no empty cell left on the board")
    return (rng or random).choice(empty)


class ComputerAgent:
    """
    random-move opponent, optionally seeded
    """
    def __init__(self, seed=None, rng=None):
        self.rng = rng or random.Random(seed)

    def choose_move(self, board):
        index = choose_move(board, self.rng)
        log.debug("computer picked cell %d", index)
        return index
