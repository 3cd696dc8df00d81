import os

import pytest

from noughts.computer import ComputerAgent
from noughts.engine import GameEngine
from noughts.game_logic import Cell, GameMode, select_mode, select_starting_symbol
from noughts.scheduler import MoveScheduler


class ManualScheduler(MoveScheduler):
    """fake clock: tasks run only when the test advances time"""

    def __init__(self):
        self.now = 0
        self.tasks = []     # [due, handle, callback]
        self._next = 0

    def schedule(self, delay_ms, callback):
        self._next += 1
        self.tasks.append([self.now + delay_ms, self._next, callback])
        return self._next

    def cancel(self, handle):
        self.tasks = [t for t in self.tasks if t[1] != handle]

    def advance(self, ms):
        self.now += ms
        while True:
            due = sorted((t for t in self.tasks if t[0] <= self.now), key=lambda t: t[0])
            if not due:
                return
            task = due[0]
            self.tasks.remove(task)
            task[2]()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_engine(scheduler):
    def make(mode=GameMode.PLAYER_VS_COMPUTER, starting=Cell.X,
             computer=Cell.O, seed=7, on_change=None):
        engine = GameEngine(scheduler, agent=ComputerAgent(seed=seed),
                            delay_ms=500, on_change=on_change)
        session = select_starting_symbol(select_mode(mode, computer_symbol=computer), starting)
        engine.start(session)
        return engine
    return make


def board_of(text):
    """'XO.X.....' -> board tuple"""
    marks = {'X': Cell.X, 'O': Cell.O, '.': Cell.EMPTY}
    return tuple(marks[ch] for ch in text)


@pytest.fixture(scope="session")
def qapp():
    # widgets need a QApplication; render offscreen so no display is required
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication
    return QApplication.instance() or QApplication([])
