import logging

from . import game_logic
from .computer import ComputerAgent
from .config import COMPUTER_DELAY_MS
from .game_logic import IllegalMove, Outcome

log = logging.getLogger(__name__)


class GameEngine:
    """
    holds the live session and drives the computer opponent.

    the session itself is an immutable value; the engine owns the one
    mutable reference to it. computer moves go through the scheduler so
    the ui stays responsive, and while one is pending human moves are
    ignored. on_change is called after every session change.
    """
    def __init__(self, scheduler, agent=None, delay_ms=COMPUTER_DELAY_MS,
                 on_change=None):
        self.scheduler = scheduler
        self.agent = agent or ComputerAgent()
        self.delay_ms = delay_ms
        self.on_change = on_change
        self._session = None
        self._pending = None            # scheduler handle
        self._pending_session_id = None # session the pending move belongs to

    # --- accessors -----------------------------------------------------------

    @property
    def session(self):
        return self._session

    def board(self):
        return self._require_session().board

    def turn(self):
        return self._require_session().turn

    def outcome(self):
        return self._require_session().outcome

    def is_computer_pending(self):
        return self._pending is not None

    # --- lifecycle -----------------------------------------------------------

    def start(self, session):
        """
        install a session; if the computer moves first, schedule it once
        """
        if not session.is_started:
            raise game_logic.NoughtsError("choose a starting symbol before play")
        self._cancel_pending()
        self._set_session(session)
        log.info("game %d started: mode=%s, %s moves first",
                 session.session_id, session.mode.value,
                 session.starting_symbol.value)
        self._maybe_schedule_computer()

    def reset(self):
        """
        fresh board with the same mode and symbols; drops any pending
        computer move
        """
        self._cancel_pending()
        session = game_logic.reset_session(self._require_session())
        self._set_session(session)
        log.info("game reset, new session %d", session.session_id)
        self._maybe_schedule_computer()
        return session

    def stop(self):
        # leaving the game screen
        self._cancel_pending()

    # --- moves ---------------------------------------------------------------

    def apply_move(self, index):
        """
        human move at index. returns the outcome afterwards.
        illegal moves change nothing; bad indexes raise InvalidCellIndex.
        """
        session = self._require_session()
        reason = self.check_move(index)
        if reason is not None:
            log.debug("move %d rejected: %s", index, reason.value)
            return session.outcome
        self._play(index)
        self._maybe_schedule_computer()
        return self._session.outcome

    def check_move(self, index):
        """IllegalMove reason for a human move at index, or None"""
        session = self._require_session()
        reason = game_logic.validate_move(session, index,
                                          computer_pending=self.is_computer_pending())
        # the computer's mark is only ever placed by the agent
        if reason is None and session.is_computer_turn:
            return IllegalMove.COMPUTER_TURN
        return reason

    def _play(self, index):
        before = self._session
        after = game_logic.apply_move(before, index)
        log.info("%s plays cell %d", before.turn.value, index)
        self._set_session(after)
        if after.outcome is not Outcome.ACTIVE:
            log.info("game %d over: %s", after.session_id, after.outcome.text)

    def _maybe_schedule_computer(self):
        session = self._session
        if not session.is_computer_turn or self._pending is not None:
            return
        session_id = session.session_id
        self._pending_session_id = session_id
        self._pending = self.scheduler.schedule(
            self.delay_ms, lambda: self._computer_move(session_id))
        log.debug("computer move scheduled in %d ms", self.delay_ms)
        self._notify()

    def _computer_move(self, session_id):
        # stale task from a session that was reset or replaced
        if session_id != self._pending_session_id or self._session is None \
           or self._session.session_id != session_id:
            log.debug("stale computer move for session %d dropped", session_id)
            return
        self._pending = None
        self._pending_session_id = None
        session = self._session
        if not session.is_computer_turn:
            self._notify()
            return
        index = self.agent.choose_move(session.board)
        self._play(index)
        self._maybe_schedule_computer()

    def _cancel_pending(self):
        if self._pending is not None:
            self.scheduler.cancel(self._pending)
            log.debug("pending computer move cancelled")
        self._pending = None
        self._pending_session_id = None

    # --- helpers -------------------------------------------------------------

    def _set_session(self, session):
        self._session = session
        self._notify()

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self._session)

    def _require_session(self):
        if self._session is None:
            raise game_logic.NoughtsError("no game in progress")
        return self._session

