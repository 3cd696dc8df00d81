import logging

from PySide6.QtCore import QObject, QTimer

log = logging.getLogger(__name__)


class MoveScheduler:
    """
    delayed single-shot tasks with cancellation.

    schedule() returns a handle; cancel(handle) must be safe to call on a
    handle that already fired or was already cancelled.
    """
    def schedule(self, delay_ms, callback):
        raise NotImplementedError

    def cancel(self, handle):
        raise NotImplementedError


class QtMoveScheduler(QObject, MoveScheduler):
    """
    QTimer backed scheduler, runs callbacks on the qt event loop
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self._timers = set()   # live timers, kept so they aren't collected

    def schedule(self, delay_ms, callback):
        timer = QTimer(self)
        timer.setSingleShot(True)

        def fire():
            self._discard(timer)
            callback()

        timer.timeout.connect(fire)
        self._timers.add(timer)
        timer.start(int(delay_ms))
        log.debug("timer started, %d ms", delay_ms)
        return timer

    def cancel(self, handle):
        if handle in self._timers:
            handle.stop()
            self._discard(handle)
            log.debug("timer cancelled")

    def pending_count(self):
        return len(self._timers)

    def _discard(self, timer):
        # drop our ref, let qt delete it later
        if timer in self._timers:
            self._timers.discard(timer)
            timer.deleteLater()
