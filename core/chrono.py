# core/chrono.py
from PySide6.QtCore import QObject, QElapsedTimer, QTimer, Signal, Slot


class TrialClock(QObject):
    """
    Countdown and elapsed counters for one trial.

    Two one-second timers drive two independent integer counters; a
    QElapsedTimer tracks precise wall time for live WPM. stop() may be
    called any number of times, only the first one does anything.
    """

    countdownChanged = Signal(int)  # seconds left
    elapsedChanged = Signal(int)    # whole seconds since start
    expired = Signal()

    def __init__(self, time_limit: int = 60, tick_ms: int = 1000, parent=None):
        super().__init__(parent)
        if time_limit <= 0:
            raise ValueError(f"time_limit must be > 0, got {time_limit}")
        self._limit = int(time_limit)
        self._remaining = self._limit
        self._elapsed = 0
        self._running = False
        self._done = False           # stopped for this trial; start() is a no-op until reset
        self._frozen_secs = 0.0
        self._t = QElapsedTimer()

        # elapsed is registered first so on a shared second it ticks before the countdown
        self._elapsed_tick = QTimer(self)
        self._elapsed_tick.setInterval(tick_ms)
        self._elapsed_tick.timeout.connect(self.tick_elapsed)

        self._countdown_tick = QTimer(self)
        self._countdown_tick.setInterval(tick_ms)
        self._countdown_tick.timeout.connect(self.tick_countdown)

    @property
    def time_limit(self) -> int:
        return self._limit

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self):
        if self._running or self._done:
            return
        self._running = True
        self._t.start()
        self._elapsed_tick.start()
        self._countdown_tick.start()

    def stop(self):
        if not self._running:
            return
        self._frozen_secs = self._t.elapsed() / 1000.0
        self._running = False
        self._done = True
        self._elapsed_tick.stop()
        self._countdown_tick.stop()

    def cancel_and_reset(self):
        self._elapsed_tick.stop()
        self._countdown_tick.stop()
        self._running = False
        self._done = False
        self._frozen_secs = 0.0
        self._t.invalidate()
        self._remaining = self._limit
        self._elapsed = 0
        self.countdownChanged.emit(self._remaining)
        self.elapsedChanged.emit(self._elapsed)

    def seconds(self) -> float:
        """Precise seconds since start(), frozen once stopped."""
        if self._running:
            return max(0.0, self._t.elapsed() / 1000.0)
        return self._frozen_secs

    @Slot()
    def tick_elapsed(self):
        if not self._running:
            return
        self._elapsed += 1
        self.elapsedChanged.emit(self._elapsed)

    @Slot()
    def tick_countdown(self):
        if not self._running:
            return
        self._remaining = max(0, self._remaining - 1)
        self.countdownChanged.emit(self._remaining)
        if self._remaining == 0:
            self.stop()
            self.expired.emit()
