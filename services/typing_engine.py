# services/typing_engine.py
from __future__ import annotations
import logging
import random
from typing import Optional, Sequence, Tuple

from PySide6.QtCore import QObject, Signal, Slot

from app.calculation import calculate_accuracy, calculate_wpm, count_typed_chars, tokenize
from app.config import Settings
from app.state import Metrics, Mistake, Snapshot, TrialResult, TrialState, TrialStatus
from app.words import sample_words
from core.chrono import TrialClock
from services.history import HistoryStore
from services.mistakes import find_mistakes

log = logging.getLogger(__name__)


class TrialController(QObject):
    """
    Idle -> Running -> Finished state machine for one word test.

    The first non-empty input starts the clock. A trial finishes when the
    countdown expires or when the last target word is typed correctly in
    last position. Everything the UI shows comes from snapshot().
    """

    changed = Signal(object)    # Snapshot
    finished = Signal(object)   # TrialResult

    def __init__(
        self,
        history: HistoryStore,
        settings: Optional[Settings] = None,
        clock: Optional[TrialClock] = None,
        rng: Optional[random.Random] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.settings = settings or Settings()
        self.history = history
        self._rng = rng
        if clock is None:
            clock = TrialClock(time_limit=self.settings.time_limit, parent=self)
        self.clock = clock
        self.clock.expired.connect(self._on_expired)
        self.clock.elapsedChanged.connect(self._on_elapsed)
        self.clock.countdownChanged.connect(self._on_countdown)

        self._word_count = self.settings.word_count
        self._status = TrialStatus.IDLE
        self._target: Tuple[str, ...] = ()
        self._typed = ""
        self._word_idx = 0
        self._metrics = Metrics()
        self._mistakes: Tuple[Mistake, ...] = ()
        self.last_result: Optional[TrialResult] = None
        self._resetting = False
        self.restart(self._word_count)

    # ---------------- read side ----------------
    @property
    def state(self) -> TrialState:
        return TrialState(
            status=self._status,
            target=self._target,
            typed_text=self._typed,
            elapsed_seconds=self.clock.elapsed,
            time_remaining_seconds=self.clock.remaining,
            current_word_index=self._word_idx,
        )

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    @property
    def mistakes(self) -> Tuple[Mistake, ...]:
        return self._mistakes

    @property
    def word_count(self) -> int:
        return self._word_count

    def snapshot(self) -> Snapshot:
        return Snapshot(
            state=self.state,
            metrics=self._metrics,
            mistakes=self._mistakes,
            history=self.history.as_series(),
        )

    # ---------------- write side ----------------
    def ingest(self, raw_input: str) -> TrialState:
        """Take the full contents of the input box."""
        if not self.state.accepts_input:
            log.debug("Input ignored: trial is %s, %ds left",
                      self._status.value, self.clock.remaining)
            return self.state

        self._typed = raw_input or ""
        if self._status is TrialStatus.IDLE and self._typed:
            self._status = TrialStatus.RUNNING
            self.clock.start()
            log.info("Trial started: %d words, %ds limit",
                     len(self._target), self.clock.time_limit)

        tokens = tokenize(self._typed)
        self._word_idx = max(0, len(tokens) - 1)
        self._metrics = self._compute_metrics(tokens)

        if self._status is TrialStatus.RUNNING and self._is_complete(tokens):
            self._finish("completed")
        else:
            self._emit_changed()
        return self.state

    def restart(self, word_count: Optional[int] = None) -> TrialState:
        count = self._word_count if word_count is None else int(word_count)
        if count <= 0:
            raise ValueError(f"word count must be > 0, got {count}")
        self._word_count = count

        self._resetting = True
        try:
            self.clock.cancel_and_reset()
        finally:
            self._resetting = False

        self._target = sample_words(count, self._rng)
        self._typed = ""
        self._word_idx = 0
        self._status = TrialStatus.IDLE
        self._metrics = Metrics()
        self._mistakes = ()
        log.debug("New trial: %d words", count)
        self._emit_changed()
        return self.state

    def load_target(self, words: Sequence[str]) -> TrialState:
        """Restart with a fixed word list instead of a random sample."""
        words = tuple(words)
        if not words:
            raise ValueError("target must contain at least one word")
        self.restart(len(words))
        self._target = words
        self._emit_changed()
        return self.state

    # ---------------- internals ----------------
    def _is_complete(self, tokens) -> bool:
        return (
            bool(self._target)
            and len(tokens) == len(self._target)
            and tokens[-1] == self._target[-1]
        )

    def _compute_metrics(self, tokens) -> Metrics:
        secs = self.clock.seconds()
        if self._status is TrialStatus.IDLE or secs <= 0:
            wpm = 0
        else:
            wpm = calculate_wpm(count_typed_chars(self._typed), secs)
        return Metrics(wpm=wpm, accuracy=calculate_accuracy(self._target, tokens))

    def _finish(self, reason: str):
        if self._status is TrialStatus.FINISHED:
            return
        self.clock.stop()
        self._status = TrialStatus.FINISHED
        tokens = tokenize(self._typed)
        self._mistakes = find_mistakes(self._target, tokens)
        result = TrialResult(
            wpm=self._metrics.wpm,
            accuracy=self._metrics.accuracy,
            elapsed_seconds=self.clock.elapsed,
        )
        self.last_result = result
        log.info("Trial %s: %d WPM, %d%% accuracy, %d mistakes",
                 reason, result.wpm, result.accuracy, len(self._mistakes))
        self.history.append(result)
        self._emit_changed()
        self.finished.emit(result)

    def _emit_changed(self):
        self.changed.emit(self.snapshot())

    @Slot(int)
    def _on_elapsed(self, _secs: int):
        if self._resetting or self._status is not TrialStatus.RUNNING:
            return
        # live WPM keeps falling while the user is idle
        self._metrics = self._compute_metrics(tokenize(self._typed))
        self._emit_changed()

    @Slot(int)
    def _on_countdown(self, _secs: int):
        if self._resetting or self._status is not TrialStatus.RUNNING:
            return
        self._emit_changed()

    @Slot()
    def _on_expired(self):
        if self._status is not TrialStatus.RUNNING:
            return
        self._metrics = self._compute_metrics(tokenize(self._typed))
        self._finish("timed out")
