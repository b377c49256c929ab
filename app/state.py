from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Tuple


class TrialStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True)
class Metrics:
    wpm: int = 0
    accuracy: int = 100


@dataclass(frozen=True)
class Mistake:
    word_index: int
    expected: str
    typed: str


@dataclass(frozen=True)
class TrialState:
    status: TrialStatus = TrialStatus.IDLE
    target: Tuple[str, ...] = ()
    typed_text: str = ""
    elapsed_seconds: int = 0
    time_remaining_seconds: int = 0
    current_word_index: int = 0

    @property
    def is_running(self) -> bool:
        return self.status is TrialStatus.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.status is TrialStatus.FINISHED

    @property
    def accepts_input(self) -> bool:
        return not self.is_finished and self.time_remaining_seconds > 0


@dataclass(frozen=True)
class TrialResult:
    wpm: int
    accuracy: int
    elapsed_seconds: int
    timestamp: datetime = field(default_factory=datetime.now)

    def to_record(self) -> Dict[str, Any]:
        return {
            "wpm": self.wpm,
            "accuracy": self.accuracy,
            "time": self.elapsed_seconds,
            "date": self.timestamp.isoformat(timespec="seconds"),
        }

    @classmethod
    def from_record(cls, d: Dict[str, Any]) -> "TrialResult":
        """Raises KeyError/TypeError/ValueError/OverflowError on a malformed record."""
        return cls(
            wpm=int(d["wpm"]),
            accuracy=int(d["accuracy"]),
            elapsed_seconds=int(d["time"]),
            timestamp=datetime.fromisoformat(str(d["date"])),
        )


@dataclass(frozen=True)
class HistorySeries:
    wpm: Tuple[int, ...] = ()
    accuracy: Tuple[int, ...] = ()
    labels: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Snapshot:
    """Everything the front-end needs to draw one frame."""
    state: TrialState
    metrics: Metrics
    mistakes: Tuple[Mistake, ...] = ()
    history: HistorySeries = field(default_factory=HistorySeries)
