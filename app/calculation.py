# app/calculation.py
from __future__ import annotations
import math
import re
from typing import List, Sequence

_WS = re.compile(r"\s")


def js_round(value: float) -> int:
    """Round half up, the way the browser widget rounds its stats."""
    return int(math.floor(value + 0.5))


def tokenize(text: str) -> List[str]:
    """
    Split typed text into word tokens.
    Trimmed, then split on single spaces: "a  b" -> ["a", "", "b"].
    """
    stripped = (text or "").strip()
    if not stripped:
        return []
    return stripped.split(" ")


def count_typed_chars(text: str) -> int:
    # whitespace doesn't count toward WPM
    return len(_WS.sub("", text or ""))


def calculate_wpm(chars_typed: int, elapsed_seconds: float) -> int:
    """
    WPM = (chars / 5) / minutes, rounded half up.
    Callers must only ask once some time has passed.
    """
    if elapsed_seconds <= 0:
        raise ValueError(f"elapsed_seconds must be > 0, got {elapsed_seconds}")
    return max(0, js_round((chars_typed / 5.0) / (elapsed_seconds / 60.0)))


def calculate_accuracy(target: Sequence[str], typed_tokens: Sequence[str]) -> int:
    """
    Token-level accuracy: typed_tokens[i] vs target[i], scored against the
    whole target length. Empty target -> 100.
    """
    if not target:
        return 100
    correct = sum(
        1 for i, tok in enumerate(typed_tokens) if i < len(target) and tok == target[i]
    )
    return max(0, min(100, js_round(100.0 * correct / len(target))))
