# app/words.py
from __future__ import annotations
import random
from typing import Tuple

WORDS: Tuple[str, ...] = (
    "the", "quick", "brown", "fox", "jumps", "over", "lazy", "dog",
    "practice", "makes", "perfect", "typing", "speed", "accuracy", "test",
    "react", "javascript", "library", "interface", "important", "as", "in",
    "tests", "is", "just", "measured", "words", "per", "minute", "when",
    "it", "comes", "to", "user", "experience", "modern", "web", "app",
    "challenge", "fun", "improve", "your", "skills", "with", "every",
    "session", "focus", "and", "consistency", "are", "key", "for", "progress",
)

DEFAULT_WORD_COUNT = 30
ALT_WORD_COUNT = 50


def sample_words(count: int = DEFAULT_WORD_COUNT, rng: random.Random | None = None) -> Tuple[str, ...]:
    """
    Draw `count` words uniformly, with replacement.
    Pass a seeded random.Random for a repeatable sequence.
    """
    if count < 0:
        raise ValueError(f"word count must be >= 0, got {count}")
    pick = (rng or random).choice
    return tuple(pick(WORDS) for _ in range(count))
