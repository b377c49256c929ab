# services/mistakes.py
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from app.state import Mistake


@dataclass(frozen=True)
class MistakeSummary:
    total: int
    pairs: Tuple[Tuple[str, str], ...]      # (typed, expected)
    corrections: Tuple[str, ...]


def find_mistakes(target: Sequence[str], typed_tokens: Sequence[str]) -> Tuple[Mistake, ...]:
    """
    One Mistake per target position whose typed word exists, is non-empty
    and differs. Untyped positions are not mistakes.
    """
    out: List[Mistake] = []
    for idx, expected in enumerate(target):
        if idx >= len(typed_tokens):
            break
        typed = typed_tokens[idx]
        if typed and typed != expected:
            out.append(Mistake(word_index=idx, expected=expected, typed=typed))
    return tuple(out)


def summarize_mistakes(mistakes: Sequence[Mistake]) -> MistakeSummary:
    return MistakeSummary(
        total=len(mistakes),
        pairs=tuple((m.typed, m.expected) for m in mistakes),
        corrections=tuple(m.expected for m in mistakes),
    )
