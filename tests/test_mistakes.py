from app.state import Mistake
from services.mistakes import find_mistakes, summarize_mistakes


def test_single_misspelling():
    mistakes = find_mistakes(["the", "quick", "brown"], ["the", "quikc", "brown"])
    assert mistakes == (Mistake(word_index=1, expected="quick", typed="quikc"),)


def test_untyped_words_are_not_mistakes():
    assert find_mistakes(["the", "quick", "brown"], ["the"]) == ()


def test_empty_tokens_are_skipped():
    assert find_mistakes(["the", "quick", "brown"], ["the", "", "brwn"]) == (
        Mistake(2, "brown", "brwn"),
    )


def test_tokens_past_target_are_ignored():
    assert find_mistakes(["the"], ["the", "extra"]) == ()


def test_repeatable():
    target, typed = ["a", "b", "c"], ["x", "b", "y"]
    assert find_mistakes(target, typed) == find_mistakes(target, typed)


def test_summary():
    summary = summarize_mistakes(find_mistakes(["a", "b", "c"], ["x", "b", "y"]))
    assert summary.total == 2
    assert summary.pairs == (("x", "a"), ("y", "c"))
    assert summary.corrections == ("a", "c")


def test_empty_summary():
    summary = summarize_mistakes(())
    assert summary.total == 0
    assert summary.pairs == ()
