# tests/ngrams/test_tokens.py
from __future__ import annotations

import io
from collections import Counter

import pytest

import ngramfreq.ngrams.tokens as tokens_mod
from ngramfreq.alphabet import builtin
from ngramfreq.cancel import CancelToken
from ngramfreq.errors import InvalidConfigError, OperationCancelled, TokenTooLongError
from ngramfreq.ngrams.tokens import (
    iter_text,
    letter_tokens,
    parse_letter_tokens,
    parse_word_tokens,
    word_tokens,
)

EN = builtin("en")
DE = builtin("de")


def _letters(text: str, size: int, language=EN):
    return list(letter_tokens(io.BytesIO(text.encode("utf-8")), language, size))


def _words(text: str, size: int):
    return list(word_tokens(io.BytesIO(text.encode("utf-8")), size))


class FailingStream:
    """Returns one chunk, then raises on the next read."""

    def __init__(self, first: bytes, exc: Exception):
        self.first = first
        self.exc = exc
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        if self.reads == 1:
            return self.first
        raise self.exc


# ----------------
# letter n-grams
# ----------------

def test_monograms_count_the_cat_sat():
    counts = Counter(_letters("the cat sat", 1))
    assert len(counts) == 6
    assert counts["t"] == 3
    assert counts["a"] == 2
    assert counts.most_common(1) == [("t", 3)]


def test_bigrams_slide_by_one_letter():
    assert _letters("the cat", 2) == ["th", "he", "ca", "at"]


def test_trigrams_of_single_word():
    assert _letters("hello", 3) == ["hel", "ell", "llo"]


def test_whitespace_resets_the_window():
    assert _letters("ab cd", 3) == []
    assert _letters("ab\tcd\nef", 2) == ["ab", "cd", "ef"]


def test_punctuation_is_dropped_without_resetting():
    assert _letters("don't", 2) == ["do", "on", "nt"]
    assert _letters("a-b", 2) == ["ab"]


def test_letters_outside_alphabet_are_dropped():
    assert _letters("héllo", 2) == ["hl", "ll", "lo"]
    assert _letters("héllo", 2, language=builtin("fr")) == ["hé", "él", "ll", "lo"]


def test_uppercase_is_lowercased():
    assert _letters("THE", 2) == ["th", "he"]
    assert _letters("ÄÖ", 1, language=DE) == ["ä", "ö"]


def test_dotted_capital_i_lowers_to_single_letter():
    assert _letters("\u0130stanbul", 1)[:2] == ["i", "s"]
    assert _letters("\u0130S", 2) == ["is"]


def test_incomplete_window_at_end_emits_nothing():
    assert _letters("ab", 3) == []
    assert _letters("", 1) == []


def test_monogram_skips_whitespace_and_foreign_runes():
    assert _letters(" a1 b! ", 1) == ["a", "b"]


def test_letter_tokens_never_cross_whitespace_or_leave_alphabet():
    text = "Quick, brown fox! Jumps over\tthe lazy dog's back; über 42 times.\n"
    for size in range(1, 5):
        for token in _letters(text, size):
            assert len(token) == size
            assert all(ch in EN.letter_set for ch in token)
    # "over\tthe": the tab separates "r" from "t"
    assert "rt" not in _letters(text, 2)


def test_invalid_size_raises_before_reading():
    stream = io.BytesIO(b"abc")
    with pytest.raises(InvalidConfigError):
        letter_tokens(stream, EN, 0)
    with pytest.raises(InvalidConfigError):
        word_tokens(stream, -1)
    assert stream.tell() == 0


def test_text_streams_are_accepted():
    assert list(letter_tokens(io.StringIO("abc"), EN, 2)) == ["ab", "bc"]


def test_multibyte_characters_split_across_reads(monkeypatch):
    monkeypatch.setattr(tokens_mod, "CHUNK_SIZE", 1)
    assert _letters("größe", 1, language=DE) == ["g", "r", "ö", "ß", "e"]


def test_invalid_utf8_is_replaced_not_raised():
    stream = io.BytesIO(b"ab\xffcd")
    assert list(letter_tokens(stream, EN, 2)) == ["ab", "bc", "cd"]


def test_iter_text_reassembles_chunks(monkeypatch):
    monkeypatch.setattr(tokens_mod, "CHUNK_SIZE", 2)
    text = "".join(iter_text(io.BytesIO("añb".encode("utf-8"))))
    assert text == "añb"


# --------------
# word n-grams
# --------------

def test_word_bigrams_he_jumped_she_walked():
    assert Counter(_words("he jumped she walked", 2)) == {
        "he jumped": 1,
        "jumped she": 1,
        "she walked": 1,
    }


def test_word_ngrams_lowercase_and_collapse_whitespace():
    assert _words("The  quick\nbrown\tFOX", 3) == ["the quick brown", "quick brown fox"]


def test_word_monograms_keep_punctuation():
    assert _words("Hello, world!", 1) == ["hello,", "world!"]


def test_word_ngrams_incomplete_window_emits_nothing():
    assert _words("one two", 3) == []
    assert _words("   ", 1) == []


def test_words_split_across_chunks(monkeypatch):
    monkeypatch.setattr(tokens_mod, "CHUNK_SIZE", 3)
    assert _words("alpha beta  gamma", 1) == ["alpha", "beta", "gamma"]
    assert _words("alpha beta gamma ", 2) == ["alpha beta", "beta gamma"]


# ----------------------------
# callbacks and cancellation
# ----------------------------

def test_parse_letter_tokens_calls_recv_per_token():
    seen = []
    parse_letter_tokens(io.BytesIO(b"abc"), EN, 2, lambda t, e: seen.append((t, e)))
    assert seen == [("ab", None), ("bc", None)]


def test_pre_cancelled_token_raises_before_any_token():
    cancel = CancelToken()
    cancel.cancel()
    seen = []

    with pytest.raises(OperationCancelled):
        parse_letter_tokens(io.BytesIO(b"abc"), EN, 1, lambda t, e: seen.append((t, e)), cancel)

    assert len(seen) == 1
    token, err = seen[0]
    assert token == ""
    assert isinstance(err, OperationCancelled)


def test_pre_cancelled_token_on_empty_input_still_raises():
    cancel = CancelToken()
    cancel.cancel()
    with pytest.raises(OperationCancelled):
        list(word_tokens(io.BytesIO(b""), 1, cancel))


def test_cancel_midway_keeps_earlier_tokens_and_reports_once():
    cancel = CancelToken()
    seen = []

    def recv(token, err):
        seen.append((token, err))
        if len(seen) == 2:
            cancel.cancel()

    with pytest.raises(OperationCancelled):
        parse_word_tokens(io.BytesIO(b"a b c d e"), 1, recv, cancel)

    assert [t for t, e in seen if e is None] == ["a", "b"]
    errors = [e for t, e in seen if e is not None]
    assert len(errors) == 1
    assert isinstance(errors[0], OperationCancelled)


def test_read_error_is_reported_to_recv_then_raised():
    stream = FailingStream(b"abc", OSError("disk gone"))
    seen = []

    with pytest.raises(OSError, match="disk gone"):
        parse_letter_tokens(stream, EN, 1, lambda t, e: seen.append((t, e)))

    assert [t for t, e in seen if e is None] == ["a", "b", "c"]
    assert seen[-1][0] == ""
    assert isinstance(seen[-1][1], OSError)


def test_error_raised_by_recv_is_not_reported_back():
    seen = []

    def recv(token, err):
        seen.append((token, err))
        raise RuntimeError("stop")

    with pytest.raises(RuntimeError, match="stop"):
        parse_letter_tokens(io.BytesIO(b"abc"), EN, 1, recv)

    assert seen == [("a", None)]


# ---------------------
# word length limit
# ---------------------

def test_words_at_the_limit_are_accepted(monkeypatch):
    monkeypatch.setattr(tokens_mod, "MAX_WORD_LENGTH", 5)
    monkeypatch.setattr(tokens_mod, "CHUNK_SIZE", 2)
    assert _words("abcde fghij", 1) == ["abcde", "fghij"]


def test_overlong_word_split_across_reads_raises(monkeypatch):
    monkeypatch.setattr(tokens_mod, "MAX_WORD_LENGTH", 5)
    monkeypatch.setattr(tokens_mod, "CHUNK_SIZE", 2)
    seen = []

    with pytest.raises(TokenTooLongError, match="longer than 5"):
        parse_word_tokens(io.BytesIO(b"ok abcdefghijkl more"), 1, lambda t, e: seen.append((t, e)))

    assert [t for t, e in seen if e is None] == ["ok"]
    assert isinstance(seen[-1][1], TokenTooLongError)


def test_overlong_word_within_one_read_raises(monkeypatch):
    monkeypatch.setattr(tokens_mod, "MAX_WORD_LENGTH", 3)
    with pytest.raises(TokenTooLongError):
        _words("abcdef g", 1)


def test_letter_mode_has_no_word_limit(monkeypatch):
    monkeypatch.setattr(tokens_mod, "MAX_WORD_LENGTH", 3)
    assert len(_letters("abcdefgh", 2)) == 7
