"""Sliding-window n-gram tokenizers for letters and words.

Both tokenizers read a byte (or text) stream in chunks, decode it as UTF-8
and walk it one unit at a time:

- Letter n-grams: a window of N letters. Whitespace empties the window so
  no token spans a gap between words. Characters outside the language's
  alphabet are dropped without touching the window, so "don't" yields the
  same bigrams as "dont".
- Word n-grams: a window of N lowercased, whitespace-delimited words joined
  by single spaces. The alphabet does not apply to words.
  A word longer than MAX_WORD_LENGTH characters raises TokenTooLongError.

Cancellation is polled once per character or word. Nothing is emitted for a
window that is still incomplete when the stream ends.
"""
from __future__ import annotations

import codecs
from collections import deque
from typing import BinaryIO, Callable, Deque, Iterable, Iterator, Optional, TextIO, Union

from ngramfreq.alphabet.language import Language
from ngramfreq.cancel import CancelToken, check_cancelled
from ngramfreq.errors import InvalidConfigError, TokenTooLongError

__all__ = [
    "CHUNK_SIZE",
    "MAX_WORD_LENGTH",
    "iter_text",
    "lower_char",
    "RecvToken",
    "letter_tokens",
    "word_tokens",
    "parse_letter_tokens",
    "parse_word_tokens",
]

CHUNK_SIZE = 64 * 1024

# Longest word accepted in word mode, in characters
MAX_WORD_LENGTH = 64 * 1024

Stream = Union[BinaryIO, TextIO]

# recv(token, None) for every token; recv("", exc) once if reading fails
RecvToken = Callable[[str, Optional[BaseException]], None]


def lower_char(ch: str) -> str:
    """Lowercase one character, keeping a single code point.

    str.lower can expand a character (U+0130 becomes "i" plus a combining
    dot); only the base character is kept.

    Examples:
        >>> lower_char("\u0130")
        'i'
    """
    return ch.lower()[:1]


def _check_size(size: int) -> None:
    if size < 1:
        raise InvalidConfigError(f"invalid ngram size {size}")


def iter_text(stream: Stream, cancel: Optional[CancelToken] = None) -> Iterator[str]:
    """Yield UTF-8 decoded text chunks from a binary or text stream.

    Multi-byte sequences split across reads are reassembled; invalid bytes
    become U+FFFD. Cancellation is polled before every read.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        check_cancelled(cancel)
        data = stream.read(CHUNK_SIZE)
        if not data:
            break
        text = data if isinstance(data, str) else decoder.decode(data)
        if text:
            yield text

    tail = decoder.decode(b"", final=True)
    if tail:
        yield tail


def _check_word(word: str) -> None:
    if len(word) > MAX_WORD_LENGTH:
        raise TokenTooLongError(
            f"word longer than {MAX_WORD_LENGTH} characters, starting {word[:20]!r}"
        )


def _iter_words(stream: Stream, cancel: Optional[CancelToken]) -> Iterator[str]:
    pending = ""
    for chunk in iter_text(stream, cancel):
        text = pending + chunk
        words = text.split()
        # Last word may continue in the next chunk
        if words and not text[-1].isspace():
            pending = words.pop()
        else:
            pending = ""
        for word in words:
            check_cancelled(cancel)
            _check_word(word)
            yield word
        _check_word(pending)

    if pending:
        check_cancelled(cancel)
        yield pending


def letter_tokens(
        stream: Stream,
        language: Language,
        size: int,
        cancel: Optional[CancelToken] = None,
) -> Iterator[str]:
    """
    Lazily produce letter n-grams of the given size.

    Args:
        stream: Binary (UTF-8) or text stream to read
        language: Alphabet used to filter letters
        size: Number of letters per token (>= 1)
        cancel: Optional cancellation token, polled per character

    Returns:
        Iterator of tokens, e.g. "th", "he" for "the" with size 2

    Raises:
        InvalidConfigError: If size < 1 (raised immediately, before reading)
        OperationCancelled: From the iterator, when cancel is triggered
    """
    _check_size(size)
    if size == 1:
        return _letter_monograms(stream, language, cancel)
    return _letter_ngrams(stream, language, size, cancel)


def _letter_monograms(
        stream: Stream,
        language: Language,
        cancel: Optional[CancelToken],
) -> Iterator[str]:
    letters = language.letter_set
    for chunk in iter_text(stream, cancel):
        for ch in chunk:
            check_cancelled(cancel)
            if ch.isspace():
                continue
            ch = lower_char(ch)
            if ch in letters:
                yield ch


def _letter_ngrams(
        stream: Stream,
        language: Language,
        size: int,
        cancel: Optional[CancelToken],
) -> Iterator[str]:
    letters = language.letter_set
    window: Deque[str] = deque()

    for chunk in iter_text(stream, cancel):
        for ch in chunk:
            check_cancelled(cancel)
            if ch.isspace():
                window.clear()
                continue

            ch = lower_char(ch)
            if ch not in letters:
                continue

            window.append(ch)
            if len(window) == size:
                yield "".join(window)
                window.popleft()


def word_tokens(
        stream: Stream,
        size: int,
        cancel: Optional[CancelToken] = None,
) -> Iterator[str]:
    """
    Lazily produce word n-grams of the given size.

    Examples:
        >>> import io
        >>> list(word_tokens(io.BytesIO(b"He jumped  she walked"), 2))
        ['he jumped', 'jumped she', 'she walked']
    """
    _check_size(size)
    return _word_ngrams(stream, size, cancel)


def _word_ngrams(
        stream: Stream,
        size: int,
        cancel: Optional[CancelToken],
) -> Iterator[str]:
    window: Deque[str] = deque()
    for word in _iter_words(stream, cancel):
        window.append(word.lower())
        if len(window) == size:
            yield " ".join(window)
            window.popleft()


def _drive(tokens: Iterable[str], recv: RecvToken) -> None:
    it = iter(tokens)
    while True:
        try:
            token = next(it)
        except StopIteration:
            return
        except Exception as exc:
            recv("", exc)
            raise
        recv(token, None)


def parse_letter_tokens(
        stream: Stream,
        language: Language,
        size: int,
        recv: RecvToken,
        cancel: Optional[CancelToken] = None,
) -> None:
    """
    Push letter n-grams to recv as they are parsed.

    recv is called with (token, None) per token. If reading fails or the
    cancel token fires, recv is called once with ("", exc) and the exception
    is re-raised; no further tokens follow. Exceptions raised by recv itself
    stop parsing and propagate as-is.
    """
    _drive(letter_tokens(stream, language, size, cancel), recv)


def parse_word_tokens(
        stream: Stream,
        size: int,
        recv: RecvToken,
        cancel: Optional[CancelToken] = None,
) -> None:
    """Push word n-grams to recv as they are parsed. See parse_letter_tokens."""
    _drive(word_tokens(stream, size, cancel), recv)
