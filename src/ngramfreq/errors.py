"""Exception types raised by the n-gram frequency pipeline."""
from __future__ import annotations

from typing import Optional

__all__ = [
    "NgramFreqError",
    "InvalidConfigError",
    "LanguageNotFoundError",
    "NoLanguagesError",
    "LanguageFormatError",
    "FrequencyFormatError",
    "TokenTooLongError",
    "SourceError",
    "OperationCancelled",
]


class NgramFreqError(Exception):
    """Base class for all errors raised by ngramfreq."""


class InvalidConfigError(NgramFreqError, ValueError):
    """Run configuration is invalid (bad n-gram size, no inputs, ...)."""


class LanguageNotFoundError(NgramFreqError, LookupError):
    """No language is registered under the requested code."""

    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        super().__init__(message or f"no language found with code {code!r}")

    def __str__(self) -> str:
        # LookupError would otherwise repr() the message
        return self.args[0]


class NoLanguagesError(NgramFreqError, ValueError):
    """A languages file contained zero usable rows."""


class LanguageFormatError(NgramFreqError, ValueError):
    """A languages file could not be parsed as CSV."""


class FrequencyFormatError(NgramFreqError, ValueError):
    """A frequency table file contains a malformed record."""


class TokenTooLongError(NgramFreqError, ValueError):
    """A word in the input exceeds the maximum word length."""


class SourceError(NgramFreqError, RuntimeError):
    """Opening or reading an input source failed.

    Attributes:
        path: The top-level input path being processed
        member: Name of the zip entry, if the failure happened inside an archive
    """

    def __init__(self, path: str, message: str, member: Optional[str] = None):
        self.path = path
        self.member = member
        super().__init__(message)


class OperationCancelled(NgramFreqError, RuntimeError):
    """Processing was stopped by a cancellation request."""
