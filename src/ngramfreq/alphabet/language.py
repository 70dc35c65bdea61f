"""Language (alphabet) model and code -> language mapping."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List

from ngramfreq.errors import LanguageNotFoundError

__all__ = ["LanguageCode", "Language", "LanguageMap"]

# ISO 639 set 1 code (e.g. "en"), or "unknown" for discovered alphabets
LanguageCode = str


@dataclass(frozen=True)
class Language:
    """
    The set of letters that make up a language's alphabet.

    Attributes:
        name: Human readable name (e.g. "Afrikaans")
        code: Language code (e.g. "af")
        letters: Lowercase letters of the alphabet, each character a member

    Examples:
        >>> en = Language("English", "en", "abcdefghijklmnopqrstuvwxyz")
        >>> "q" in en
        True
        >>> en.contains("Q")
        False
    """
    name: str
    code: LanguageCode
    letters: str
    letter_set: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "letter_set", frozenset(self.letters))

    def contains(self, ch: str) -> bool:
        """True if ch (already lowercased) is a letter of this alphabet."""
        return ch in self.letter_set

    __contains__ = contains


class LanguageMap(Dict[LanguageCode, Language]):
    """Mapping of language code to Language with a strict lookup."""

    def get_language(self, code: LanguageCode) -> Language:
        try:
            return self[code]
        except KeyError:
            raise LanguageNotFoundError(code) from None

    def codes(self) -> List[LanguageCode]:
        return sorted(self)
