"""Alphabets shipped with the package."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ngramfreq.alphabet.language import Language, LanguageCode, LanguageMap
from ngramfreq.errors import LanguageNotFoundError

__all__ = ["BUILTIN_LANGUAGES", "builtin", "builtin_languages"]


def _lang(code: str, name: str, letters: str) -> Language:
    return Language(name=name, code=code, letters=letters)


BUILTIN_LANGUAGES: Mapping[LanguageCode, Language] = MappingProxyType({
    lang.code: lang
    for lang in (
        _lang("af", "Afrikaans", "abcdefghijklmnopqrstuvwxyzáêéèëïíîôóúû"),
        _lang("ar", "Arabic", "أابتثجحخدذرزسشصضطظعغفقكلمنهؤوئىيء"),
        _lang("da", "Danish", "abcdefghijklmnopqrstuvwxyzæøå"),
        _lang("de", "German", "abcdefghijklmnopqrstuvwxyzäöüß"),
        _lang("en", "English", "abcdefghijklmnopqrstuvwxyz"),
        _lang("es", "Spanish", "abcdefghijklmnopqrstuvwxyzáéíñóúü"),
        _lang("et", "Estonian", "abcdefghijklmnopqrstuvwxyzäöõü"),
        _lang("fi", "Finnish", "abcdefghijklmnopqrstuvwxyzäö"),
        _lang("fr", "French", "abcdefghijklmnopqrstuvwxyzàâæçéèêëîïôœùûüÿ"),
        _lang("nl", "Dutch", "abcdefghijklmnopqrstuvwxyzàäèéëïĳöü"),
        _lang("sv", "Swedish", "abcdefghijklmnopqrstuvwxyzåäö"),
    )
})


def builtin(code: LanguageCode) -> Language:
    """
    Return the built-in language for the given code.

    Raises:
        LanguageNotFoundError: If no built-in language uses that code
    """
    try:
        return BUILTIN_LANGUAGES[code]
    except KeyError:
        raise LanguageNotFoundError(
            code, f"no built-in language found with code {code!r}"
        ) from None


def builtin_languages() -> LanguageMap:
    """Return a new LanguageMap holding every built-in language."""
    return LanguageMap(BUILTIN_LANGUAGES)
