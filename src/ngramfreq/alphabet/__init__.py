"""
Alphabets used to scope letter n-grams.

An alphabet is the set of lowercase characters considered letters of a
language (e.g. ``en`` = a-z). Built-in alphabets cover a handful of
languages; others can be loaded from a CSV file or discovered from text.
"""

from .builtin import BUILTIN_LANGUAGES, builtin, builtin_languages
from .discover import DiscoverProcessor, discover_letters
from .language import Language, LanguageCode, LanguageMap
from .load import LANGUAGES_HEADER, load_languages, load_languages_from_file, save_languages

__all__ = [
    "BUILTIN_LANGUAGES",
    "builtin",
    "builtin_languages",
    "DiscoverProcessor",
    "discover_letters",
    "Language",
    "LanguageCode",
    "LanguageMap",
    "LANGUAGES_HEADER",
    "load_languages",
    "load_languages_from_file",
    "save_languages",
]
