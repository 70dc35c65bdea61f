"""Load and save language definitions in CSV form.

File format (UTF-8)::

    #code,name,letters
    af,Afrikaans,abcdefghijklmnopqrstuvwxyzáêéèëïíîôóúû
    en,English,abcdefghijklmnopqrstuvwxyz

Rows whose first field starts with ``#`` are comments. When a code appears
more than once the later row replaces the earlier one, so an entry can be
overridden by appending a new row rather than editing the old one.
"""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, TextIO, Union

from ngramfreq.alphabet.language import Language, LanguageMap
from ngramfreq.errors import LanguageFormatError, NoLanguagesError

logger = logging.getLogger(__name__)

__all__ = [
    "LANGUAGES_HEADER",
    "load_languages",
    "load_languages_from_file",
    "save_languages",
]

LANGUAGES_HEADER = ("#code", "name", "letters")


def load_languages(source: Iterable[str]) -> LanguageMap:
    """
    Parse a set of languages from CSV text.

    Args:
        source: Text stream (or any iterable of lines)

    Returns:
        LanguageMap of code -> Language; letters are lowercased

    Raises:
        NoLanguagesError: If no usable rows were found
        LanguageFormatError: If the CSV is structurally broken
    """
    result = LanguageMap()
    reader = csv.reader(source)

    try:
        for record in reader:
            if len(record) < 3:
                continue
            if record[0].startswith("#"):
                continue

            code = record[0]
            if code in result:
                logger.debug("Language %r redefined on line %d", code, reader.line_num)
            result[code] = Language(name=record[1], code=code, letters=record[2].lower())
    except csv.Error as exc:
        raise LanguageFormatError(
            f"failed to parse csv on line {reader.line_num}. {exc}"
        ) from exc

    if not result:
        raise NoLanguagesError("no languages")

    return result


def load_languages_from_file(path: Union[str, Path]) -> LanguageMap:
    """Load languages from a UTF-8 CSV file. See load_languages."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            languages = load_languages(f)
    except (NoLanguagesError, LanguageFormatError) as exc:
        raise type(exc)(f"failed to load languages from {str(path)!r}. {exc}") from exc

    logger.info("Loaded %d languages from %s", len(languages), path)
    return languages


def save_languages(languages: LanguageMap, sink: TextIO) -> None:
    """Write languages in the same CSV format load_languages reads, sorted by code."""
    writer = csv.writer(sink, lineterminator="\n")
    writer.writerow(LANGUAGES_HEADER)
    for code in languages.codes():
        lang = languages[code]
        writer.writerow((lang.code, lang.name, lang.letters))
