# config.py
"""Validated run configuration for the ngrams command."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple, Union

from ngramfreq.alphabet.builtin import builtin_languages
from ngramfreq.alphabet.language import Language, LanguageCode, LanguageMap
from ngramfreq.alphabet.load import load_languages_from_file
from ngramfreq.errors import InvalidConfigError
from ngramfreq.ngrams.processor import ProcessorMode

__all__ = ["DEFAULT_LANGUAGE", "DISCOVER_OUT_PATH", "RunConfig"]

DEFAULT_LANGUAGE: LanguageCode = "en"
DISCOVER_OUT_PATH = Path("languages.csv")


@dataclass(frozen=True)
class RunConfig:
    """Everything one ngrams run needs, checked before any input is read.

    Mode options:
        - default: count n-grams into a fresh table at out_path
        - update: add counts on top of the table already at out_path
        - discover: write the characters found as a languages file
    """

    # I/O
    inputs: Tuple[str, ...]
    out_path: Optional[Path] = None  # If None, derived by resolved_out_path()

    # N-grams
    token_size: int = 1
    words: bool = False  # Word n-grams instead of letter n-grams
    lang_code: LanguageCode = DEFAULT_LANGUAGE
    languages: LanguageMap = field(default_factory=builtin_languages, repr=False)

    # Pipeline control
    discover: bool = False
    update: bool = False

    # Output
    verbose: bool = False
    progress: bool = False  # tqdm byte progress bar
    log_dir: Optional[Path] = None  # Write a timestamped log file here

    def __post_init__(self) -> None:
        inputs = tuple(p.strip() for p in self.inputs if p and p.strip())
        object.__setattr__(self, "inputs", inputs)

        if not inputs:
            raise InvalidConfigError("expected at least one input path")
        if self.token_size < 1:
            raise InvalidConfigError(f"invalid ngram size {self.token_size}")
        if not self.languages:
            raise InvalidConfigError("no languages available")

        # Discovery does not filter by alphabet, so any code will do
        if not self.discover:
            self.languages.get_language(self.lang_code)

    @classmethod
    def build(
            cls,
            inputs: Iterable[str],
            *,
            languages_file: Optional[Union[str, Path]] = None,
            **kwargs: Any,
    ) -> RunConfig:
        """Create a config, loading the language set from languages_file if given."""
        if languages_file is not None:
            kwargs["languages"] = load_languages_from_file(languages_file)
        if kwargs.get("out_path") is not None:
            kwargs["out_path"] = Path(kwargs["out_path"])
        return cls(inputs=tuple(inputs), **kwargs)

    @property
    def mode(self) -> ProcessorMode:
        return ProcessorMode.WORDS if self.words else ProcessorMode.LETTERS

    @property
    def language(self) -> Language:
        return self.languages.get_language(self.lang_code)

    def resolved_out_path(self) -> Path:
        """
        Output path, defaulting by mode.

        Examples:
            >>> RunConfig(inputs=("a.txt",), token_size=2).resolved_out_path()
            PosixPath('en-letters-2.csv')
        """
        if self.out_path is not None:
            return self.out_path
        if self.discover:
            return DISCOVER_OUT_PATH
        return Path(f"{self.lang_code}-{self.mode.value}-{self.token_size}.csv")
