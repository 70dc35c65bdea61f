"""Build a frequency table from a list of input paths."""
from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union

from ngramfreq.alphabet.language import Language
from ngramfreq.cancel import CancelToken
from ngramfreq.errors import InvalidConfigError
from ngramfreq.ngrams.frequency import FrequencyTable
from ngramfreq.traversal.processor import SourceProcessor
from ngramfreq.traversal.progress import ProgressReporter

logger = logging.getLogger(__name__)

__all__ = ["ProcessorMode", "FrequencyProcessor"]


class ProcessorMode(enum.Enum):
    """Whether n-grams are made of letters or words."""
    LETTERS = "letters"
    WORDS = "words"


class FrequencyProcessor:
    """
    Counts letter or word n-grams across input sources.

    Args:
        mode: ProcessorMode.LETTERS or ProcessorMode.WORDS
        language: Alphabet used to filter letters (ignored for words)
        token_size: Letters or words per n-gram (>= 1)
        progress: Optional ProgressReporter passed to the traversal

    Examples:
        >>> from ngramfreq.alphabet import builtin
        >>> p = FrequencyProcessor(ProcessorMode.LETTERS, builtin("en"), 2)
        >>> p.process_files(["corpus.txt", "more.zip"])  # doctest: +SKIP
        >>> p.save("en-letters-2.csv")  # doctest: +SKIP
    """

    def __init__(
            self,
            mode: ProcessorMode,
            language: Language,
            token_size: int,
            progress: Optional[ProgressReporter] = None,
    ):
        if token_size < 1:
            raise InvalidConfigError(f"invalid ngram size {token_size}")

        self.mode = mode
        self.language = language
        self.token_size = token_size
        self.source = SourceProcessor(progress)
        self._table = FrequencyTable()

    @property
    def frequency_table(self) -> FrequencyTable:
        return self._table

    def load_frequencies_from_file(self, path: Union[str, Path]) -> None:
        """Replace the table with one loaded from path.

        Counts from later processing are added on top of the loaded ones.
        """
        self._table = FrequencyTable.load_from_file(path)

    def _consume(self, stream: BinaryIO, cancel: Optional[CancelToken]) -> None:
        if self.mode is ProcessorMode.WORDS:
            self._table.parse_word_tokens(stream, self.token_size, cancel)
        else:
            self._table.parse_letter_tokens(stream, self.language, self.token_size, cancel)

    def process_files(
            self,
            paths: Iterable[str],
            cancel: Optional[CancelToken] = None,
    ) -> None:
        """
        Count n-grams from every path, then recompute percentages.

        Percentages are only recomputed when every source was processed;
        on failure or cancellation the counts gathered so far stay in the
        table.
        """
        self.source.process_files(paths, self._consume, cancel)
        self._table.update()
        logger.info(
            "Counted %d distinct %s %d-grams (%d total)",
            len(self._table), self.mode.value, self.token_size, self._table.total(),
        )

    def save(self, path: Union[str, Path]) -> None:
        """Write the frequency table to path as CSV."""
        self._table.save_to_file(path)
