"""Token frequency table with CSV persistence.

CSV format (UTF-8)::

    #token,count,percentage
    the,142,0.09452200
    he,97,0.06458056

Rows whose first field starts with ``#`` and rows with fewer than three
fields are skipped on load. Percentages are written with 8 fractional
digits.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO, Union

from ngramfreq.alphabet.language import Language
from ngramfreq.cancel import CancelToken
from ngramfreq.errors import FrequencyFormatError
from ngramfreq.ngrams.tokens import Stream, parse_letter_tokens, parse_word_tokens
from ngramfreq.utilities.atomic import atomic_write
from ngramfreq.utilities.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

__all__ = ["FREQUENCY_HEADER", "Frequency", "FrequencyTable"]

FREQUENCY_HEADER = ("#token", "count", "percentage")


@dataclass(frozen=True)
class Frequency:
    """Snapshot of a single table entry."""
    token: str
    count: int
    percentage: float = 0.0


class FrequencyTable:
    """
    Mapping of token -> occurrence count and percentage share.

    Safe to share between threads: ``add`` and ``update`` take the write
    side of a reader/writer lock, every read takes the read side. Internal
    storage is unordered; use ``entries_sorted_by_count`` wherever order
    matters.

    Percentages are only meaningful after ``update`` has been called, which
    should happen once after the last ``add`` of a run.

    Examples:
        >>> ft = FrequencyTable()
        >>> ft.add("he", 2)
        >>> ft.add("the")
        >>> ft.update()
        >>> [(f.token, f.count) for f in ft.entries_sorted_by_count()]
        [('he', 2), ('the', 1)]
    """

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._percentages: Dict[str, float] = {}
        self._lock = ReadWriteLock()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, token: str, delta: int = 1) -> None:
        """Increment the count for token, creating it at zero if absent."""
        if delta < 0:
            raise ValueError(f"count delta must be non-negative, got {delta}")
        with self._lock.write():
            self._counts[token] = self._counts.get(token, 0) + delta

    def merge(self, other: FrequencyTable) -> None:
        """Add every count from other into this table."""
        for freq in other.entries():
            self.add(freq.token, freq.count)

    def update(self) -> None:
        """Recompute every percentage as count / sum of all counts."""
        with self._lock.write():
            total = sum(self._counts.values())
            if total == 0:
                self._percentages = {token: 0.0 for token in self._counts}
                return
            self._percentages = {
                token: count / total for token, count in self._counts.items()
            }

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._counts)

    def __contains__(self, token: object) -> bool:
        with self._lock.read():
            return token in self._counts

    def get(self, token: str) -> Optional[Frequency]:
        """Return the entry for token, or None if it has not been seen."""
        with self._lock.read():
            count = self._counts.get(token)
            if count is None:
                return None
            return Frequency(token, count, self._percentages.get(token, 0.0))

    def entries(self) -> List[Frequency]:
        """All entries in no particular order."""
        with self._lock.read():
            return [
                Frequency(token, count, self._percentages.get(token, 0.0))
                for token, count in self._counts.items()
            ]

    def tokens(self) -> List[str]:
        """All tokens in no particular order."""
        with self._lock.read():
            return list(self._counts)

    def total(self) -> int:
        """Sum of all counts."""
        with self._lock.read():
            return sum(self._counts.values())

    def entries_sorted_by_count(self) -> List[Frequency]:
        """
        Entries ordered by count (highest first), ties by token ascending.

        This is a total order, so repeated calls on the same table always
        return the same sequence.
        """
        entries = self.entries()
        entries.sort(key=lambda f: (-f.count, f.token))
        return entries

    # ------------------------------------------------------------------
    # Tokenizer feeds
    # ------------------------------------------------------------------

    def _recv(self, token: str, err: Optional[BaseException]) -> None:
        if err is None:
            self.add(token)

    def parse_letter_tokens(
            self,
            stream: Stream,
            language: Language,
            size: int,
            cancel: Optional[CancelToken] = None,
    ) -> None:
        """Count letter n-grams parsed from stream. Counts already added on
        failure or cancellation are kept."""
        parse_letter_tokens(stream, language, size, self._recv, cancel)

    def parse_word_tokens(
            self,
            stream: Stream,
            size: int,
            cancel: Optional[CancelToken] = None,
    ) -> None:
        """Count word n-grams parsed from stream."""
        parse_word_tokens(stream, size, self._recv, cancel)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, sink: TextIO) -> None:
        """Write the table as CSV, sorted by count."""
        writer = csv.writer(sink, lineterminator="\n")
        writer.writerow(FREQUENCY_HEADER)
        for freq in self.entries_sorted_by_count():
            writer.writerow((freq.token, freq.count, f"{freq.percentage:.8f}"))

    def save_to_file(self, path: Union[str, Path]) -> None:
        """
        Write the table to path.

        Data goes to a temporary file beside path which then replaces it,
        so an existing table is never left half written.
        """
        with atomic_write(path) as f:
            self.save(f)

        logger.info("Saved %d tokens to %s", len(self), path)

    @classmethod
    def load(cls, source: Iterable[str]) -> FrequencyTable:
        """
        Parse a table from CSV text.

        When a token appears on more than one row, the last row wins.

        Raises:
            FrequencyFormatError: Non-integer or negative count, non-numeric
                percentage, or broken CSV; the message names the record
        """
        table = cls()
        reader = csv.reader(source)

        try:
            for record in reader:
                if len(record) < 3:
                    continue
                if record[0].startswith("#"):
                    continue

                token = record[0]

                try:
                    count = int(record[1].strip())
                    if count < 0:
                        raise ValueError("count is negative")
                except ValueError as exc:
                    raise FrequencyFormatError(
                        f"failed to parse the count field from the csv. {record}. {exc}"
                    ) from exc

                try:
                    percentage = float(record[2].strip())
                except ValueError as exc:
                    raise FrequencyFormatError(
                        f"failed to parse the percentage field from the csv. {record}. {exc}"
                    ) from exc

                table._counts[token] = count
                table._percentages[token] = percentage
        except csv.Error as exc:
            raise FrequencyFormatError(
                f"failed to parse csv on line {reader.line_num}. {exc}"
            ) from exc

        return table

    @classmethod
    def load_from_file(cls, path: Union[str, Path]) -> FrequencyTable:
        """Load a table from a UTF-8 CSV file. See load."""
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                table = cls.load(f)
        except FrequencyFormatError as exc:
            raise FrequencyFormatError(
                f"failed to load the frequency table from {str(path)!r}. {exc}"
            ) from exc

        logger.info("Loaded %d tokens from %s", len(table), path)
        return table
