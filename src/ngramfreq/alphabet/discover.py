"""Derive an alphabet from text in an unknown language."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Set, TextIO, Union

from ngramfreq.alphabet.language import Language
from ngramfreq.alphabet.load import LANGUAGES_HEADER
from ngramfreq.cancel import CancelToken, check_cancelled
from ngramfreq.ngrams.tokens import Stream, iter_text, lower_char
from ngramfreq.traversal.processor import SourceProcessor
from ngramfreq.traversal.progress import ProgressReporter
from ngramfreq.utilities.atomic import atomic_write

logger = logging.getLogger(__name__)

__all__ = ["UNKNOWN_CODE", "discover_letters", "DiscoverProcessor"]

UNKNOWN_CODE = "unknown"


def discover_letters(stream: Stream, cancel: Optional[CancelToken] = None) -> Set[str]:
    """
    Collect the distinct non-whitespace characters in stream, lowercased.

    Examples:
        >>> import io
        >>> sorted(discover_letters(io.BytesIO(b"Ab b!")))
        ['!', 'a', 'b']
    """
    found: Set[str] = set()
    for chunk in iter_text(stream, cancel):
        for ch in chunk:
            check_cancelled(cancel)
            if ch.isspace():
                continue
            found.add(lower_char(ch))
    return found


class DiscoverProcessor:
    """
    Discovers the characters used across a set of input sources.

    The result is written as a languages file holding a single row for the
    "unknown" language, which can then be edited and fed back with
    ``--languages``.
    """

    def __init__(self, progress: Optional[ProgressReporter] = None):
        self.source = SourceProcessor(progress)
        self._letters: Set[str] = set()

    def _consume(self, stream: BinaryIO, cancel: Optional[CancelToken]) -> None:
        self._letters.update(discover_letters(stream, cancel))

    def process_files(
            self,
            paths: Iterable[str],
            cancel: Optional[CancelToken] = None,
    ) -> None:
        """Add the characters found in every path to the discovered set."""
        self.source.process_files(paths, self._consume, cancel)
        logger.info("Discovered %d distinct characters", len(self._letters))

    def letters(self) -> List[str]:
        """Discovered characters sorted by code point."""
        return sorted(self._letters)

    def language(self) -> Language:
        return Language(name=UNKNOWN_CODE, code=UNKNOWN_CODE, letters="".join(self.letters()))

    def write(self, sink: TextIO) -> None:
        """Write the discovered alphabet as a single-row languages CSV."""
        letters = "".join(self.letters()).replace('"', '""')
        sink.write(",".join(LANGUAGES_HEADER) + "\n")
        sink.write(f'{UNKNOWN_CODE},{UNKNOWN_CODE},"{letters}"\n')

    def save(self, path: Union[str, Path]) -> None:
        with atomic_write(path) as f:
            self.write(f)
        logger.info("Saved discovered alphabet to %s", path)
