"""
Letter and word n-gram frequency tables over text corpora.

Main entry points:
    FrequencyProcessor - count n-grams from files and zip archives
    DiscoverProcessor - derive an alphabet from unfamiliar text

Key components:
    - alphabet: built-in and loadable alphabets, alphabet discovery
    - ngrams: tokenizers, frequency table, processor
    - traversal: plain file / zip traversal and progress hooks
    - config: validated run configuration
    - cli: the ``ngrams`` command
"""

__version__ = "0.3.0"

from ngramfreq.alphabet import DiscoverProcessor, Language, LanguageMap, builtin, builtin_languages
from ngramfreq.cancel import CancelToken
from ngramfreq.errors import (
    FrequencyFormatError,
    InvalidConfigError,
    LanguageNotFoundError,
    NgramFreqError,
    NoLanguagesError,
    OperationCancelled,
    SourceError,
    TokenTooLongError,
)
from ngramfreq.ngrams import Frequency, FrequencyProcessor, FrequencyTable, ProcessorMode

__all__ = [
    "__version__",
    "CancelToken",
    "DiscoverProcessor",
    "Frequency",
    "FrequencyFormatError",
    "FrequencyProcessor",
    "FrequencyTable",
    "InvalidConfigError",
    "Language",
    "LanguageMap",
    "LanguageNotFoundError",
    "NgramFreqError",
    "NoLanguagesError",
    "OperationCancelled",
    "ProcessorMode",
    "SourceError",
    "TokenTooLongError",
    "builtin",
    "builtin_languages",
]
