"""Letter and word n-gram tokenizers, frequency tables and processing."""

from .frequency import FREQUENCY_HEADER, Frequency, FrequencyTable
from .processor import FrequencyProcessor, ProcessorMode
from .tokens import (
    letter_tokens,
    parse_letter_tokens,
    parse_word_tokens,
    word_tokens,
)

__all__ = [
    "FREQUENCY_HEADER",
    "Frequency",
    "FrequencyTable",
    "FrequencyProcessor",
    "ProcessorMode",
    "letter_tokens",
    "word_tokens",
    "parse_letter_tokens",
    "parse_word_tokens",
]
