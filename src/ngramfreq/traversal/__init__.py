"""Input traversal: plain files and zip archives, with progress hooks."""

from .processor import ProcessFunc, SourceProcessor, include_zip_member, is_zip_path, sum_file_sizes
from .progress import (
    LoggingProgressReporter,
    NullProgressReporter,
    ProgressReporter,
    TqdmProgressReporter,
)

__all__ = [
    "ProcessFunc",
    "SourceProcessor",
    "include_zip_member",
    "is_zip_path",
    "sum_file_sizes",
    "ProgressReporter",
    "NullProgressReporter",
    "TqdmProgressReporter",
    "LoggingProgressReporter",
]
