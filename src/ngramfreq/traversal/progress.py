"""Progress reporting hooks for source traversal.

The traversal engine always talks to a ProgressReporter. The base class does
nothing, so callers that don't care about progress pass nothing and the
engine never has to check.
"""
from __future__ import annotations

import logging
from typing import Any, BinaryIO, Optional

from tqdm import tqdm

logger = logging.getLogger(__name__)

__all__ = [
    "ProgressReporter",
    "NullProgressReporter",
    "TqdmProgressReporter",
    "LoggingProgressReporter",
]


class ProgressReporter:
    """
    Receives progress events from SourceProcessor.

    Subclasses override whichever hooks they need; the defaults are no-ops.
    """

    def started(self, path: str, index: int, total: int) -> None:
        """Called once per top-level input path before it is processed.

        Args:
            path: Input path (not the zip member)
            index: Zero-based position of path in the input list
            total: Number of input paths
        """

    def reader(self, stream: BinaryIO) -> BinaryIO:
        """Return a stream that reads from stream, observing bytes consumed."""
        return stream

    def add_to_total_size(self, delta: int) -> None:
        """Adjust the expected byte total; delta may be negative."""


class NullProgressReporter(ProgressReporter):
    """Reporter used when the caller does not supply one."""


class _ProgressReader:
    """Read-through wrapper advancing a tqdm bar by the bytes returned."""

    def __init__(self, stream: BinaryIO, bar: tqdm):
        self._stream = stream
        self._bar = bar

    def read(self, size: int = -1) -> bytes:
        data = self._stream.read(size)
        if data:
            self._bar.update(len(data))
        return data

    def __getattr__(self, name: str) -> Any:
        return getattr(self._stream, name)


class TqdmProgressReporter(ProgressReporter):
    """
    Byte-based tqdm bar over every input path.

    The bar's total starts at zero and grows as the traversal reports file
    sizes; zip archives swap their compressed size for the uncompressed size
    of their members.

    Usage:
        with TqdmProgressReporter() as progress:
            FrequencyProcessor(..., progress=progress).process_files(paths)
    """

    def __init__(self, bar: Optional[tqdm] = None, **tqdm_kwargs: Any):
        if bar is None:
            options = dict(
                total=0,
                desc="Processing",
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                ncols=100,
            )
            options.update(tqdm_kwargs)
            bar = tqdm(**options)
        self.bar = bar

    def started(self, path: str, index: int, total: int) -> None:
        self.bar.set_description(f"[{index + 1}/{total}]")

    def reader(self, stream: BinaryIO) -> BinaryIO:
        return _ProgressReader(stream, self.bar)  # type: ignore[return-value]

    def add_to_total_size(self, delta: int) -> None:
        self.bar.total = max(0, (self.bar.total or 0) + delta)
        self.bar.refresh()

    def close(self) -> None:
        self.bar.close()

    def __enter__(self) -> TqdmProgressReporter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class LoggingProgressReporter(ProgressReporter):
    """Logs each input path as it starts (verbose mode without a bar)."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.log = log or logger
        self.level = level

    def started(self, path: str, index: int, total: int) -> None:
        self.log.log(self.level, "[%d/%d] %s", index + 1, total, path)
