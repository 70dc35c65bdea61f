"""Sequential traversal of plain-text files and zip archives."""
from __future__ import annotations

import logging
import os
import posixpath
import zipfile
import zlib
from contextlib import contextmanager
from typing import BinaryIO, Callable, Iterable, Iterator, Optional, TypeVar

from ngramfreq.cancel import CancelToken, check_cancelled
from ngramfreq.errors import OperationCancelled, SourceError
from ngramfreq.traversal.progress import NullProgressReporter, ProgressReporter

logger = logging.getLogger(__name__)

__all__ = ["ProcessFunc", "SourceProcessor", "is_zip_path", "include_zip_member", "sum_file_sizes"]

# fn(stream, cancel): consume one source stream
ProcessFunc = Callable[[BinaryIO, Optional[CancelToken]], None]

# Failures that abort the traversal as a SourceError
_IO_ERRORS = (OSError, EOFError, zipfile.BadZipFile, zlib.error)

# Raised by ZipFile.open for encrypted members and unsupported compression
_OPEN_ERRORS = (RuntimeError, NotImplementedError)

_T = TypeVar("_T")


def is_zip_path(path: str) -> bool:
    """True if path has a .zip extension (case-insensitive)."""
    return os.path.splitext(path)[1].lower() == ".zip"


def include_zip_member(info: zipfile.ZipInfo) -> bool:
    """Skip directories and hidden entries such as .DS_Store."""
    if info.is_dir():
        return False
    return not posixpath.basename(info.filename).startswith(".")


def sum_file_sizes(paths: Iterable[str]) -> int:
    """Total on-disk size of paths in bytes."""
    total = 0
    for path in paths:
        try:
            total += os.path.getsize(path)
        except OSError as exc:
            raise SourceError(
                path, f"failed to get the file size for {path!r}. {exc}"
            ) from exc
    return total


@contextmanager
def _closing(resource: _T, label: str) -> Iterator[_T]:
    """Close resource on exit; a failing close is logged, never raised."""
    try:
        yield resource
    finally:
        try:
            resource.close()  # type: ignore[attr-defined]
        except OSError as exc:
            logger.error("Failed to close %s: %s", label, exc)


class SourceProcessor:
    """
    Feeds each input source to a consumer function, one after another.

    A path ending in ``.zip`` is opened as an archive and each regular,
    non-hidden member is streamed separately, exactly as if it were its own
    file. Anything else is read as a single source.

    The first failure stops the traversal: I/O and archive errors surface
    as SourceError naming the offending path, cancellation surfaces as
    OperationCancelled. Work the consumer already did is not undone.

    Args:
        progress: Optional ProgressReporter (defaults to a no-op reporter)
    """

    def __init__(self, progress: Optional[ProgressReporter] = None):
        self.progress: ProgressReporter = progress or NullProgressReporter()

    def process_files(
            self,
            paths: Iterable[str],
            fn: ProcessFunc,
            cancel: Optional[CancelToken] = None,
    ) -> None:
        """
        Stream every path through fn in the given order.

        Args:
            paths: Input paths (plain files or .zip archives)
            fn: Consumer called with (stream, cancel) per source
            cancel: Optional cancellation token

        Raises:
            SourceError: Opening or reading a source failed
            OperationCancelled: cancel was triggered
        """
        paths = list(paths)
        total = len(paths)

        self.progress.add_to_total_size(sum_file_sizes(paths))

        for index, path in enumerate(paths):
            check_cancelled(cancel)
            self.progress.started(path, index, total)
            logger.info("Processing [%d/%d] %s", index + 1, total, path)

            try:
                if is_zip_path(path):
                    self._process_zip(path, fn, cancel)
                else:
                    self._process_plain(path, fn, cancel)
            except OperationCancelled:
                logger.warning("Cancelled while processing %s", path)
                raise
            except _IO_ERRORS as exc:
                raise SourceError(
                    path, f"failed to process the file {path!r}. {exc}"
                ) from exc

    def _process_plain(
            self,
            path: str,
            fn: ProcessFunc,
            cancel: Optional[CancelToken],
    ) -> None:
        with _closing(open(path, "rb"), path) as f:
            fn(self.progress.reader(f), cancel)

    def _process_zip(
            self,
            path: str,
            fn: ProcessFunc,
            cancel: Optional[CancelToken],
    ) -> None:
        with _closing(zipfile.ZipFile(path), path) as zf:
            members = [info for info in zf.infolist() if include_zip_member(info)]

            # Swap the archive size on disk for its members' uncompressed size
            self.progress.add_to_total_size(-os.path.getsize(path))
            self.progress.add_to_total_size(sum(info.file_size for info in members))

            logger.debug("%s: %d members", path, len(members))

            for info in members:
                check_cancelled(cancel)
                label = f"{path}:{info.filename}"
                try:
                    stream = zf.open(info)
                except _IO_ERRORS + _OPEN_ERRORS as exc:
                    raise SourceError(
                        path,
                        f"failed to open file {info.filename!r} inside of zip file {path!r}. {exc}",
                        member=info.filename,
                    ) from exc

                with _closing(stream, label):
                    try:
                        fn(self.progress.reader(stream), cancel)
                    except _IO_ERRORS as exc:
                        raise SourceError(
                            path,
                            f"failed to read file {info.filename!r} inside of zip file {path!r}. {exc}",
                            member=info.filename,
                        ) from exc
