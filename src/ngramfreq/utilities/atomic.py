"""Replace-on-success text file writes."""
from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO, Union

logger = logging.getLogger(__name__)

__all__ = ["atomic_write"]


@contextmanager
def atomic_write(path: Union[str, Path], encoding: str = "utf-8") -> Iterator[TextIO]:
    """
    Open a temporary file beside path for writing; on clean exit it
    replaces path, on any exception it is removed and path is untouched.

    Usage:
        with atomic_write("en-letters-2.csv") as f:
            table.save(f)
    """
    path = Path(path)
    temp_fd, temp_path = tempfile.mkstemp(
        suffix=".tmp",
        prefix=f".{path.name}.",
        dir=path.parent,
    )
    try:
        with os.fdopen(temp_fd, "w", encoding=encoding, newline="") as f:
            yield f
        os.replace(temp_path, path)
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError as exc:
            logger.error("Failed to remove temporary file %s: %s", temp_path, exc)
        raise
