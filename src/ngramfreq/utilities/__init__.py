"""Shared helpers: report formatting, atomic file writes and locking."""

from .atomic import atomic_write
from .display import format_banner, format_bytes, format_field, shorten_path
from .rwlock import ReadWriteLock

__all__ = [
    "atomic_write",
    "format_banner",
    "format_bytes",
    "format_field",
    "shorten_path",
    "ReadWriteLock",
]
