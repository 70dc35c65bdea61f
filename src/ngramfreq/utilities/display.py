"""Text formatting for the verbose run header and summary."""

from pathlib import Path
from typing import Union

__all__ = [
    "BYTE_UNITS",
    "LINE_WIDTH",
    "FIELD_WIDTH",
    "format_bytes",
    "shorten_path",
    "format_field",
    "format_banner",
]

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
LINE_WIDTH = 100
FIELD_WIDTH = 25  # "Label:" column, padded


def format_bytes(num_bytes: int) -> str:
    """Corpus size with a binary unit; whole bytes below 1 KB.

    Examples:
        >>> format_bytes(512)
        '512 B'
        >>> format_bytes(3 * 1024 * 1024)
        '3.00 MB'
    """
    if abs(num_bytes) < 1024:
        return f"{num_bytes} B"

    value = float(num_bytes)
    unit = BYTE_UNITS[0]
    for unit in BYTE_UNITS[1:]:
        value /= 1024.0
        if abs(value) < 1024.0:
            break
    return f"{value:.2f} {unit}"


def shorten_path(path: Union[Path, str], room: int) -> str:
    """Fit path into room characters, eliding the front.

    The cut is moved forward to a directory separator when that still
    leaves part of the path, so the file name is kept whole.

    Examples:
        >>> shorten_path("/corpus/books/volume-01.zip", 20)
        '.../volume-01.zip'
        >>> shorten_path("/corpus/books/volume-01.zip", 13)
        '...ume-01.zip'
    """
    text = str(path)
    if len(text) <= room:
        return text
    if room < 4:
        return "..."

    tail = text[-(room - 3):]
    sep = tail.find("/")
    if 0 < sep < len(tail) - 1:
        tail = tail[sep:]
    return "..." + tail


def format_field(label: str, value: object, width: int = FIELD_WIDTH) -> str:
    """One aligned "Label:   value" line.

    Path values are shortened so the line fits LINE_WIDTH.
    """
    head = f"{label + ':':<{width}}"
    if isinstance(value, Path):
        value = shorten_path(value, LINE_WIDTH - len(head))
    return f"{head}{value}"


def format_banner(title: str, width: int = LINE_WIDTH, style: str = "═") -> str:
    """Title line followed by a rule of the given style character."""
    return f"{title}\n{style * width}"
