"""Logging configuration for ngrams runs."""
from __future__ import annotations

import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

__all__ = ["LOG_FORMAT", "LOG_DATEFMT", "setup_logger"]

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
        log_path: Union[str, Path],
        *,
        level: int = logging.INFO,
        filename_prefix: str = "ngrams",
        console: bool = False,
        rotate: bool = False,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 3,
        force: bool = False,
) -> Path:
    """
    Configure root logging to write a timestamped file in/near log_path.

    If log_path is an existing directory (or has no suffix) the log file is
    created inside it, otherwise beside it, so passing the output CSV path
    puts the log next to the table it describes.

    Args:
        log_path: Directory, or file whose parent directory receives the log
        level: Logging level (default: INFO)
        filename_prefix: Prefix for the log filename
        console: If True, also log to stderr
        rotate: If True, use RotatingFileHandler instead of FileHandler
        max_bytes: Maximum log file size before rotation (if rotate=True)
        backup_count: Number of backup files to keep (if rotate=True)
        force: If True, remove existing handlers before adding new ones

    Returns:
        Path to the created log file

    Examples:
        >>> setup_logger("/data/out/en-letters-2.csv")  # doctest: +SKIP
        PosixPath('/data/out/ngrams_20250929_175430.log')
    """
    p = Path(log_path).expanduser().resolve()

    log_dir = p if (p.is_dir() or not p.suffix) else p.parent
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{filename_prefix}_{timestamp}.log"

    root = logging.getLogger()

    if force:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    root.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    if rotate:
        file_handler: logging.Handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    else:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    root.info("Logging to: %s", log_file)
    return log_file
