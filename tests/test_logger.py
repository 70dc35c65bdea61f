# tests/test_logger.py
from pathlib import Path
import logging
from logging import StreamHandler, FileHandler
from logging.handlers import RotatingFileHandler

import pytest

from ngramfreq.logger import setup_logger

pytestmark = pytest.mark.usefixtures("clean_root_handlers")


@pytest.fixture()
def clean_root_handlers():
    """Start each test with a clean root logger; restore afterwards."""
    root = logging.getLogger()
    prev = list(root.handlers)
    prev_level = root.level
    try:
        for h in list(root.handlers):
            root.removeHandler(h)
        yield
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in prev:
            root.addHandler(h)
        root.setLevel(prev_level)


def _handler_types():
    return {type(h) for h in logging.getLogger().handlers}


def test_creates_log_file_in_directory(tmp_path: Path):
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    log_path = setup_logger(out_dir, force=True)
    assert log_path.parent == out_dir.resolve()
    assert log_path.name.startswith("ngrams_")
    assert log_path.suffix == ".log"

    logging.getLogger("ngramfreq.test").info("counted 42 tokens")
    text = log_path.read_text(encoding="utf-8")
    assert "Logging to:" in text
    assert "counted 42 tokens" in text


def test_uses_parent_dir_when_given_output_file(tmp_path: Path):
    table = tmp_path / "en-letters-2.csv"

    log_path = setup_logger(table, force=True)
    assert log_path.parent == tmp_path.resolve()
    assert log_path.exists()


def test_creates_missing_directory(tmp_path: Path):
    log_dir = tmp_path / "logs" / "nested"

    log_path = setup_logger(log_dir, filename_prefix="discover", force=True)
    assert log_dir.is_dir()
    assert log_path.name.startswith("discover_")


def test_force_replaces_handlers_and_rotation(tmp_path: Path):
    setup_logger(tmp_path, console=True, force=True)
    types1 = _handler_types()
    assert FileHandler in types1
    assert StreamHandler in types1

    setup_logger(tmp_path, rotate=True, force=True)
    types2 = _handler_types()
    assert RotatingFileHandler in types2
    assert StreamHandler not in types2
    assert FileHandler not in types2


def test_level_filters_messages(tmp_path: Path):
    log_path = setup_logger(tmp_path, level=logging.WARNING, force=True)

    log = logging.getLogger("ngramfreq.test")
    log.info("quiet")
    log.warning("loud")

    text = log_path.read_text(encoding="utf-8")
    assert "quiet" not in text
    assert "loud" in text
