"""Shared test fixtures for cqlpolicy."""

import logging
from pathlib import Path

import pytest

from cqlpolicy.config import clear_config_cache


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    """Start every test with an empty config file cache."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        # pytest's own capture handlers come and go with each test phase
        if handler in saved_handlers or type(handler).__module__.startswith("_pytest"):
            continue
        root.removeHandler(handler)
        handler.close()
    root.setLevel(saved_level)


@pytest.fixture
def missing_config(tmp_path: Path) -> Path:
    """Path to a config file that does not exist."""
    return tmp_path / "missing.toml"
