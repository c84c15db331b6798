"""Shared test fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Per-test log directory."""
    return tmp_path / "logs"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by setup_logging so they don't leak across tests."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
