"""Shared test fixtures for Puzzle Galaxy tests."""

import os

import pytest

from puzzle_galaxy.config import GalaxyConfig
from puzzle_galaxy.graph.models import PuzzleNode
from puzzle_galaxy.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep user/project config files and GALAXY_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("GALAXY_"):
            monkeypatch.delenv(key)
    yield
    reset_logging()


@pytest.fixture
def fast_config():
    """Config with no backoff or reconnect delay."""
    return GalaxyConfig(fetch_backoff_seconds=0.0, reconnect_delay_seconds=0.0)


@pytest.fixture
def sample_nodes():
    """Small mixed dataset: two fish, two singles, one wing."""
    return [
        PuzzleNode(id="h1", difficulty="Hard", se_rating=4.0, techniques=["XWing"]),
        PuzzleNode(id="h2", difficulty="Hard", se_rating=4.5, techniques=["Swordfish"]),
        PuzzleNode(id="e1", difficulty="Easy", se_rating=1.2, techniques=["NakedSingle"]),
        PuzzleNode(id="e2", difficulty="Easy", se_rating=1.5, techniques=["HiddenSingle"]),
        PuzzleNode(id="x1", difficulty="Expert", se_rating=7.0, techniques=["XYWing"]),
    ]
