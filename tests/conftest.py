"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from task_tracker.config import Config, ConfigModel  # noqa: E402
from task_tracker.task_store import TaskStore  # noqa: E402


@pytest.fixture
def store():
    """An empty task store."""
    return TaskStore()


@pytest.fixture
def config(tmp_path):
    """Configuration pointing at a temporary data directory."""
    return ConfigModel(data_dir=str(tmp_path / "data"))


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Keep the cached configuration from leaking between tests."""
    Config._instance = None
    yield
    Config._instance = None
