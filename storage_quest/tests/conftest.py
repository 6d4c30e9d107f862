"""
Test configuration and fixtures for the Storage Quest test suite.

Environment defaults are set before any storage_quest import so the
configuration models never read a developer's real settings.
"""

import logging
import os
import random
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

os.environ.setdefault("LOGGING_ENVIRONMENT", "unit_test")
os.environ.setdefault("LOGGING_LEVEL", "DEBUG")
os.environ.setdefault("STORAGE_AUTOSAVE", "true")

from storage_quest.config import reset_config  # noqa: E402
from storage_quest.structured_logging.enhanced_logging_config import (  # noqa: E402
    _logging_state,
    clear_store_context,
    get_logger,
)

logger = get_logger(__name__)

# Register fixture plugins
pytest_plugins = [
    "storage_quest.tests.fixtures.store_fixtures",
]


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Generator[None, None, None]:
    """Reset the config cache before and after each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def clean_logging_context() -> Generator[None, None, None]:
    """Keep contextvars bound by one test out of the next."""
    clear_store_context()
    yield
    clear_store_context()


@pytest.fixture(autouse=True)
def deterministic_random_seed() -> Generator[None, None, None]:
    """Set deterministic random seed for reproducible tests."""
    random.seed(42)
    yield


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point snapshot storage at a per-test directory."""
    directory = tmp_path / "data"
    monkeypatch.setenv("STORAGE_DATA_DIR", str(directory))
    return directory


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Put the root logger and structlog back the way the test found them."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    initialized, signature = _logging_state.initialized, _logging_state.signature
    yield
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    _logging_state.initialized, _logging_state.signature = initialized, signature
    structlog.reset_defaults()


def pytest_collection_modifyitems(config: Any, items: list[Any]) -> None:
    """Auto-mark tests in unit/ with @pytest.mark.unit."""
    for item in items:
        file_path = str(item.fspath)
        if "/unit/" in file_path or "\\unit\\" in file_path:
            item.add_marker(pytest.mark.unit)
