"""Pytest configuration and shared fixtures for Synaptic Store tests."""

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

from synaptic_store.config.settings import Settings
from synaptic_store.engine import StorageEngine
from synaptic_store.models.envelope import BackendKind
from tests.utils import FakeClock


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def test_settings(temp_dir: Path) -> Settings:
    """Create test settings with temporary storage paths."""
    return Settings(
        DEBUG=True,
        LOG_DIRECTORY=None,

        DEFAULT_STORAGE_KIND="session",
        UNDO_ENABLED=False,

        # Storage paths (temporary)
        DURABLE_DATABASE_PATH=temp_dir / "durable.db",
        SESSION_DATABASE_PATH=":memory:",

        # Redis (disabled for tests)
        REDIS_ENABLED=False,
    )


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic millisecond clock."""
    return FakeClock()


@pytest.fixture
def engine(test_settings: Settings, clock: FakeClock) -> Generator[StorageEngine, None, None]:
    """Engine backed by SQLite host stores."""
    engine = StorageEngine(test_settings, clock=clock)
    yield engine
    engine.close()


@pytest.fixture
def fallback_engine(test_settings: Settings, clock: FakeClock) -> StorageEngine:
    """Engine whose durable and session kinds have no usable host store."""
    return StorageEngine(
        test_settings,
        hosts={BackendKind.LOCAL: None, BackendKind.SESSION: None},
        clock=clock,
    )


@pytest.fixture
def sample_values() -> Dict[str, Any]:
    """Values exercising quoting and nesting in the envelope format."""
    value1 = 'double-quoted "string"'
    value2 = "single-quoted 'string'"
    value3 = {"foo": "bar"}
    return {
        "key1": value1,
        "key 2": value2,
        "key3": value3,
        "key 4": {"name1": value1, "name2": value2, "name3": value3},
    }


# Environment cleanup
@pytest.fixture(autouse=True)
def cleanup_env():
    """Clean up environment variables before/after tests."""
    original_env = dict(os.environ)

    yield

    os.environ.clear()
    os.environ.update(original_env)
