# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.core.preferences import Preferences
from taskpad.core.state import AppState
from taskpad.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeStorage, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskpad",
        log_level="WARNING",
        data_dir=tmp_path,
        log_dir=tmp_path,
        storage_path=tmp_path / "storage.sqlite3",
        tasks_key="tasks",
        theme_key="darkMode",
        color_mode="never",
    )


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(storage: FakeStorage, clock: FakeClock) -> TaskStore:
    return TaskStore(storage, clock=clock, id_factory=SequentialIds())


@pytest.fixture()
def state(settings: SimpleNamespace, storage: FakeStorage, store: TaskStore) -> AppState:
    """AppState wired with the in-memory storage and deterministic clock/ids."""
    return AppState(
        settings=settings,
        storage=storage,
        tasks=store,
        preferences=Preferences(storage),
    )
