# src/taskpad/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete storage into AppState (tasks + preferences).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.preferences import Preferences
from ..core.state import AppState
from ..storage.kv_store import SqliteKeyValueStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = SqliteKeyValueStorage(settings.storage_path)
    state = AppState(
        settings=settings,
        storage=storage,
        tasks=TaskStore(storage, key=settings.tasks_key),
        preferences=Preferences(storage, theme_key=settings.theme_key),
    )
    logger.info(
        "State ready: %d tasks, dark_mode=%s", len(state.tasks), state.preferences.dark_mode
    )
    return state
