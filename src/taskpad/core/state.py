# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_models import TaskFilter
from ..tasks.task_store import TaskStore
from .ports import KeyValueStorage
from .preferences import Preferences


@dataclass
class AppState:
    """
    The application object.

    Built once by the composition root (cli/bootstrap.py) and passed
    explicitly to commands and connectors; nothing here is a module global.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: Any

    storage: KeyValueStorage
    tasks: TaskStore
    preferences: Preferences

    current_filter: TaskFilter = TaskFilter.ALL
