# src/taskpad/core/controller.py

"""
Presentation controller.

Each user intent maps to exactly one store operation, and every function
returns a freshly built View:

    intent -> store mutation (persists) -> build_view (fresh queries)

Tasks are referenced either by their 1-based row number in the current view
or by id (full id, or a unique prefix of at least MIN_ID_PREFIX characters).
"""

from __future__ import annotations

import logging

from ..tasks.task_models import TaskFilter
from .state import AppState
from .view import View, build_view

logger = logging.getLogger(__name__)

MIN_ID_PREFIX = 4


def resolve_ref(state: AppState, ref: str) -> str | None:
    """Map a row number or id (prefix) to a task id. Returns None if nothing matches."""
    ref = (ref or "").strip().rstrip(".")
    if not ref:
        return None

    if ref.isdigit():
        visible = state.tasks.query(state.current_filter)
        idx = int(ref)
        if 1 <= idx <= len(visible):
            return visible[idx - 1].id

    if state.tasks.get(ref) is not None:
        return ref

    if len(ref) >= MIN_ID_PREFIX:
        matches = [t.id for t in state.tasks.query(TaskFilter.ALL) if t.id.startswith(ref)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            logger.debug("Ambiguous task ref=%s (%d matches)", ref, len(matches))
    return None


def current_view(state: AppState) -> View:
    return build_view(state)


def add_task(state: AppState, text: str) -> View:
    state.tasks.add(text)
    return build_view(state)


def toggle_task(state: AppState, ref: str) -> View:
    task_id = resolve_ref(state, ref)
    if task_id is not None:
        state.tasks.toggle_completed(task_id)
    return build_view(state)


def delete_task(state: AppState, ref: str) -> View:
    # Unmatched refs still go through the store, which persists either way.
    task_id = resolve_ref(state, ref)
    state.tasks.delete(task_id if task_id is not None else ref.strip())
    return build_view(state)


def clear_completed(state: AppState) -> View:
    state.tasks.clear_completed()
    return build_view(state)


def set_filter(state: AppState, task_filter: TaskFilter | str) -> View:
    """Raises ValueError for an unknown filter; the current selection is kept then."""
    state.current_filter = TaskFilter.parse(task_filter)
    return build_view(state)


def toggle_theme(state: AppState) -> View:
    state.preferences.toggle_dark_mode()
    return build_view(state)
