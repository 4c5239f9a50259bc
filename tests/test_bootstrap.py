# tests/test_bootstrap.py

from __future__ import annotations

from types import SimpleNamespace

from taskpad.cli.bootstrap import create_initial_state
from taskpad.cli.main import _shutdown
from taskpad.storage.kv_store import SqliteKeyValueStorage


def test_bootstrap_wires_sqlite_storage(settings: SimpleNamespace) -> None:
    state = create_initial_state(settings=settings)
    assert isinstance(state.storage, SqliteKeyValueStorage)
    assert settings.storage_path.exists()
    state.tasks.add("from bootstrap")

    again = create_initial_state(settings=settings)
    assert [t.text for t in again.tasks.query()] == ["from bootstrap"]
    assert again.current_filter.value == "all"


def test_shutdown_leaves_storage_usable(settings: SimpleNamespace) -> None:
    state = create_initial_state(settings=settings)
    state.tasks.add("survives shutdown")

    _shutdown(state)
    _shutdown(SimpleNamespace())

    # close() holds nothing open, so the same storage keeps working.
    state.tasks.add("after close")
    assert len(create_initial_state(settings=settings).tasks) == 2
