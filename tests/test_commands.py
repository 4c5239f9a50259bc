# tests/test_commands.py

from __future__ import annotations

from taskpad.cli.commands import CommandRegistry, registry
from taskpad.connectors.console_connector import handle_line
from taskpad.core.state import AppState
from taskpad.tasks.task_models import TaskFilter


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a", aliases=["aa"])
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x y") == "h2:x,y"
    assert reg.handle(state, "/AA") == "h2:"
    assert reg.handle(state, "/b", emit=notes.append) == "h3"
    assert called == {"h2": 2, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state: AppState) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/done", "/rm", "/clear", "/filter", "/theme", "/stats"):
        assert name in text


def test_add_done_rm_flow(state: AppState) -> None:
    out = registry.handle(state, "/add Buy milk") or ""
    assert "Buy milk" in out
    assert "[ ]" in out
    assert "Total: 1" in out

    out = registry.handle(state, "/done 1") or ""
    assert "[x]" in out
    assert "Completed: 1" in out
    assert 'Fastest: "Buy milk" (0s)' in out

    out = registry.handle(state, "/rm 1") or ""
    assert "No tasks to show." in out
    assert "Total: 0" in out


def test_add_keeps_inner_whitespace(state: AppState) -> None:
    registry.handle(state, "/add   buy   milk  ")
    registry.handle(state, "/ADD a\tb")
    assert [t.text for t in state.tasks.query("pending")] == ["buy   milk", "a\tb"]


def test_usage_messages(state: AppState) -> None:
    assert (registry.handle(state, "/add") or "").startswith("Usage")
    assert (registry.handle(state, "/done") or "").startswith("Usage")
    assert (registry.handle(state, "/rm 1 2") or "").startswith("Usage")
    assert (registry.handle(state, "/filter everything") or "").startswith("Usage")
    assert "currently 'all'" in (registry.handle(state, "/filter") or "")


def test_filter_and_theme_commands(state: AppState) -> None:
    state.tasks.add("A")
    out = registry.handle(state, "/f completed") or ""
    assert state.current_filter is TaskFilter.COMPLETED
    assert "[Completed]" in out
    assert "No tasks to show." in out

    out = registry.handle(state, "/theme") or ""
    assert state.preferences.dark_mode is True
    assert "theme: dark" in out


def test_clear_emits_removed_count(state: AppState) -> None:
    task = state.tasks.add("A")
    state.tasks.add("B")
    state.tasks.toggle_completed(task.id)
    notes: list[str] = []

    out = registry.handle(state, "/clear", emit=notes.append) or ""
    assert notes == ["Removed 1 completed task(s)."]
    assert "Total: 1" in out


def test_stats_command(state: AppState) -> None:
    state.tasks.add("A")
    out = registry.handle(state, "/stats") or ""
    assert "Total: 1" in out
    assert "Pending: 1" in out
    assert "Fastest: N/A" in out


def test_console_plain_text_adds_task(state: AppState) -> None:
    assert handle_line(state, "   ") is None
    out = handle_line(state, "Water plants") or ""
    assert "Water plants" in out
    assert state.tasks.stats().total == 1


def test_console_reports_handler_crash(state: AppState, monkeypatch) -> None:
    def boom(text: str) -> None:
        raise RuntimeError("disk full")

    monkeypatch.setattr(state.tasks, "add", boom)
    assert handle_line(state, "anything") == "Internal error while handling a command."
