# src/taskpad/cli/render.py

"""Console rendering of a View.

Decisions:
- Two palettes (light / dark) chosen by the persisted theme flag.
- Truecolor when COLORTERM says so; otherwise the xterm 256-color cube.
- Colors off for color_mode "never", NO_COLOR, or (in "auto") a non-TTY stdout.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from datetime import datetime

from ..core.view import TaskRow, View
from ..tasks.task_models import TaskFilter

RESET = "\033[0m"
BOLD = "\033[1m"
STRIKE = "\033[9m"

RULE_WIDTH = 60
EMPTY_MESSAGE = "No tasks to show."
FILTER_TITLES = {
    TaskFilter.ALL: "All",
    TaskFilter.COMPLETED: "Completed",
    TaskFilter.PENDING: "Pending",
}


@dataclass(frozen=True, slots=True)
class Palette:
    name: str
    header: str
    accent: str
    done: str
    pending: str
    muted: str


LIGHT = Palette(
    name="light",
    header="#1F3B73",
    accent="#476EAE",
    done="#2E7D32",
    pending="#202020",
    muted="#6B6B6B",
)

DARK = Palette(
    name="dark",
    header="#A7C7FF",
    accent="#48B3AF",
    done="#A7E399",
    pending="#F0F0F0",
    muted="#8A8A8A",
)


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""

    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))

    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"


def colors_enabled(color_mode: str = "auto") -> bool:
    if color_mode == "never" or os.environ.get("NO_COLOR") is not None:
        return False
    if color_mode == "always":
        return True
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


class Painter:
    """Applies palette colors to text (or passes text through when colors are off)."""

    def __init__(self, palette: Palette, *, enabled: bool) -> None:
        self.palette = palette
        self.enabled = enabled
        colorterm = os.environ.get("COLORTERM", "").lower()
        self._truecolor = any(tok in colorterm for tok in ("truecolor", "24bit"))

    def _fg(self, hex_code: str) -> str:
        r, g, b = _hex_to_rgb(hex_code)
        if self._truecolor:
            return f"\033[38;2;{r};{g};{b}m"
        return _fg_256(r, g, b)

    def paint(self, text: str, hex_code: str, *styles: str) -> str:
        if not self.enabled or not text:
            return text
        return self._fg(hex_code) + "".join(styles) + text + RESET


def _ts_local(dt: datetime | None) -> str:
    if dt is None:
        return ""
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _render_filter_bar(view: View, p: Painter) -> str:
    parts: list[str] = []
    for f, title in FILTER_TITLES.items():
        if f is view.filter:
            parts.append(p.paint(f"[{title}]", p.palette.accent, BOLD))
        else:
            parts.append(p.paint(f" {title} ", p.palette.muted))
    theme = "dark" if view.dark_mode else "light"
    return " ".join(parts) + p.paint(f"   theme: {theme}", p.palette.muted)


def _render_row(row: TaskRow, p: Painter) -> list[str]:
    box = "[x]" if row.completed else "[ ]"
    num = p.paint(f"{row.number:>3}.", p.palette.accent, BOLD)
    if row.completed:
        text = p.paint(row.text, p.palette.done, STRIKE)
        box = p.paint(box, p.palette.done)
    else:
        text = p.paint(row.text, p.palette.pending)

    times = f"created {_ts_local(row.created_at)}"
    if row.completed and row.completed_at is not None:
        times += f" | completed {_ts_local(row.completed_at)}"

    return [
        f"{num} {box} {text}",
        "         " + p.paint(times, p.palette.muted),
    ]


def render_view(view: View, *, title: str = "taskpad", color_mode: str = "auto") -> str:
    palette = DARK if view.dark_mode else LIGHT
    p = Painter(palette, enabled=colors_enabled(color_mode))
    rule = p.paint("-" * RULE_WIDTH, palette.header)

    lines = [p.paint(title, palette.header, BOLD), _render_filter_bar(view, p), rule]
    if not view.rows:
        lines.append(p.paint(EMPTY_MESSAGE, palette.muted))
    for row in view.rows:
        lines.extend(_render_row(row, p))
    lines.append(rule)

    s = view.stats
    lines.append(
        f"Total: {p.paint(str(s.total), palette.accent, BOLD)}  "
        f"Completed: {p.paint(str(s.completed), palette.done, BOLD)}  "
        f"Fastest: {s.fastest}"
    )
    return "\n".join(lines)
