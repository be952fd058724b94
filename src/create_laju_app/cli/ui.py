"""Terminal UI helpers: step tree and arrow-key selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import readchar
import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

_SYMBOLS = {
    "done": "[green]●[/green]",
    "pending": "[green dim]○[/green dim]",
    "running": "[cyan]○[/cyan]",
    "error": "[red]●[/red]",
    "skipped": "[yellow]○[/yellow]",
}


@dataclass
class TrackedStep:
    key: str
    label: str
    status: str = "pending"
    detail: str = ""


class StepTracker:
    """Ordered pipeline steps rendered as a Rich tree.

    A refresh callback (typically ``Live.update``) is invoked after every
    status change so the tree stays current while commands run.
    """

    def __init__(self, title: str):
        self.title = title
        self.steps: list[TrackedStep] = []
        self._refresh_cb: Optional[Callable[[], None]] = None

    def attach_refresh(self, cb: Callable[[], None]) -> None:
        self._refresh_cb = cb

    def add(self, key: str, label: str) -> None:
        if self.get(key) is None:
            self.steps.append(TrackedStep(key=key, label=label))
            self._maybe_refresh()

    def get(self, key: str) -> TrackedStep | None:
        return next((s for s in self.steps if s.key == key), None)

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, "running", detail)

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, "done", detail)

    def error(self, key: str, detail: str = "") -> None:
        self._update(key, "error", detail)

    def skip(self, key: str, detail: str = "") -> None:
        self._update(key, "skipped", detail)

    def _update(self, key: str, status: str, detail: str) -> None:
        step = self.get(key)
        if step is None:
            step = TrackedStep(key=key, label=key)
            self.steps.append(step)
        step.status = status
        if detail:
            step.detail = detail
        self._maybe_refresh()

    def _maybe_refresh(self) -> None:
        if self._refresh_cb:
            self._refresh_cb()

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step.status, " ")
            detail = escape(step.detail.strip())
            if step.status == "pending":
                text = f"{step.label} ({detail})" if detail else step.label
                tree.add(f"{symbol} [bright_black]{text}[/bright_black]")
            elif detail:
                tree.add(f"{symbol} [white]{step.label}[/white] [bright_black]({detail})[/bright_black]")
            else:
                tree.add(f"{symbol} [white]{step.label}[/white]")
        return tree


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key in (readchar.key.UP, readchar.key.CTRL_P):
        return "up"
    if key in (readchar.key.DOWN, readchar.key.CTRL_N):
        return "down"
    if key == readchar.key.ENTER:
        return "enter"
    if key == readchar.key.ESC or key == "\x1b":
        return "escape"
    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt
    return key


def select_with_arrows(
    options: Dict[str, str],
    prompt_text: str = "Select an option",
    default_key: str | None = None,
    console: Console | None = None,
) -> str:
    """Return the key chosen from ``options`` with the arrow keys.

    Esc or Ctrl+C cancels with exit code 1.
    """
    console = console or Console()
    option_keys = list(options.keys())
    index = option_keys.index(default_key) if default_key in option_keys else 0

    def build_panel() -> Panel:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")
        for i, key in enumerate(option_keys):
            pointer = "▶" if i == index else " "
            table.add_row(pointer, f"[cyan]{key}[/cyan] [dim]({options[key]})[/dim]")
        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")
        return Panel(table, title=f"[bold]{prompt_text}[/bold]", border_style="cyan", padding=(1, 2))

    console.print()
    with Live(build_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)
            if key == "up":
                index = (index - 1) % len(option_keys)
            elif key == "down":
                index = (index + 1) % len(option_keys)
            elif key == "enter":
                return option_keys[index]
            elif key == "escape":
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)
            live.update(build_panel(), refresh=True)


__all__ = ["StepTracker", "TrackedStep", "get_key", "select_with_arrows"]
