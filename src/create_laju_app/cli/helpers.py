"""Shared console, banner and logging helpers for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from typer.core import TyperCommand

from create_laju_app.core.config import BANNER, TAGLINE
from create_laju_app.errors import CreateAppError

console = Console()


def show_banner(target: Console | None = None) -> None:
    """Display the ASCII art banner."""
    out = target or console
    colors = ["bright_blue", "blue", "cyan", "bright_cyan"]
    styled = Text()
    for i, line in enumerate(BANNER.strip("\n").split("\n")):
        styled.append(line + "\n", style=colors[i % len(colors)])
    out.print(styled)
    out.print(Text(TAGLINE, style="italic bright_yellow"))
    out.print()


class BannerCommand(TyperCommand):
    """Command that shows the banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


def configure_logging(debug: bool = False) -> None:
    """Route library logging to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)],
        force=True,
    )


def report_failure(out: Console, exc: CreateAppError, *, debug: bool = False) -> None:
    """Render ``exc`` as a red panel; must be called from an ``except`` block."""
    body = escape(exc.message)
    if exc.hint:
        body = f"{body}\n\n[yellow]Hint:[/yellow] {escape(exc.hint)}"
    out.print()
    out.print(Panel(body, title=f"[red]{exc.title}[/red]", border_style="red", padding=(1, 2)))
    if debug:
        out.print_exception()


__all__ = [
    "BannerCommand",
    "configure_logging",
    "console",
    "report_failure",
    "show_banner",
]
