"""
create-laju-app - scaffold a new Laju project from the official template.

Usage:
    create-laju-app <project-name>
    create-laju-app <project-name> --package-manager bun --tailwind v4
"""

import typer

from create_laju_app.cli.commands import register_create_command
from create_laju_app.cli.helpers import console, show_banner

__version__ = "1.0.0"

app = typer.Typer(
    name="create-laju-app",
    help="CLI to create a new project from template",
    add_completion=False,
)

register_create_command(app, console=console, show_banner=show_banner, version=__version__)


def main():
    app()


if __name__ == "__main__":
    main()
