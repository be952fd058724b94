"""The create command: validate, fetch, patch, set up."""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel

from create_laju_app.cli.commands.create_help import CREATE_COMMAND_DOC
from create_laju_app.cli.helpers import BannerCommand, configure_logging, report_failure
from create_laju_app.cli.ui import StepTracker, select_with_arrows
from create_laju_app.core.config import (
    DEBUG_ENV,
    PACKAGE_MANAGER_CHOICES,
    PACKAGE_MANAGER_INSTALL_URLS,
    TAILWIND_CHOICES,
    env_flag,
)
from create_laju_app.core.project import PackageManager, ProjectSpec, RunOptions, TailwindVersion
from create_laju_app.core.tool_checker import detect_package_managers
from create_laju_app.core.validation import validate_project
from create_laju_app.errors import CreateAppError, PreconditionError, UserInputError
from create_laju_app.setup import build_setup_steps, run_setup
from create_laju_app.template import (
    TemplateSource,
    build_http_client,
    fetch_template,
    patch_manifest,
    resolve_template_source,
)

logger = logging.getLogger(__name__)

__all__ = [
    "register_create_command",
    "resolve_package_manager",
    "resolve_tailwind",
]


def _is_interactive() -> bool:
    return sys.stdin.isatty()


def parse_package_manager(value: str) -> PackageManager:
    try:
        return PackageManager(value.strip().lower())
    except ValueError:
        raise UserInputError(
            f"Invalid package manager '{value}'.",
            code="INVALID_PACKAGE_MANAGER",
            hint=f"Choose from: {', '.join(PACKAGE_MANAGER_CHOICES)}",
        ) from None


def parse_tailwind(value: str) -> TailwindVersion:
    try:
        return TailwindVersion(value.strip().lower())
    except ValueError:
        raise UserInputError(
            f"Invalid TailwindCSS version '{value}'.",
            code="INVALID_TAILWIND_VERSION",
            hint=f"Choose from: {', '.join(TAILWIND_CHOICES)}",
        ) from None


def resolve_package_manager(console: Console) -> PackageManager:
    """Pick a package manager among those installed."""
    detected = detect_package_managers()
    if not detected:
        hints = ", ".join(f"{pm}: {url}" for pm, url in PACKAGE_MANAGER_INSTALL_URLS.items())
        raise PreconditionError(
            "No supported package manager (npm, yarn, bun) was found on PATH.",
            code="PACKAGE_MANAGER_MISSING",
            hint=f"Install one of them. {hints}",
        )
    if len(detected) == 1 or not _is_interactive():
        return detected[0]
    choices = {pm.value: PACKAGE_MANAGER_CHOICES[pm.value] for pm in detected}
    selected = select_with_arrows(choices, "Choose a package manager", detected[0].value, console=console)
    return PackageManager(selected)


def resolve_tailwind(console: Console) -> TailwindVersion:
    if not _is_interactive():
        return TailwindVersion.V3
    selected = select_with_arrows(TAILWIND_CHOICES, "Choose a TailwindCSS version", TailwindVersion.V4.value, console=console)
    return TailwindVersion(selected)


def _prompt_project_name(project_directory: Optional[str]) -> str:
    if project_directory:
        return project_directory
    return typer.prompt("Enter project name", default="", show_default=False)


def _run_pipeline(
    spec: ProjectSpec,
    options: RunOptions,
    source: TemplateSource,
    tracker: StepTracker,
    *,
    skip_tls: bool,
    github_token: Optional[str],
) -> None:
    tracker.start("fetch", str(source))
    client = build_http_client(skip_tls=skip_tls)
    try:
        fetch_template(source, spec.target_path, client=client, github_token=github_token)
    except CreateAppError as exc:
        tracker.error("fetch", exc.message)
        raise
    finally:
        client.close()
    tracker.complete("fetch", str(source))

    tracker.start("manifest")
    try:
        patch_manifest(spec.target_path, spec.name, windows=options.is_windows)
    except CreateAppError as exc:
        tracker.error("manifest", exc.message)
        raise
    tracker.complete("manifest", f"name={spec.name}")

    run_setup(spec, options, build_setup_steps(options), tracker=tracker)


def _print_next_steps(console: Console, spec: ProjectSpec, options: RunOptions) -> None:
    pm = options.package_manager.value
    lines = [
        f"1. Go to the project folder: [cyan]cd {spec.directory}[/cyan]",
        f"2. Start the development server: [cyan]{pm} run dev[/cyan]",
        f"3. Build the production files: [cyan]{pm} run build[/cyan]",
    ]
    console.print()
    console.print(Panel("\n".join(lines), title="Next Steps", border_style="cyan", padding=(1, 2)))


def register_create_command(
    app: typer.Typer,
    *,
    console: Console,
    show_banner: Callable[[], None],
    version: str,
) -> None:
    """Attach the create command to ``app``."""

    def _version_callback(value: bool) -> None:
        if value:
            console.print(f"create-laju-app {version}")
            raise typer.Exit()

    @app.command(cls=BannerCommand, help=CREATE_COMMAND_DOC)
    def create(
        project_directory: Optional[str] = typer.Argument(None, help="Project directory name"),
        package_manager: Optional[str] = typer.Option(
            None, "--package-manager", "-p", help="Package manager to use: npm, yarn or bun"
        ),
        tailwind: Optional[str] = typer.Option(None, "--tailwind", "-t", help="TailwindCSS version: v3 or v4"),
        skip_tls: bool = typer.Option(False, "--skip-tls", help="Skip SSL/TLS verification (not recommended)"),
        debug: bool = typer.Option(False, "--debug", help="Show tracebacks and verbose logging on failure"),
        github_token: Optional[str] = typer.Option(
            None, "--github-token", help="GitHub token for the template download (or set GH_TOKEN/GITHUB_TOKEN)"
        ),
        show_version: bool = typer.Option(
            False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
        ),
    ) -> None:
        debug = debug or env_flag(DEBUG_ENV)
        configure_logging(debug)
        show_banner()

        try:
            pm_choice = parse_package_manager(package_manager) if package_manager else None
            tw_choice = parse_tailwind(tailwind) if tailwind else None

            spec = validate_project(_prompt_project_name(project_directory))
            source = resolve_template_source()
            options = RunOptions(
                package_manager=pm_choice or resolve_package_manager(console),
                tailwind=tw_choice or resolve_tailwind(console),
            )
        except CreateAppError as exc:
            report_failure(console, exc, debug=debug)
            raise typer.Exit(exc.exit_code)

        logger.debug("Resolved %s with %s", spec, options)
        console.print(f"Creating a new project in [green]{spec.target_path}[/green]...")
        console.print(f"[cyan]Package manager:[/cyan] {options.package_manager.value}")
        console.print(f"[cyan]TailwindCSS:[/cyan] {options.tailwind.value if options.tailwind else 'v3'}")

        tracker = StepTracker("Create Laju Project")
        tracker.add("fetch", "Download template")
        tracker.add("manifest", "Update package.json")
        for step in build_setup_steps(options):
            tracker.add(step.key, step.label)

        try:
            with Live(tracker.render(), console=console, refresh_per_second=8, transient=True) as live:
                tracker.attach_refresh(lambda: live.update(tracker.render()))
                _run_pipeline(spec, options, source, tracker, skip_tls=skip_tls, github_token=github_token)
        except CreateAppError as exc:
            console.print(tracker.render())
            report_failure(console, exc, debug=debug)
            raise typer.Exit(exc.exit_code)

        console.print(tracker.render())
        console.print("\n[bold green]Project created successfully![/bold green]")
        _print_next_steps(console, spec, options)
