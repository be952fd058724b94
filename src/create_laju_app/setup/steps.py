"""Setup step definitions per package manager and platform."""

from __future__ import annotations

from create_laju_app.core.config import (
    ENV_COPY_TIMEOUT,
    INSTALL_TIMEOUT,
    MIGRATE_TIMEOUT,
    TAILWIND_UPGRADE_TIMEOUT,
)
from create_laju_app.core.project import PackageManager, ProjectSpec, RunOptions
from create_laju_app.setup.runner import SetupStep, run_command

__all__ = [
    "build_setup_steps",
    "env_copy_command",
    "install_command",
    "migrate_command",
    "tailwind_upgrade_command",
]

_EXEC_PREFIX: dict[PackageManager, list[str]] = {
    PackageManager.NPM: ["npx"],
    PackageManager.YARN: ["yarn"],
    PackageManager.BUN: ["bunx"],
}

_DLX_PREFIX: dict[PackageManager, list[str]] = {
    PackageManager.NPM: ["npx"],
    PackageManager.YARN: ["yarn", "dlx"],
    PackageManager.BUN: ["bunx"],
}


def install_command(pm: PackageManager) -> list[str]:
    return [pm.value, "install"]


def env_copy_command(options: RunOptions) -> str | list[str]:
    # ``copy`` is a cmd.exe builtin, so Windows goes through the shell.
    if options.is_windows:
        return "copy .env.example .env"
    return ["cp", ".env.example", ".env"]


def migrate_command(pm: PackageManager) -> list[str]:
    return [*_EXEC_PREFIX[pm], "knex", "migrate:latest"]


def tailwind_upgrade_command(pm: PackageManager) -> list[str]:
    return [*_DLX_PREFIX[pm], "@tailwindcss/upgrade", "--force"]


def _install(spec: ProjectSpec, options: RunOptions) -> None:
    run_command("install", install_command(options.package_manager), timeout=INSTALL_TIMEOUT)


def _copy_env(spec: ProjectSpec, options: RunOptions) -> None:
    command = env_copy_command(options)
    run_command("env", command, timeout=ENV_COPY_TIMEOUT, shell=isinstance(command, str))


def _migrate(spec: ProjectSpec, options: RunOptions) -> None:
    run_command("migrate", migrate_command(options.package_manager), timeout=MIGRATE_TIMEOUT)


def _upgrade_tailwind(spec: ProjectSpec, options: RunOptions) -> None:
    run_command("tailwind", tailwind_upgrade_command(options.package_manager), timeout=TAILWIND_UPGRADE_TIMEOUT)


def build_setup_steps(options: RunOptions) -> list[SetupStep]:
    """Ordered steps for ``options``; the Tailwind upgrade only for v4."""
    pm = options.package_manager.value
    steps = [
        SetupStep("install", f"Install dependencies ({pm})", _install),
        SetupStep("env", "Copy .env.example to .env", _copy_env),
        SetupStep("migrate", "Run database migrations", _migrate),
    ]
    if options.runs_tailwind_upgrade:
        steps.append(SetupStep("tailwind", "Upgrade to TailwindCSS 4", _upgrade_tailwind))
    return steps
