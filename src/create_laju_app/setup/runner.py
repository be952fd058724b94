"""Sequential execution of setup steps inside the new project directory."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Sequence

from create_laju_app.cli.ui import StepTracker
from create_laju_app.core.project import ProjectSpec, RunOptions
from create_laju_app.errors import StepError

logger = logging.getLogger(__name__)

__all__ = [
    "CommandResult",
    "SetupStep",
    "run_command",
    "run_setup",
    "working_directory",
]

StepAction = Callable[[ProjectSpec, RunOptions], None]


@dataclass(frozen=True)
class SetupStep:
    key: str
    label: str
    action: StepAction


@dataclass
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Temporarily chdir into ``path``; the previous cwd is always restored."""
    original = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(original)


def _tail(text: str, lines: int = 15) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])


def _resolve(command: Sequence[str]) -> list[str]:
    # npm/npx/yarn are .cmd shims on Windows and need an explicit path.
    argv = list(command)
    argv[0] = shutil.which(argv[0]) or argv[0]
    return argv


def run_command(step: str, command: Sequence[str] | str, *, timeout: int, shell: bool = False) -> CommandResult:
    """Run ``command`` in the current directory and raise ``StepError`` on failure."""
    display = command if isinstance(command, str) else " ".join(command)
    logger.info("[%s] %s (timeout %ss)", step, display, timeout)
    try:
        completed = subprocess.run(
            command if shell else _resolve(command),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
            shell=shell,
        )
    except FileNotFoundError as exc:
        raise StepError(
            f"Command not found: {display}",
            step=step,
            command=display,
            returncode=127,
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise StepError(
            f"Command timed out after {timeout}s: {display}",
            step=step,
            command=display,
        ) from exc

    result = CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    if result.returncode != 0:
        detail = _tail(result.stderr) or _tail(result.stdout)
        message = f"Command failed with exit code {result.returncode}: {display}"
        if detail:
            message = f"{message}\n{detail}"
        raise StepError(message, step=step, command=display, returncode=result.returncode)
    return result


def run_setup(
    spec: ProjectSpec,
    options: RunOptions,
    steps: Sequence[SetupStep],
    tracker: StepTracker | None = None,
) -> None:
    """Run ``steps`` in order inside the project directory.

    The first ``StepError`` aborts the remaining steps and propagates.
    """
    with working_directory(spec.target_path):
        for position, step in enumerate(steps):
            if tracker:
                tracker.start(step.key)
            try:
                step.action(spec, options)
            except StepError as exc:
                logger.debug("Step %s failed: %s", step.key, exc.message)
                if tracker:
                    tracker.error(step.key, exc.command)
                    for remaining in steps[position + 1 :]:
                        tracker.skip(remaining.key, "aborted")
                raise
            if tracker:
                tracker.complete(step.key)
