"""Ordered precondition checks run before anything touches the disk or network."""

from __future__ import annotations

import re

from create_laju_app.core.config import GIT_INSTALL_URL
from create_laju_app.core.project import ProjectSpec
from create_laju_app.core.tool_checker import check_tool
from create_laju_app.errors import PreconditionError, UserInputError

__all__ = [
    "PROJECT_NAME_PATTERN",
    "validate_project_name",
    "check_target_available",
    "check_git_available",
    "validate_project",
]

PROJECT_NAME_PATTERN = re.compile(r"^(?:@[a-z0-9][a-z0-9-]*/)?[a-z0-9][a-z0-9-]*$")


def validate_project_name(name: str | None) -> str:
    """Return the stripped name or raise ``UserInputError``.

    Pure: never consults the filesystem.
    """
    candidate = (name or "").strip()
    if not candidate:
        raise UserInputError(
            "Project name is required to continue.",
            code="EMPTY_NAME",
        )
    if not PROJECT_NAME_PATTERN.match(candidate):
        raise UserInputError(
            f"Invalid project name '{candidate}'.",
            code="INVALID_NAME",
            hint="Use lowercase letters, digits and hyphens, starting with a letter or digit "
            "(optionally scoped, e.g. @scope/my-app).",
        )
    return candidate


def check_target_available(spec: ProjectSpec) -> None:
    if spec.target_path.exists():
        raise PreconditionError(
            f"Directory {spec.directory} already exists.",
            code="DIRECTORY_EXISTS",
            hint="Choose another name or remove the existing directory.",
        )


def check_git_available() -> None:
    if not check_tool("git"):
        raise PreconditionError(
            "Git is required but was not found on PATH.",
            code="GIT_MISSING",
            hint=f"Install git from {GIT_INSTALL_URL} and try again.",
        )


def validate_project(name: str | None) -> ProjectSpec:
    """Run every check in order and return the validated spec."""
    valid_name = validate_project_name(name)
    spec = ProjectSpec.from_name(valid_name)
    check_target_available(spec)
    check_git_available()
    return spec
