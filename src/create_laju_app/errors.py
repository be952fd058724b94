"""Error taxonomy for create-laju-app.

Every failure in the pipeline is terminal and maps to exit code 1. The
command layer renders ``message`` and ``hint`` and decides whether to add a
traceback.
"""

from __future__ import annotations

__all__ = [
    "CreateAppError",
    "UserInputError",
    "PreconditionError",
    "TemplateFetchError",
    "ManifestError",
    "StepError",
]


class CreateAppError(Exception):
    """Base error carrying a stable code and an optional remediation hint."""

    exit_code = 1
    title = "Error"

    def __init__(self, message: str, *, code: str = "ERROR", hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint


class UserInputError(CreateAppError):
    """Missing or malformed user input (name, flag value, template slug)."""

    title = "Invalid Input"


class PreconditionError(CreateAppError):
    """Environment is not ready (directory exists, tool missing)."""

    title = "Precondition Failed"


class TemplateFetchError(CreateAppError):
    """Template download or extraction failed."""

    title = "Template Fetch Failed"


class ManifestError(CreateAppError):
    """package.json could not be read or is not a JSON object."""

    title = "Manifest Error"


class StepError(CreateAppError):
    """External setup command exited non-zero or timed out."""

    title = "Setup Failed"

    def __init__(
        self,
        message: str,
        *,
        step: str,
        command: str,
        returncode: int | None = None,
        hint: str | None = None,
    ):
        super().__init__(message, code="STEP_FAILED", hint=hint)
        self.step = step
        self.command = command
        self.returncode = returncode
