"""Post-clone setup: install, env file, migrations."""

from .runner import SetupStep, run_command, run_setup, working_directory
from .steps import build_setup_steps

__all__ = ["SetupStep", "build_setup_steps", "run_command", "run_setup", "working_directory"]
