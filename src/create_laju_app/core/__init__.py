"""Core utilities and configuration exports."""

from .config import (
    BANNER,
    DEFAULT_TEMPLATE_REPO,
    PACKAGE_MANAGER_CHOICES,
    TAILWIND_CHOICES,
)
from .project import PackageManager, ProjectSpec, RunOptions, TailwindVersion

__all__ = [
    "BANNER",
    "DEFAULT_TEMPLATE_REPO",
    "PACKAGE_MANAGER_CHOICES",
    "TAILWIND_CHOICES",
    "PackageManager",
    "ProjectSpec",
    "RunOptions",
    "TailwindVersion",
]
