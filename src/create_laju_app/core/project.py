"""Resolved inputs for a single create run."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

__all__ = [
    "PackageManager",
    "TailwindVersion",
    "ProjectSpec",
    "RunOptions",
    "directory_name_for",
]


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    BUN = "bun"


class TailwindVersion(str, Enum):
    V3 = "v3"
    V4 = "v4"


def directory_name_for(name: str) -> str:
    """Directory a project name materializes into (``@scope/app`` -> ``app``)."""
    if name.startswith("@") and "/" in name:
        return name.split("/", 1)[1]
    return name


@dataclass(frozen=True)
class ProjectSpec:
    """Project name plus the absolute directory it will be created in."""

    name: str
    target_path: Path

    @classmethod
    def from_name(cls, name: str, base_dir: Path | None = None) -> "ProjectSpec":
        base = base_dir if base_dir is not None else Path.cwd()
        return cls(name=name, target_path=(base / directory_name_for(name)).resolve())

    @property
    def directory(self) -> str:
        return self.target_path.name


@dataclass(frozen=True)
class RunOptions:
    """Choices that shape the setup steps."""

    package_manager: PackageManager = PackageManager.NPM
    tailwind: TailwindVersion | None = None
    platform: str = field(default_factory=lambda: sys.platform)

    @property
    def is_windows(self) -> bool:
        return self.platform == "win32"

    @property
    def runs_tailwind_upgrade(self) -> bool:
        return self.tailwind is TailwindVersion.V4
