"""In-place patching of the cloned template's package.json."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from create_laju_app.core.config import BASELINE_VERSION, MANIFEST_FILENAME, WINDOWS_SCRIPTS
from create_laju_app.errors import ManifestError

logger = logging.getLogger(__name__)

__all__ = ["ManifestPatch", "patch_manifest"]


@dataclass
class ManifestPatch:
    """package.json contents held in memory between load and write."""

    path: Path
    data: dict[str, Any]

    @classmethod
    def load(cls, project_path: Path) -> "ManifestPatch":
        path = project_path / MANIFEST_FILENAME
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ManifestError(f"{MANIFEST_FILENAME} not found in {project_path}", code="MANIFEST_MISSING") from exc
        except json.JSONDecodeError as exc:
            raise ManifestError(f"{MANIFEST_FILENAME} is not valid JSON: {exc}", code="MANIFEST_INVALID") from exc
        except UnicodeDecodeError as exc:
            raise ManifestError(f"{MANIFEST_FILENAME} is not valid UTF-8: {exc}", code="MANIFEST_INVALID") from exc
        if not isinstance(data, dict):
            raise ManifestError(f"{MANIFEST_FILENAME} must contain a JSON object", code="MANIFEST_INVALID")
        return cls(path=path, data=data)

    def apply(self, name: str, version: str = BASELINE_VERSION) -> None:
        self.data["name"] = name
        self.data["version"] = version

    def apply_windows_scripts(self) -> None:
        self.data["scripts"] = dict(WINDOWS_SCRIPTS)

    def dumps(self) -> str:
        return json.dumps(self.data, indent=2, ensure_ascii=False) + "\n"

    def write(self) -> None:
        self.path.write_text(self.dumps(), encoding="utf-8")


def patch_manifest(project_path: Path, name: str, *, windows: bool = False) -> ManifestPatch:
    """Rename the project, reset its version and write package.json back."""
    manifest = ManifestPatch.load(project_path)
    manifest.apply(name)
    if windows:
        manifest.apply_windows_scripts()
    manifest.write()
    logger.debug("Patched %s (name=%s, windows=%s)", manifest.path, name, windows)
    return manifest
