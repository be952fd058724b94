"""Detection of external command-line tools on PATH."""

from __future__ import annotations

import logging
import shutil
from typing import Iterable

from create_laju_app.core.project import PackageManager

logger = logging.getLogger(__name__)

__all__ = ["check_tool", "detect_package_managers"]


def check_tool(tool: str) -> bool:
    """Return True if ``tool`` resolves to an executable on PATH."""
    found = shutil.which(tool)
    logger.debug("which(%s) -> %s", tool, found)
    return found is not None


def detect_package_managers(candidates: Iterable[PackageManager] = tuple(PackageManager)) -> list[PackageManager]:
    """Return the package managers that are executable, in preference order."""
    return [pm for pm in candidates if check_tool(pm.value)]
