"""Static configuration for create-laju-app."""

from __future__ import annotations

import os

DEFAULT_TEMPLATE_REPO = "maulanashalihin/laju"
TEMPLATE_REPO_ENV = "CREATE_LAJU_TEMPLATE_REPO"
DEBUG_ENV = "CREATE_LAJU_DEBUG"

GIT_INSTALL_URL = "https://git-scm.com/downloads"

PACKAGE_MANAGER_CHOICES: dict[str, str] = {
    "npm": "Node Package Manager",
    "yarn": "Yarn",
    "bun": "Bun",
}

PACKAGE_MANAGER_INSTALL_URLS: dict[str, str] = {
    "npm": "https://nodejs.org/en/download",
    "yarn": "https://yarnpkg.com/getting-started/install",
    "bun": "https://bun.sh/docs/installation",
}

TAILWIND_CHOICES: dict[str, str] = {
    "v3": "TailwindCSS 3 (template default)",
    "v4": "TailwindCSS 4 (runs the official upgrade tool)",
}

MANIFEST_FILENAME = "package.json"
BASELINE_VERSION = "0.0.1"

# seconds
INSTALL_TIMEOUT = 300
ENV_COPY_TIMEOUT = 10
MIGRATE_TIMEOUT = 60
TAILWIND_UPGRADE_TIMEOUT = 300
DOWNLOAD_TIMEOUT = 60

WINDOWS_SCRIPTS: dict[str, str] = {
    "dev": 'cls && npx concurrently "vite" "npx nodemon"',
    "build": (
        "if exist build rmdir /s /q build && vite build && tsc"
        " && xcopy /s /e /i dist build && xcopy /s /e /i public build"
    ),
}

BANNER = """
                      -
           :+===+   =+
       ++++++++++++++
    =++++=      =+++
   +++=        +++=
  ++=        +++++
 ++        ++++++         +
 ==      =++++++++++++    -=
 =     =++++++++++++      ++
 =          ++++++        ++
  -        =++++       =+=
          =++++        +++
         =++=       -+++=
        ++++++++++++++=
       ++=+++++++++=
      ==
"""

TAGLINE = "Laju - create a new project from the official template"


def env_flag(name: str) -> bool:
    """Return True when the environment variable holds a truthy value."""
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


__all__ = [
    "BANNER",
    "BASELINE_VERSION",
    "DEBUG_ENV",
    "DEFAULT_TEMPLATE_REPO",
    "DOWNLOAD_TIMEOUT",
    "ENV_COPY_TIMEOUT",
    "GIT_INSTALL_URL",
    "INSTALL_TIMEOUT",
    "MANIFEST_FILENAME",
    "MIGRATE_TIMEOUT",
    "PACKAGE_MANAGER_CHOICES",
    "PACKAGE_MANAGER_INSTALL_URLS",
    "TAGLINE",
    "TAILWIND_CHOICES",
    "TAILWIND_UPGRADE_TIMEOUT",
    "TEMPLATE_REPO_ENV",
    "WINDOWS_SCRIPTS",
    "env_flag",
]
