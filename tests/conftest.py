from __future__ import annotations

import io
import json
import tarfile
from pathlib import Path
from typing import Callable

import httpx
import pytest

TEMPLATE_MANIFEST = {
    "name": "laju",
    "version": "1.4.2",
    "description": "Laju template",
    "scripts": {
        "dev": "clear && npx concurrently \"vite\" \"npx nodemon\"",
        "build": "rm -rf build && vite build && tsc",
    },
    "dependencies": {"knex": "^3.1.0"},
}


def build_tarball(files: dict[str, str], root: str = "laju-main") -> bytes:
    """Gzipped tarball shaped like a GitHub archive download."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        root_info = tarfile.TarInfo(root)
        root_info.type = tarfile.DIRTYPE
        root_info.mode = 0o755
        tar.addfile(root_info)
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"{root}/{name}")
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


@pytest.fixture()
def template_manifest() -> dict:
    return json.loads(json.dumps(TEMPLATE_MANIFEST))


@pytest.fixture()
def template_files() -> dict[str, str]:
    return {
        "package.json": json.dumps(TEMPLATE_MANIFEST, indent=2),
        ".env.example": "DB_CONNECTION=sqlite\n",
        "app/server.ts": "console.log('laju')\n",
    }


@pytest.fixture()
def template_tarball(template_files: dict[str, str]) -> bytes:
    return build_tarball(template_files)


@pytest.fixture()
def mock_client_factory() -> Callable[..., tuple[httpx.Client, list[httpx.Request]]]:
    """Build an httpx client whose requests are answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]):
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        return httpx.Client(transport=httpx.MockTransport(recording)), seen

    return factory


@pytest.fixture()
def write_template(template_files: dict[str, str]) -> Callable[[Path], Path]:
    """Materialize the template on disk the way a successful fetch would."""

    def writer(target: Path) -> Path:
        target.mkdir(parents=True)
        for name, content in template_files.items():
            path = target / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return target / "package.json"

    return writer


@pytest.fixture()
def tarball_builder() -> Callable[..., bytes]:
    return build_tarball
