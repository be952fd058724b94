"""degit-style template fetching: download a repository snapshot without history."""

from __future__ import annotations

import logging
import os
import ssl
import tarfile
import tempfile
from dataclasses import dataclass
from pathlib import Path

import httpx
import truststore

from create_laju_app.core.config import (
    DEFAULT_TEMPLATE_REPO,
    DOWNLOAD_TIMEOUT,
    MANIFEST_FILENAME,
    TEMPLATE_REPO_ENV,
)
from create_laju_app.errors import TemplateFetchError, UserInputError

logger = logging.getLogger(__name__)

__all__ = [
    "TemplateSource",
    "build_http_client",
    "fetch_template",
    "github_auth_headers",
    "parse_repo_slug",
    "resolve_template_source",
]


@dataclass(frozen=True)
class TemplateSource:
    owner: str
    repo: str
    ref: str = "HEAD"

    @property
    def archive_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}/archive/{self.ref}.tar.gz"

    def __str__(self) -> str:
        slug = f"{self.owner}/{self.repo}"
        return slug if self.ref == "HEAD" else f"{slug}#{self.ref}"


def parse_repo_slug(slug: str) -> TemplateSource:
    """Parse ``owner/repo[#ref]`` (the degit shorthand)."""
    text = slug.strip()
    ref = "HEAD"
    if "#" in text:
        text, ref = text.split("#", 1)
        if not ref:
            raise ValueError(f"Invalid template '{slug}'. Empty ref after '#'")
    parts = text.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid template '{slug}'. Expected format owner/repo[#ref]")
    return TemplateSource(owner=parts[0], repo=parts[1], ref=ref)


def resolve_template_source() -> TemplateSource:
    """Return the template to clone, honoring the environment override."""
    slug = os.environ.get(TEMPLATE_REPO_ENV) or DEFAULT_TEMPLATE_REPO
    try:
        return parse_repo_slug(slug)
    except ValueError as exc:
        raise UserInputError(
            f"{exc} (from {TEMPLATE_REPO_ENV}).",
            code="INVALID_TEMPLATE",
            hint=f"Set {TEMPLATE_REPO_ENV} to owner/repo[#ref], or unset it to use {DEFAULT_TEMPLATE_REPO}.",
        ) from None


def _github_token(cli_token: str | None = None) -> str | None:
    return ((cli_token or os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN") or "").strip()) or None


def github_auth_headers(cli_token: str | None = None) -> dict[str, str]:
    """Return Authorization header dict only when a non-empty token exists."""
    token = _github_token(cli_token)
    return {"Authorization": f"Bearer {token}"} if token else {}


def build_http_client(skip_tls: bool = False) -> httpx.Client:
    """HTTP client verifying against the OS trust store unless ``skip_tls``."""
    if skip_tls:
        return httpx.Client(verify=False)
    return httpx.Client(verify=truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT))


def _download(client: httpx.Client, source: TemplateSource, dest: Path, headers: dict[str, str]) -> None:
    logger.debug("Downloading %s", source.archive_url)
    with client.stream(
        "GET",
        source.archive_url,
        timeout=DOWNLOAD_TIMEOUT,
        follow_redirects=True,
        headers=headers,
    ) as response:
        if response.status_code != 200:
            raise TemplateFetchError(
                f"Could not download template {source} (HTTP {response.status_code}).",
                code="DOWNLOAD_FAILED",
                hint="Check the repository name and your network connection.",
            )
        with open(dest, "wb") as fh:
            for chunk in response.iter_bytes(chunk_size=8192):
                fh.write(chunk)


def _strip_root(name: str) -> str:
    parts = name.split("/", 1)
    return parts[1] if len(parts) == 2 else ""


def _extract(archive: Path, target_path: Path) -> int:
    """Extract ``archive`` into ``target_path`` dropping the top-level folder."""
    with tarfile.open(archive, "r:gz") as tar:
        members = []
        for member in tar.getmembers():
            stripped = _strip_root(member.name)
            if not stripped:
                continue
            member.name = stripped
            if member.islnk():
                member.linkname = _strip_root(member.linkname)
            members.append(member)
        tar.extractall(target_path, members=members, filter="data")
    return len(members)


def fetch_template(
    source: TemplateSource,
    target_path: Path,
    *,
    client: httpx.Client,
    github_token: str | None = None,
) -> Path:
    """Materialize ``source`` at ``target_path`` and return the manifest path.

    ``target_path`` must not exist. Nothing is cleaned up on failure apart
    from the temporary archive.
    """
    fd, tmp_name = tempfile.mkstemp(prefix="create-laju-", suffix=".tar.gz")
    os.close(fd)
    archive = Path(tmp_name)
    try:
        try:
            _download(client, source, archive, github_auth_headers(github_token))
        except httpx.HTTPError as exc:
            raise TemplateFetchError(
                f"Network error while downloading template {source}: {exc}",
                code="DOWNLOAD_FAILED",
                hint="Check your network connection or use --skip-tls behind an intercepting proxy.",
            ) from exc

        try:
            target_path.mkdir(parents=True)
        except OSError as exc:
            raise TemplateFetchError(
                f"Could not create {target_path}: {exc}",
                code="TARGET_UNAVAILABLE",
            ) from exc
        try:
            count = _extract(archive, target_path)
        except (tarfile.TarError, OSError) as exc:
            raise TemplateFetchError(
                f"Could not extract template {source}: {exc}",
                code="EXTRACT_FAILED",
            ) from exc
        logger.debug("Extracted %d entries into %s", count, target_path)
    finally:
        archive.unlink(missing_ok=True)

    manifest = target_path / MANIFEST_FILENAME
    if not manifest.is_file():
        raise TemplateFetchError(
            f"Template {source} does not contain {MANIFEST_FILENAME}.",
            code="MANIFEST_MISSING",
        )
    return manifest
