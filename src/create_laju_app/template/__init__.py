"""Template fetching and manifest patching."""

from .fetcher import (
    TemplateSource,
    build_http_client,
    fetch_template,
    parse_repo_slug,
    resolve_template_source,
)
from .manifest import ManifestPatch, patch_manifest

__all__ = [
    "ManifestPatch",
    "TemplateSource",
    "build_http_client",
    "fetch_template",
    "parse_repo_slug",
    "patch_manifest",
    "resolve_template_source",
]
