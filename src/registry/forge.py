"""Puppet Forge client: release metadata lookup for registry-hosted modules."""

from __future__ import annotations

import json
import logging
import re
import sys
from dataclasses import replace
from typing import Any, Dict, List, Optional

import requests
import semantic_version

from constants import Constants, ExitCodes, ModuleSources
from common.credentials import Credentials
from common.http_client import safe_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from puppetfile.models import DependencyEdge, ForgeModule, ModuleRecord, Options, dependencies_from
from puppetfile.source import ModuleSource, ResolutionContext
from puppetfile.title import parse_title

logger = logging.getLogger(__name__)

_FORGE_SHAPE = re.compile(r"\w+[/-]\w+")
_SLASH_TITLE = re.compile(r"\A(\w+)/(\w+)\Z")


def valid_version(expected_version: Options) -> bool:
    """Return True for None, "latest", or a syntactically valid semantic version."""
    if expected_version is None or expected_version == Constants.LATEST:
        return True
    if not isinstance(expected_version, str):
        return False
    return semantic_version.validate(expected_version)


def forge_base_url(location: str) -> str:
    """Return an absolute base URL for a forge location (bare hosts get https)."""
    location = location.strip().rstrip("/")
    if "://" not in location:
        location = "https://" + location
    return location


def release_url(location: str, record: ForgeModule) -> str:
    """API URL for the record's release (or the module, for latest)."""
    base = forge_base_url(location)
    if record.version_spec in (None, Constants.LATEST):
        return f"{base}{Constants.FORGE_MODULES_PATH}{record.owner}-{record.name}"
    return f"{base}{Constants.FORGE_RELEASES_PATH}{record.slug}"


def _fatal(slug: str, reason: Any) -> None:
    logger.error("Error finding forge module %s: %s", slug, reason)
    sys.exit(ExitCodes.CONNECTION_ERROR.value)


def _release_metadata(payload: Dict[str, Any], latest: bool) -> Dict[str, Any]:
    """Extract the metadata mapping from a release or module payload."""
    if latest:
        payload = payload.get("current_release") or {}
    metadata = payload.get("metadata") if isinstance(payload, dict) else None
    return metadata if isinstance(metadata, dict) else {}


def find_deps(metadata: Dict[str, Any]) -> List[DependencyEdge]:
    """Map forge ``metadata.dependencies`` to edges, preserving order."""
    deps = metadata.get("dependencies") or []
    edges = []
    for dep in deps:
        if not isinstance(dep, dict) or not dep.get("name"):
            continue
        edges.append(DependencyEdge(dep["name"], dep.get("version_requirement") or ""))
    return edges


def fetch_release(record: ForgeModule, location: str) -> Dict[str, Any]:
    """GET the release metadata for ``record`` from the forge at ``location``.

    Any failure is fatal: the error is logged and the process exits with
    ExitCodes.CONNECTION_ERROR.
    """
    url = release_url(location, record)
    latest = record.version_spec in (None, Constants.LATEST)
    try:
        res = safe_get(url, context="forge", exit_on_error=False, headers={"Accept": "application/json"})
    except requests.Timeout:
        _fatal(record.slug, f"request timed out after {Constants.REQUEST_TIMEOUT} seconds")
    except requests.RequestException as exc:
        _fatal(record.slug, exc)

    if res.status_code >= 400:
        _fatal(record.slug, f"HTTP {res.status_code} from {safe_url(url)}")

    try:
        payload = json.loads(res.text)
    except json.JSONDecodeError as exc:
        _fatal(record.slug, f"invalid JSON response: {exc}")

    if not isinstance(payload, dict):
        _fatal(record.slug, "unexpected response shape")
    return _release_metadata(payload, latest)


class ForgeSource(ModuleSource):
    """Modules pinned to a Forge release by version."""

    @property
    def kind(self) -> ModuleSources:
        return ModuleSources.FORGE

    def matches(self, title: str, options: Options, credentials: Optional[Credentials]) -> bool:
        if not isinstance(title, str) or not _FORGE_SHAPE.search(title):
            return False
        return valid_version(options)

    def build(self, title: str, options: Options) -> ForgeModule:
        slash = _SLASH_TITLE.match(title)
        canonical = f"{slash.group(1)}-{slash.group(2)}" if slash else title
        identity = parse_title(canonical)
        version = options
        slug = f"{canonical}-{version or Constants.LATEST}"
        return ForgeModule(
            title=title,
            owner=identity.owner,
            name=identity.name,
            version_spec=version,
            slug=slug,
        )

    def resolve(self, record: ModuleRecord, context: ResolutionContext) -> ForgeModule:
        if is_debug_enabled(logger):
            logger.debug(
                "Resolving forge module",
                extra=extra_context(
                    event="resolve",
                    component="forge",
                    action="fetch_release",
                    target=record.slug,
                    forge=context.forge
                )
            )
        metadata = fetch_release(record, context.forge)
        deps = dependencies_from(find_deps(metadata), f'No dependencies found for "{record.slug}"')
        return replace(record, dependencies=deps)
