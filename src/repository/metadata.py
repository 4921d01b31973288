"""Dependency metadata discovery for git-hosted modules.

Looks for ``metadata.json`` at the requested ref and falls back to
``.fixtures.yml`` when that file cannot be retrieved. Both formats are
normalized into the same Dependencies variant.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import yaml

from constants import Constants
from common.credentials import Credentials
from common.http_client import fetch_text
from common.logging_utils import extra_context, is_debug_enabled
from puppetfile.models import Dependencies, DependencyEdge, NoDependencies, dependencies_from

from .url_normalize import raw_file_url

logger = logging.getLogger(__name__)


def no_deps_message(title: str, ref: str) -> str:
    return f"No dependencies found for {title} at ref: {ref}"


def _metadata_edges(raw: Any) -> List[DependencyEdge]:
    if not isinstance(raw, dict):
        return []
    deps = raw.get("dependencies")
    if not isinstance(deps, list):
        return []
    edges = []
    for dep in deps:
        if isinstance(dep, dict) and dep.get("name"):
            edges.append(DependencyEdge(dep["name"], dep.get("version_requirement") or ""))
    return edges


def _fixtures_edges(raw: Any) -> List[DependencyEdge]:
    if not isinstance(raw, dict):
        return []
    fixtures = raw.get("fixtures")
    if not isinstance(fixtures, dict):
        return []
    forge_modules = fixtures.get("forge_modules")
    if not isinstance(forge_modules, dict):
        return []
    edges = []
    for value in forge_modules.values():
        if isinstance(value, dict) and value.get("repo"):
            edges.append(DependencyEdge(str(value["repo"]), str(value.get("ref") or "")))
        elif isinstance(value, str) and value:
            # short form: "key: owner/name", no ref
            edges.append(DependencyEdge(value, ""))
    return edges


def parse_metadata(data: str, title: str, ref: str) -> Dependencies:
    """Normalize a metadata.json document."""
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as exc:
        logger.warning("Couldn't decode metadata.json for %s at %s: %s", title, ref, exc)
        raw = None
    return dependencies_from(_metadata_edges(raw), no_deps_message(title, ref))


def parse_fixtures(data: str, title: str, ref: str) -> Dependencies:
    """Normalize a .fixtures.yml document."""
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        logger.warning("Couldn't decode .fixtures.yml for %s at %s: %s", title, ref, exc)
        raw = None
    return dependencies_from(_fixtures_edges(raw), no_deps_message(title, ref))


def fetch_dependencies(
    title: str,
    url: str,
    ref: str,
    credentials: Optional[Credentials] = None,
) -> Dependencies:
    """Retrieve and normalize dependency metadata for a git-hosted module.

    Args:
        title: Module title, used in the sentinel message.
        url: Normalized remote (see url_normalize.normalize_remote).
        ref: Branch, tag or commit to read from.
        credentials: Sent as basic auth when given.

    Returns:
        DependenciesFound, or NoDependencies when neither file yields edges.
    """
    metadata_url = raw_file_url(url, ref, Constants.METADATA_FILE)
    body = fetch_text(metadata_url, context="git", credentials=credentials)
    if body is not None:
        return parse_metadata(body, title, ref)

    if is_debug_enabled(logger):
        logger.debug(
            "metadata.json unavailable; trying fixtures",
            extra=extra_context(
                event="decision",
                component="metadata",
                action="fallback",
                target=title,
                ref=ref
            )
        )
    fixtures_url = raw_file_url(url, ref, Constants.FIXTURES_FILE)
    body = fetch_text(fixtures_url, context="git", credentials=credentials)
    if body is not None:
        return parse_fixtures(body, title, ref)

    logger.warning("No dependency metadata retrievable for %s at ref %s", title, ref)
    return NoDependencies(no_deps_message(title, ref))
