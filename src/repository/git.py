"""Git source: modules declared with a ``git`` remote."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from constants import Constants, ModuleSources
from common.credentials import Credentials
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from puppetfile.errors import UnhandledOptionsError
from puppetfile.models import GitModule, ModuleRecord, Options
from puppetfile.source import ModuleSource, ResolutionContext
from puppetfile.title import parse_qualified_title

from . import metadata
from .url_normalize import needs_auth, normalize_remote

logger = logging.getLogger(__name__)

REF_OPTIONS = ("branch", "tag", "commit", "ref")
KNOWN_OPTIONS = ("git", "default_branch") + REF_OPTIONS


def parse_options(options: Dict[str, Any], module: str) -> str:
    """Validate git options and return the ref to read from.

    The first of branch, tag, commit, ref that is present wins; the default
    is ``master``. ``default_branch`` is accepted and ignored.

    Raises:
        UnhandledOptionsError: when unknown keys are present.
    """
    unhandled = [key for key in options if key not in KNOWN_OPTIONS]
    if unhandled:
        raise UnhandledOptionsError(unhandled, module)
    for key in REF_OPTIONS:
        if key in options:
            return str(options[key])
    return Constants.DEFAULT_REF


class GitSource(ModuleSource):
    """Modules read straight from a git hosting site."""

    @property
    def kind(self) -> ModuleSources:
        return ModuleSources.GIT

    def matches(self, title: str, options: Options, credentials: Optional[Credentials]) -> bool:
        return isinstance(options, dict) and "git" in options

    def build(self, title: str, options: Options) -> GitModule:
        identity = parse_qualified_title(title)
        options = dict(options or {})
        ref = parse_options(options, identity.name)
        remote = str(options["git"])
        auth = needs_auth(remote)
        return GitModule(
            title=title,
            owner=identity.owner,
            name=identity.name,
            remote_url=normalize_remote(remote, auth),
            ref=ref,
            uses_auth=auth,
        )

    def resolve(self, record: ModuleRecord, context: ResolutionContext) -> GitModule:
        credentials = context.credentials if record.uses_auth else None
        if is_debug_enabled(logger):
            logger.debug(
                "Resolving git module",
                extra=extra_context(
                    event="resolve",
                    component="git",
                    action="fetch_dependencies",
                    target=safe_url(record.remote_url),
                    ref=record.ref,
                    auth=record.uses_auth
                )
            )
        deps = metadata.fetch_dependencies(record.title, record.remote_url, record.ref, credentials)
        return replace(record, dependencies=deps)
