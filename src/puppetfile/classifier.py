"""Selects the module source responsible for a declaration."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from common.credentials import Credentials
from common.logging_utils import extra_context, is_debug_enabled

from .errors import NoMatchingImplementationError
from .models import ModuleRecord, Options
from .source import ModuleSource

logger = logging.getLogger(__name__)


def default_sources() -> List[ModuleSource]:
    """Forge first, then git, matching how Puppetfiles are usually written."""
    # pylint: disable=import-outside-toplevel
    from registry.forge import ForgeSource
    from repository.git import GitSource
    return [ForgeSource(), GitSource()]


class ModuleClassifier:
    """Ordered list of module sources; the first match wins."""

    def __init__(self, sources: Optional[Sequence[ModuleSource]] = None):
        self.sources = tuple(sources) if sources is not None else tuple(default_sources())

    def select(self, title: str, options: Options, credentials: Optional[Credentials] = None) -> ModuleSource:
        """Return the first source whose predicate accepts the declaration.

        Raises:
            NoMatchingImplementationError: when no source matches.
        """
        for source in self.sources:
            if source.matches(title, options, credentials):
                if is_debug_enabled(logger):
                    logger.debug(
                        "Classified module",
                        extra=extra_context(
                            event="decision",
                            component="classifier",
                            action="select",
                            target=title,
                            outcome=source.kind.value
                        )
                    )
                return source
        raise NoMatchingImplementationError(title, options)

    def classify(self, title: str, options: Options, credentials: Optional[Credentials] = None) -> ModuleRecord:
        """Build the unresolved record for a declaration. No network access."""
        return self.select(title, options, credentials).build(title, options)
