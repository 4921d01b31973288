"""Puppetfile loading: classify, resolve and collect every declared module."""

from __future__ import annotations

import logging
import os
from collections import Counter
from typing import Iterable, List, Optional

from constants import Constants
from common.credentials import Credentials
from common.logging_utils import extra_context, is_debug_enabled

from .classifier import ModuleClassifier
from .dsl import parse_puppetfile
from .errors import CredentialsError, DuplicateModuleNamesError, PuppetfileError, PuppetfileUnreadableError
from .models import Directive, ForgeDirective, ModuleDeclaration, ModuleRecord, Options
from .source import ResolutionContext

logger = logging.getLogger(__name__)


def find_duplicate_names(modules: Iterable[ModuleRecord]) -> List[str]:
    """Names used by more than one module, in order of first appearance."""
    modules = list(modules)
    counts = Counter(m.name for m in modules)
    dupes: List[str] = []
    for mod in modules:
        if counts[mod.name] > 1 and mod.name not in dupes:
            dupes.append(mod.name)
    return dupes


class Puppetfile:
    """A Puppetfile and the modules resolved from it.

    Modules are resolved as they are encountered, so a ``forge`` directive
    only affects the modules declared after it.
    """

    def __init__(
        self,
        puppetfile: Optional[str] = None,
        credentials: Optional[Credentials] = None,
        classifier: Optional[ModuleClassifier] = None,
        forge: Optional[str] = None,
    ):
        self.puppetfile = puppetfile or Constants.PUPPETFILE
        self.credentials = credentials
        self.classifier = classifier or ModuleClassifier()
        self.forge = forge or Constants.DEFAULT_FORGE
        self.modules: List[ModuleRecord] = []

    def load(self) -> List[ModuleRecord]:
        """Read the Puppetfile from disk and resolve every module in it.

        Raises:
            PuppetfileError: if the file is unreadable or any module fails
                validation; CredentialsError if credentials are incomplete.
        """
        if not os.access(self.puppetfile, os.R_OK) or not os.path.isfile(self.puppetfile):
            raise PuppetfileUnreadableError(f"{self.puppetfile} is missing or unreadable")
        if self.credentials is None or not self.credentials.is_complete():
            raise CredentialsError("Missing username or passwd")
        try:
            with open(self.puppetfile, encoding="utf-8") as fh:
                contents = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise PuppetfileUnreadableError(f"{self.puppetfile} is missing or unreadable: {exc}") from exc
        return self.load_text(contents)

    def load_text(self, contents: str) -> List[ModuleRecord]:
        """Resolve the modules declared in Puppetfile ``contents``."""
        return self.load_directives(parse_puppetfile(contents))

    def load_directives(self, directives: Iterable[Directive]) -> List[ModuleRecord]:
        """Process directives in order, then reject duplicate module names."""
        for directive in directives:
            if isinstance(directive, ForgeDirective):
                self.define_forge(directive.location)
            elif isinstance(directive, ModuleDeclaration):
                self.add_module(directive.title, directive.options)
            else:
                raise PuppetfileError(f"Unsupported directive {directive!r}")
        self.validate_no_duplicate_names()
        return self.modules

    def define_forge(self, location: str) -> None:
        logger.info("Using forge %s", location)
        self.forge = location

    def add_module(self, title: str, options: Options = None) -> ModuleRecord:
        """Classify, build and resolve one declaration and keep the result."""
        logger.info("Checking %s for dependencies...", title)
        source = self.classifier.select(title, options, self.credentials)
        record = source.build(title, options)
        context = ResolutionContext(forge=self.forge, credentials=self.credentials)
        record = source.resolve(record, context)
        if is_debug_enabled(logger):
            logger.debug(
                "Module resolved",
                extra=extra_context(
                    event="function_exit",
                    component="loader",
                    action="add_module",
                    target=title,
                    outcome="found" if record.dependencies.found else "not_found"
                )
            )
        self.modules.append(record)
        return record

    def validate_no_duplicate_names(self) -> None:
        """Raise DuplicateModuleNamesError if two modules share a name."""
        dupes = find_duplicate_names(self.modules)
        if dupes:
            raise DuplicateModuleNamesError(dupes)
