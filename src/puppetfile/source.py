"""Abstract base for module sources (forge, git)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from constants import Constants, ModuleSources
from common.credentials import Credentials

from .models import ModuleRecord, Options


@dataclass(frozen=True)
class ResolutionContext:
    """Per-lookup settings a source needs when it goes to the network."""
    forge: str = field(default_factory=lambda: Constants.DEFAULT_FORGE)
    credentials: Optional[Credentials] = None


class ModuleSource(ABC):
    """Matches declarations, builds records and resolves their dependencies.

    ``build`` is pure; every network call happens in ``resolve``.
    """

    @property
    @abstractmethod
    def kind(self) -> ModuleSources:
        """Source tag for this implementation."""

    @abstractmethod
    def matches(self, title: str, options: Options, credentials: Optional[Credentials]) -> bool:
        """Return True when this source handles the declaration."""

    @abstractmethod
    def build(self, title: str, options: Options) -> ModuleRecord:
        """Validate the declaration and return an unresolved record.

        Raises:
            PuppetfileError: for invalid titles or options.
        """

    @abstractmethod
    def resolve(self, record: ModuleRecord, context: ResolutionContext) -> ModuleRecord:
        """Return a copy of ``record`` with its dependencies filled in."""
