"""Data models for Puppetfile declarations and resolved modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

# Declaration options: absent, a version string (or "latest"), or an attribute map.
Options = Union[None, str, Dict[str, Any]]


@dataclass(frozen=True)
class ModuleDeclaration:
    """A ``mod`` line as read from the Puppetfile."""
    title: str
    options: Options = None
    lineno: Optional[int] = None


@dataclass(frozen=True)
class ForgeDirective:
    """A ``forge`` line overriding the registry location."""
    location: str
    lineno: Optional[int] = None


Directive = Union[ModuleDeclaration, ForgeDirective]


@dataclass(frozen=True)
class ResolvedIdentity:
    """Owner/name split of a module title."""
    owner: Optional[str]
    name: str


@dataclass(frozen=True)
class DependencyEdge:
    """A declared dependency and its version constraint (or git ref)."""
    name: str
    requirement: str

    def as_row(self) -> str:
        return f"{self.name} {self.requirement}".rstrip()


@dataclass(frozen=True)
class DependenciesFound:
    """Dependency metadata was found and has at least one entry."""
    edges: Tuple[DependencyEdge, ...]

    found = True

    def entries(self) -> List[str]:
        return [edge.as_row() for edge in self.edges]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found": True,
            "dependencies": [{"name": e.name, "requirement": e.requirement} for e in self.edges],
        }


@dataclass(frozen=True)
class NoDependencies:
    """No dependency could be determined; ``reason`` says why."""
    reason: str

    found = False

    def entries(self) -> List[str]:
        return [self.reason]

    def to_dict(self) -> Dict[str, Any]:
        return {"found": False, "reason": self.reason}


Dependencies = Union[DependenciesFound, NoDependencies]


def dependencies_from(edges, sentinel: str) -> Dependencies:
    """Return DependenciesFound for a non-empty edge list, else the sentinel."""
    edges = tuple(edges)
    if edges:
        return DependenciesFound(edges)
    return NoDependencies(sentinel)


@dataclass(frozen=True)
class ModuleRecord:
    """Fields shared by every resolved module."""
    title: str
    owner: Optional[str]
    name: str
    dependencies: Optional[Dependencies] = field(default=None, compare=False)

    source = "unknown"

    @property
    def resolved(self) -> bool:
        return self.dependencies is not None

    def location(self) -> str:
        """Short human-readable pointer to where the module comes from."""
        return ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "source": self.source,
            "owner": self.owner,
            "name": self.name,
        }
        data.update(self._extra_fields())
        if self.dependencies is not None:
            data.update(self.dependencies.to_dict())
        return data

    def _extra_fields(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True)
class ForgeModule(ModuleRecord):
    """A module resolved by version from a Forge registry."""
    version_spec: Optional[str] = None
    slug: str = ""

    source = "forge"

    def location(self) -> str:
        return self.slug

    def _extra_fields(self) -> Dict[str, Any]:
        return {"version": self.version_spec, "slug": self.slug}


@dataclass(frozen=True)
class GitModule(ModuleRecord):
    """A module resolved from a git repository at a ref."""
    remote_url: str = ""
    ref: str = ""
    uses_auth: bool = False

    source = "git"

    def location(self) -> str:
        return f"{self.remote_url}@{self.ref}"

    def _extra_fields(self) -> Dict[str, Any]:
        return {"url": self.remote_url, "ref": self.ref, "uses_auth": self.uses_auth}
