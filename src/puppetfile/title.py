"""Module title parsing.

A title is either a bare module name (``stdlib``) or an owner-qualified
name (``puppetlabs-stdlib``).
"""

import re

from .errors import InvalidTitleError
from .models import ResolvedIdentity

_BARE = re.compile(r"\A(\w+)\Z")
_QUALIFIED = re.compile(r"\A(\w+)-(\w+)\Z")


def parse_title(title: str) -> ResolvedIdentity:
    """Split ``title`` into (owner, name), accepting bare or qualified names."""
    if not isinstance(title, str):
        raise InvalidTitleError(repr(title), "either 'modulename' or 'owner-modulename'")
    match = _BARE.match(title)
    if match:
        return ResolvedIdentity(owner=None, name=match.group(1))
    match = _QUALIFIED.match(title)
    if match:
        return ResolvedIdentity(owner=match.group(1), name=match.group(2))
    raise InvalidTitleError(title, "either 'modulename' or 'owner-modulename'")


def parse_qualified_title(title: str) -> ResolvedIdentity:
    """Like parse_title, but the owner is mandatory."""
    match = _QUALIFIED.match(title) if isinstance(title, str) else None
    if not match:
        raise InvalidTitleError(title if isinstance(title, str) else repr(title), "'owner-modulename'")
    return ResolvedIdentity(owner=match.group(1), name=match.group(2))
