"""Credential holders and the credentials file reader.

Secrets are wrapped as soon as they are read so that printing, logging or
dumping a Credentials object never shows the underlying values.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

from puppetfile.errors import CredentialsError

logger = logging.getLogger(__name__)

PLACEHOLDER = "<secret>"

_USER_LINE = re.compile(r"^user:\s*(.*)$")
_PASS_LINE = re.compile(r"^pass:\s*(.*)$")


class Secret:
    """Opaque wrapper around a secret string.

    The value is only available through ``reveal()``; every other rendering
    path returns a fixed placeholder.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = value

    def reveal(self) -> str:
        """Return the wrapped value. Use only for outbound authentication."""
        return self._value

    def __str__(self) -> str:
        return PLACEHOLDER

    def __repr__(self) -> str:
        return PLACEHOLDER

    def __format__(self, format_spec: str) -> str:
        return format(PLACEHOLDER, format_spec)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __copy__(self) -> "Secret":
        return self

    def __deepcopy__(self, memo) -> "Secret":
        return self

    def __reduce__(self):
        raise TypeError("Secret values cannot be serialized")


@dataclass(frozen=True)
class Credentials:
    """Username/password pair used for git hosts that need authentication."""

    user: Secret
    password: Secret

    def is_complete(self) -> bool:
        return bool(self.user) and bool(self.password)


def parse_credentials(text: str) -> Credentials:
    """Parse ``user: <value>`` / ``pass: <value>`` lines into Credentials.

    Raises:
        CredentialsError: if either key is missing.
    """
    user = password = None
    for line in text.splitlines():
        match = _USER_LINE.match(line)
        if match:
            user = Secret(match.group(1).strip())
            continue
        match = _PASS_LINE.match(line)
        if match:
            password = Secret(match.group(1).strip())
    if user is None:
        raise CredentialsError("user not found")
    if password is None:
        raise CredentialsError("pass not found")
    return Credentials(user=user, password=password)


def load_credentials(path: str) -> Credentials:
    """Read and parse a credentials file.

    Raises:
        CredentialsError: if the file is missing, unreadable or incomplete.
    """
    if not os.access(path, os.R_OK):
        raise CredentialsError(f"{path} is missing or unreadable")
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise CredentialsError(f"{path} is missing or unreadable: {exc}") from exc
    logger.debug("Loaded credentials from %s", path)
    return parse_credentials(text)
