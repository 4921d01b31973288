"""Git remote URL normalization for raw-file retrieval.

SSH shorthand remotes (``git@host:org/repo.git``) are rewritten to the HTTPS
form of the hosting site, and the trailing ``.git`` is dropped because raw
content redirects on common hosts do not accept it.
"""
from __future__ import annotations

import re

_SSH_PREFIX = re.compile(r"^([\w-]+:)?([\w-]+@)")
_SSH_PREFIX_STRIP = re.compile(r"^([\w-]+:)?([\w-]+@)?")
_HOST_SEPARATOR = re.compile(r"([\w.,-]+):")
_GIT_SUFFIX = re.compile(r"\.git$")


def needs_auth(url: str) -> bool:
    """Return True when ``url`` uses the ``[scheme:]user@host`` SSH shorthand."""
    return bool(_SSH_PREFIX.match(url or ""))


def normalize_remote(url: str, auth: bool) -> str:
    """Return the HTTPS base URL used to fetch raw files from ``url``.

    Args:
        url: Remote as declared in the Puppetfile.
        auth: Whether the remote was classified as needing authentication.

    Returns:
        Normalized URL without a ``.git`` suffix.
    """
    if auth:
        url = _SSH_PREFIX_STRIP.sub("", url, count=1)
        url = _HOST_SEPARATOR.sub(r"\1/", url, count=1)
        url = "https://" + url
    return _GIT_SUFFIX.sub("", url)


def raw_file_url(remote: str, ref: str, filename: str) -> str:
    """URL of ``filename`` at ``ref`` under a normalized remote."""
    return f"{remote.rstrip('/')}/raw/{ref}/{filename}"
