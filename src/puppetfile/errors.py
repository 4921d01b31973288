"""Exceptions raised while reading and resolving a Puppetfile."""

from typing import Iterable, Optional


class PuppetfileError(Exception):
    """Base class for all Puppetfile loading errors."""


class PuppetfileUnreadableError(PuppetfileError):
    """The Puppetfile does not exist or cannot be read."""


class CredentialsError(PuppetfileError):
    """Credentials file missing, unreadable or incomplete."""


class PuppetfileSyntaxError(PuppetfileError):
    """The Puppetfile could not be read as a list of directives."""

    def __init__(self, message: str, lineno: Optional[int] = None):
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class InvalidTitleError(PuppetfileError, ValueError):
    """A module title does not have an accepted shape."""

    def __init__(self, title: str, expected: str):
        self.title = title
        super().__init__(f"Module name {title} must match {expected}")


class NoMatchingImplementationError(PuppetfileError):
    """No module source accepts a declaration."""

    def __init__(self, title: str, options):
        self.title = title
        self.options = options
        super().__init__(f"No implementation for Module {title} with args {options!r}")


class UnhandledOptionsError(PuppetfileError, ValueError):
    """A git declaration carries option keys the resolver does not know."""

    def __init__(self, keys: Iterable[str], module: str):
        self.keys = sorted(keys)
        self.module = module
        super().__init__(f"Unhandled options {self.keys} specified for {module}")


class DuplicateModuleNamesError(PuppetfileError):
    """Two or more declarations resolve to the same module name."""

    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__(
            "Puppetfiles cannot contain duplicate module names. "
            "Remove the duplicates of the following modules: " + " ".join(self.names)
        )
