"""Project-wide exception hierarchy.

Resolution failures are reported as return values, never raised. Exceptions
raised by static initializers are not wrapped and reach the caller as-is.
"""

from __future__ import annotations


class ConstructStaticError(Exception):
    """Root exception for construct_static errors."""


class ReflectionError(ConstructStaticError, LookupError):
    """Raised when a name is malformed or cannot be located after loading."""

    def __init__(self, name: str, message: str):
        super().__init__(f"{message}: {name!r}")
        self.name = name
