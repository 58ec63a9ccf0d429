"""Core contracts shared by resolvers, the load hook and the import finder.

Rules:
- a resolver reports success with `True`; anything else means "not found"
- the load hook reports `True` for loaded names and `None` for unknown ones,
  so it can stand in wherever a resolver is expected
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

ResolveResult = Optional[bool]
ResolutionHook = Callable[[str], ResolveResult]


@runtime_checkable
class Resolver(Protocol):
    """Anything that can load a dotted name."""

    def load(self, name: str) -> ResolveResult:
        ...


@runtime_checkable
class StaticInitializable(Protocol):
    """Capability of a class that declares a static initializer.

    `isinstance(cls, StaticInitializable)` only checks the attribute exists;
    use `is_static_initializable` for the exact-type, static-only check the
    load hook applies.
    """

    @staticmethod
    def __construct_static__() -> None:
        ...
