"""Ordered list of resolution hooks owned by the application.

A `ResolverChain` is passed explicitly to whoever needs to register or run
hooks, instead of living in process-wide state.
"""

from __future__ import annotations

from construct_static.core.introspection import validate_name
from construct_static.core.types import ResolutionHook
from construct_static.observability.logger import get_logger

logger = get_logger(__name__)


class ResolverChain:
    """Runs registered hooks in order until one reports the name as loaded."""

    def __init__(self, hooks: list[ResolutionHook] | None = None) -> None:
        self._hooks: list[ResolutionHook] = []
        for hook in hooks or []:
            self.register(hook)

    def register(self, hook: ResolutionHook, *, prepend: bool = False) -> None:
        """Add `hook`; registering an already present hook is a no-op."""

        if not callable(hook):
            raise TypeError("Resolution hook must be callable")
        if hook in self._hooks:
            return
        if prepend:
            self._hooks.insert(0, hook)
        else:
            self._hooks.append(hook)
        logger.debug("Registered resolution hook %r (prepend=%s)", hook, prepend)

    def unregister(self, hook: ResolutionHook) -> bool:
        if hook not in self._hooks:
            return False
        self._hooks.remove(hook)
        logger.debug("Unregistered resolution hook %r", hook)
        return True

    def hooks(self) -> list[ResolutionHook]:
        return list(self._hooks)

    def clear(self) -> list[ResolutionHook]:
        """Remove every hook and return the removed ones, in order."""

        removed = self._hooks
        self._hooks = []
        return removed

    def resolve(self, name: str) -> bool:
        validate_name(name)
        # Hooks may register or unregister others while running.
        for hook in list(self._hooks):
            if hook(name) is True:
                return True
        return False

    def __len__(self) -> int:
        return len(self._hooks)

    def __contains__(self, hook: object) -> bool:
        return hook in self._hooks
