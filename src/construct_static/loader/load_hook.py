"""Load hook that runs static initializers right after a type is loaded.

A class opts in by declaring a zero-argument static initializer on itself::

    class Registry:
        entries: list[str] = []

        @classmethod
        def __construct_static__(cls) -> None:
            cls.entries.append("default")

Every successful resolution through `LoadHook.resolve` then runs that method
for the loaded class (or, for a module, for each class the module defines).
"""

from __future__ import annotations

import weakref
from typing import Any, Iterable

from construct_static.core.introspection import (
    defined_types,
    find_static_initializer,
    iter_declared_types,
    locate,
    validate_name,
)
from construct_static.core.settings import HookSettings
from construct_static.core.trace.trace_context import TraceContext
from construct_static.core.types import Resolver, ResolveResult
from construct_static.loader.chain import ResolverChain
from construct_static.observability.logger import get_logger

logger = get_logger(__name__)

# Types whose initializer has run, per initializer name. Shared by every hook
# so nested or repeated hooks never run the same initializer twice.
_CONSTRUCTED: dict[str, weakref.WeakSet[type]] = {}


class LoadHook:
    """Wrap a resolver and run static initializers on what it loads.

    Args:
        resolver: Object with `load(name) -> bool`. Its other public operations
            are re-exposed on the hook unchanged.
        replay_loaded: Run initializers for every class that is already alive.
            Defaults to `settings.hook.replay_loaded`.
        chain: Optional `ResolverChain` to install into. With `exclusive` the
            chain's existing hooks are removed first.
        settings: Global settings; `settings.hook` and `settings.observability`
            are read when present.
        forward: Names of resolver operations to re-expose. Defaults to the
            public callables of the resolver's class.
        initializer_name, once_per_type, exclusive: Per-instance overrides of
            the matching `settings.hook` fields.
    """

    def __init__(
        self,
        resolver: Resolver,
        replay_loaded: bool | None = None,
        *,
        chain: ResolverChain | None = None,
        settings: Any = None,
        forward: Iterable[str] | None = None,
        initializer_name: str | None = None,
        once_per_type: bool | None = None,
        exclusive: bool | None = None,
    ) -> None:
        if not callable(getattr(resolver, "load", None)):
            raise TypeError("Resolver must provide a callable load(name)")

        self.settings = settings
        hook_settings = getattr(settings, "hook", None) or HookSettings()

        self.initializer_name = initializer_name or hook_settings.initializer_name
        if not self.initializer_name.isidentifier():
            raise ValueError(f"Initializer name must be an identifier: {self.initializer_name!r}")
        self.once_per_type = (
            hook_settings.once_per_type if once_per_type is None else once_per_type
        )
        self.exclusive = hook_settings.exclusive if exclusive is None else exclusive

        self._resolver = resolver
        self._constructed = _CONSTRUCTED.setdefault(self.initializer_name, weakref.WeakSet())

        observability = getattr(settings, "observability", None)
        self.trace_file: str | None = None
        if observability is not None and observability.trace_enabled:
            self.trace_file = observability.trace_file

        self.forwarded_operations = self._expose_operations(resolver, forward)

        previous = chain.hooks() if chain is not None else []
        if chain is not None:
            self.install(chain)

        if hook_settings.replay_loaded if replay_loaded is None else replay_loaded:
            try:
                self.replay()
            except BaseException:
                if chain is not None:
                    self._restore_chain(chain, previous)
                raise

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    def _expose_operations(self, resolver: Any, forward: Iterable[str] | None) -> tuple[str, ...]:
        if forward is None:
            resolver_type = type(resolver)
            names = {
                name
                for name in dir(resolver_type)
                if not name.startswith("_") and callable(getattr(resolver_type, name, None))
            }
        else:
            names = set(forward)
            missing = sorted(name for name in names if not hasattr(resolver, name))
            if missing:
                raise ValueError(f"Resolver has no operation(s): {', '.join(missing)}")

        own = {name for name in dir(type(self)) if not name.startswith("_")}
        own.update(vars(self))
        exposed = tuple(sorted(names - own))
        for name in exposed:
            setattr(self, name, getattr(resolver, name))
        return exposed

    # ── Chain installation ────────────────────────────────────────────────

    def install(self, chain: ResolverChain, exclusive: bool | None = None) -> None:
        """Register `self.resolve` first in `chain`.

        When exclusive, every hook already in the chain is removed. The
        wrapped resolver's own `load` is expected to be among them; anything
        else is reported because it will no longer be consulted.
        """

        exclusive = self.exclusive if exclusive is None else exclusive
        if exclusive:
            wrapped_load = getattr(self._resolver, "load", None)
            for dropped in chain.clear():
                if dropped == self.resolve or dropped == wrapped_load:
                    continue
                logger.warning("Dropping resolution hook %r from chain", dropped)

        chain.register(self.resolve, prepend=True)
        logger.info(
            "Installed load hook for %s (exclusive=%s, chain size=%d)",
            type(self._resolver).__name__,
            exclusive,
            len(chain),
        )

    def uninstall(self, chain: ResolverChain) -> bool:
        return chain.unregister(self.resolve)

    def _restore_chain(self, chain: ResolverChain, previous: list[Any]) -> None:
        chain.clear()
        for hook in previous:
            chain.register(hook)
        logger.warning("Replay failed; restored %d previous hook(s) in chain", len(previous))

    def _new_trace(self) -> TraceContext | None:
        if self.trace_file is None:
            return None
        return TraceContext(log_file=self.trace_file)

    # ── Resolution ────────────────────────────────────────────────────────

    def resolve(self, name: str, trace: TraceContext | None = None) -> ResolveResult:
        """Load `name` through the resolver and construct what it provides.

        Without an explicit `trace`, and with tracing enabled in settings, a
        trace is created for this call and written when it returns or raises.

        Returns:
            True when the resolver loaded the name, None otherwise.

        Raises:
            ReflectionError: `name` is malformed, or cannot be located after
                the resolver reported success.
        """

        validate_name(name)
        trace_ctx = trace if trace is not None else self._new_trace()
        try:
            return self._resolve(name, trace_ctx)
        except Exception as e:
            if trace_ctx is not None:
                trace_ctx.record_stage("resolve_error", {"name": name, "error": str(e)})
            raise
        finally:
            if trace is None and trace_ctx is not None:
                trace_ctx.finish()

    load = resolve

    def _resolve(self, name: str, trace_ctx: TraceContext | None) -> ResolveResult:
        if self._resolver.load(name) is not True:
            logger.debug("Resolver did not load %s", name)
            if trace_ctx is not None:
                trace_ctx.record_stage(f"resolve:{name}", {"loaded": False, "constructed": []})
            return None

        constructed = self.try_invoke_static_init(name)
        if trace_ctx is not None:
            trace_ctx.record_stage(
                f"resolve:{name}",
                {
                    "loaded": True,
                    "constructed": [f"{cls.__module__}.{cls.__qualname__}" for cls in constructed],
                },
            )
        return True

    def try_invoke_static_init(self, name: str) -> list[type]:
        """Run initializers for the loaded object `name`; return constructed types."""

        target = locate(name)
        return [cls for cls in defined_types(target, name) if self.construct(cls)]

    def construct(self, cls: type) -> bool:
        """Run `cls`'s own static initializer if it declares one.

        Returns True when the initializer ran. With `once_per_type` the class
        is marked before the call so re-entrant resolution skips it; the mark
        is dropped again if the initializer raises.
        """

        if self.once_per_type and cls in self._constructed:
            return False

        initializer = find_static_initializer(cls, self.initializer_name)
        if initializer is None:
            return False

        if self.once_per_type:
            self._constructed.add(cls)
        logger.debug("Running %s.%s", cls.__qualname__, self.initializer_name)
        try:
            initializer()
        except BaseException:
            if self.once_per_type:
                self._constructed.discard(cls)
            raise
        return True

    def is_constructed(self, cls: type) -> bool:
        return cls in self._constructed

    def construct_module(self, module: Any) -> list[type]:
        """Run initializers for every class defined in an already executed module."""

        return [cls for cls in defined_types(module, module.__name__) if self.construct(cls)]

    def replay(self, trace: TraceContext | None = None) -> list[type]:
        """Run initializers on every class already alive in the interpreter."""

        trace_ctx = trace if trace is not None else self._new_trace()
        declared = list(iter_declared_types())
        try:
            constructed = [cls for cls in declared if self.construct(cls)]
            logger.info(
                "Replayed static initializers: %d of %d loaded classes",
                len(constructed),
                len(declared),
            )
            if trace_ctx is not None:
                trace_ctx.record_stage(
                    "replay",
                    {
                        "scanned": len(declared),
                        "constructed": [f"{cls.__module__}.{cls.__qualname__}" for cls in constructed],
                    },
                )
            return constructed
        except Exception as e:
            if trace_ctx is not None:
                trace_ctx.record_stage("replay_error", {"error": str(e)})
            raise
        finally:
            if trace is None and trace_ctx is not None:
                trace_ctx.finish()

    def __repr__(self) -> str:
        return (
            f"LoadHook(resolver={type(self._resolver).__name__}, "
            f"initializer={self.initializer_name!r}, once_per_type={self.once_per_type})"
        )
