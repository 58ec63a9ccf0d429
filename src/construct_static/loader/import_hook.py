"""Import system integration.

`StaticInitFinder` sits at the front of `sys.meta_path`. It does not locate
modules itself: it asks the finders behind it for a spec and swaps the spec's
loader for one that runs the load hook once the module body has executed.
Plain `import` statements therefore trigger static initializers too.
"""

from __future__ import annotations

import sys
from importlib.abc import Loader, MetaPathFinder
from importlib.machinery import ModuleSpec
from types import ModuleType
from typing import Any, Sequence

from construct_static.loader.load_hook import LoadHook
from construct_static.observability.logger import get_logger

logger = get_logger(__name__)


class StaticInitLoader(Loader):
    """Loader wrapper: executes the module, then constructs its classes."""

    def __init__(self, loader: Loader, hook: LoadHook) -> None:
        self.loader = loader
        self.hook = hook

    def create_module(self, spec: ModuleSpec) -> ModuleType | None:
        return self.loader.create_module(spec)

    def exec_module(self, module: ModuleType) -> None:
        self.loader.exec_module(module)
        constructed = self.hook.construct_module(module)
        if constructed:
            logger.debug(
                "Constructed %d class(es) in %s",
                len(constructed),
                module.__name__,
            )

    # Optional loader APIs (get_code, get_source, get_resource_reader, ...)
    # are answered by the wrapped loader.
    def __getattr__(self, name: str) -> Any:
        if name in ("loader", "hook"):
            raise AttributeError(name)
        return getattr(self.loader, name)


class StaticInitFinder(MetaPathFinder):
    """Meta path finder that routes loaded modules through a `LoadHook`."""

    def __init__(self, hook: LoadHook) -> None:
        self.hook = hook

    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None,
        target: ModuleType | None = None,
    ) -> ModuleSpec | None:
        for finder in list(sys.meta_path):
            if finder is self or isinstance(finder, StaticInitFinder):
                continue
            find_spec = getattr(finder, "find_spec", None)
            if find_spec is None:
                continue
            spec = find_spec(fullname, path, target)
            if spec is None:
                continue
            if spec.loader is None or not hasattr(spec.loader, "exec_module"):
                return spec
            spec.loader = StaticInitLoader(spec.loader, self.hook)
            return spec
        return None

    def invalidate_caches(self) -> None:
        for finder in list(sys.meta_path):
            if finder is self or isinstance(finder, StaticInitFinder):
                continue
            invalidate = getattr(finder, "invalidate_caches", None)
            if invalidate is not None:
                invalidate()


def install_import_hook(hook: LoadHook) -> StaticInitFinder:
    """Prepend a finder for `hook` to `sys.meta_path` and return it.

    Installing the same hook twice returns the finder already in place.
    """

    for finder in sys.meta_path:
        if isinstance(finder, StaticInitFinder) and finder.hook is hook:
            return finder

    finder = StaticInitFinder(hook)
    sys.meta_path.insert(0, finder)
    logger.info("Installed static initializer finder on sys.meta_path")
    return finder


def uninstall_import_hook(finder: StaticInitFinder) -> bool:
    if finder not in sys.meta_path:
        return False
    sys.meta_path.remove(finder)
    logger.info("Removed static initializer finder from sys.meta_path")
    return True
