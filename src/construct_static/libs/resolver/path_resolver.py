"""Resolver 实现：只在自己的搜索目录里查找模块。

与 ImportResolver 不同，PathResolver 不修改 `sys.path`，
而是把搜索目录交给 `importlib.machinery.PathFinder`，
然后自己创建模块对象并执行。已在 `sys.modules` 中的模块直接视为已加载。
"""

from __future__ import annotations

import importlib.util
import os
import sys
from importlib.machinery import ModuleSpec, PathFinder
from pathlib import Path
from typing import Any, Iterable

from construct_static.libs.resolver.base_resolver import BaseResolver
from construct_static.observability.logger import get_logger

logger = get_logger(__name__)


class PathResolver(BaseResolver):
    """基于搜索目录的 Resolver。"""

    def __init__(
        self,
        settings: Any = None,
        *,
        search_paths: Iterable[str | os.PathLike[str]] | None = None,
        **kwargs: Any,
    ) -> None:
        """读取 `settings.resolver.search_paths`，显式传入的 search_paths 优先。"""

        self.settings = settings

        resolver_settings = getattr(settings, "resolver", None)
        configured = (
            search_paths
            if search_paths is not None
            else getattr(resolver_settings, "search_paths", None)
        )
        if configured is None:
            configured = []
        if isinstance(configured, (str, bytes)):
            raise ValueError("search_paths must be a list of directories, not a single string")

        self._search_paths: list[str] = []
        for path in configured:
            self.add_path(path)

    def add_path(self, path: str | os.PathLike[str], prepend: bool = False) -> None:
        """追加（或前置）一个搜索目录；重复目录会被忽略。"""

        normalized = str(Path(path))
        if normalized in self._search_paths:
            return
        if prepend:
            self._search_paths.insert(0, normalized)
        else:
            self._search_paths.append(normalized)

    def remove_path(self, path: str | os.PathLike[str]) -> bool:
        normalized = str(Path(path))
        if normalized not in self._search_paths:
            return False
        self._search_paths.remove(normalized)
        return True

    def get_search_paths(self) -> list[str]:
        return list(self._search_paths)

    def find_spec(self, name: str) -> ModuleSpec | None:
        """查找模块 spec。

        顶层模块在搜索目录里找；子模块在父包的 `__path__` 里找，
        父模块必须已经加载。
        """

        parent, _, _ = name.rpartition(".")
        if parent:
            search = getattr(sys.modules.get(parent), "__path__", None)
            if search is None:
                return None
        else:
            search = self._search_paths
        return PathFinder.find_spec(name, list(search))

    def load_module(self, name: str, **kwargs: Any) -> bool:
        if name in sys.modules:
            return True

        # 步骤 1：先保证父包已加载。
        parent, _, child = name.rpartition(".")
        if parent and not self.load_module(parent):
            return False

        # 步骤 2：查找 spec；找不到即视为“未知名称”。
        spec = self.find_spec(name)
        if spec is None or spec.loader is None:
            logger.debug("No spec for %s in %s", name, self._search_paths)
            return False

        # 步骤 3：创建并执行模块；执行失败时回滚 sys.modules 后原样抛出。
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(name, None)
            raise

        if parent:
            setattr(sys.modules[parent], child, module)
        logger.debug("Loaded %s from %s", name, spec.origin)
        return True
