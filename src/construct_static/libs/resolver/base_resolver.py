"""Resolver 的基础抽象层。

Resolver 负责把一个点分名称（`pkg.mod` / `pkg.mod.Class`）加载进解释器，
并用布尔值报告是否成功。上层（LoadHook）只依赖 `load()`，不关心底层是走
标准 import 系统，还是只在自己的搜索目录里查找。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from construct_static.core.introspection import locate, validate_name


class BaseResolver(ABC):
    """所有 Resolver 实现都应继承的抽象基类。"""

    def validate_name(self, name: str) -> None:
        """校验待加载名称。

        校验规则：
        - 必须是字符串。
        - 每一段都必须是合法的 Python 标识符。

        非法名称直接抛出 ReflectionError，而不是返回 False：
        它不是“找不到”，而是调用方传错了参数。
        """

        validate_name(name)

    def load(self, name: str) -> bool:
        """加载模块或类，成功返回 True，找不到返回 False。

        步骤：
        1. 先把整个名称当作模块加载。
        2. 失败时加载父路径，再检查最后一段是不是父对象上的类。
           这样 `pkg.mod.Outer.Inner` 也能逐级解析。
        """

        self.validate_name(name)

        if self.load_module(name):
            return True

        parent, _, attr = name.rpartition(".")
        if not parent or not self.load(parent):
            return False

        return isinstance(getattr(locate(parent), attr, None), type)

    @abstractmethod
    def load_module(self, name: str, **kwargs: Any) -> bool:
        """加载名为 `name` 的模块；不存在时返回 False，其它错误向上抛出。"""
