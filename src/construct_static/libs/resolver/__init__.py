"""Resolver 抽象层对外导出。

导入本包时注册内置 provider：`import` 与 `path`。
"""

from construct_static.libs.resolver.base_resolver import BaseResolver
from construct_static.libs.resolver.import_resolver import ImportResolver
from construct_static.libs.resolver.path_resolver import PathResolver
from construct_static.libs.resolver.resolver_factory import ResolverFactory

ResolverFactory.register_provider("import", ImportResolver)
ResolverFactory.register_provider("path", PathResolver)

__all__ = ["BaseResolver", "ImportResolver", "PathResolver", "ResolverFactory"]
