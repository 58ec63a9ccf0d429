"""Static initializers for Python classes.

A class declaring a zero-argument ``__construct_static__`` static or class
method gets it called right after the class is loaded through a `LoadHook`.
"""

from construct_static.core.errors import ConstructStaticError, ReflectionError
from construct_static.core.introspection import find_static_initializer, is_static_initializable
from construct_static.core.settings import Settings, SettingsError, load_settings
from construct_static.core.types import Resolver, StaticInitializable
from construct_static.libs.resolver import (
    BaseResolver,
    ImportResolver,
    PathResolver,
    ResolverFactory,
)
from construct_static.loader import (
    LoadHook,
    ResolverChain,
    StaticInitFinder,
    install_import_hook,
    uninstall_import_hook,
)

__version__ = "0.1.0"

__all__ = [
    "BaseResolver",
    "ConstructStaticError",
    "ImportResolver",
    "LoadHook",
    "PathResolver",
    "ReflectionError",
    "Resolver",
    "ResolverChain",
    "ResolverFactory",
    "Settings",
    "SettingsError",
    "StaticInitFinder",
    "StaticInitializable",
    "find_static_initializer",
    "install_import_hook",
    "is_static_initializable",
    "load_settings",
    "uninstall_import_hook",
]
