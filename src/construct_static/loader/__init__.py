"""Load hook, resolver chain and import system integration."""

from construct_static.loader.chain import ResolverChain
from construct_static.loader.import_hook import (
    StaticInitFinder,
    StaticInitLoader,
    install_import_hook,
    uninstall_import_hook,
)
from construct_static.loader.load_hook import LoadHook

__all__ = [
    "LoadHook",
    "ResolverChain",
    "StaticInitFinder",
    "StaticInitLoader",
    "install_import_hook",
    "uninstall_import_hook",
]
