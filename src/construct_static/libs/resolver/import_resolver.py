"""Resolver backed by the interpreter's standard import system."""

from __future__ import annotations

import importlib
from typing import Any

from construct_static.libs.resolver.base_resolver import BaseResolver
from construct_static.observability.logger import get_logger

logger = get_logger(__name__)


def _is_missing(error: ModuleNotFoundError, name: str) -> bool:
    # Only the requested module (or one of its parents) counts as "not found";
    # a missing dependency inside an existing module is a real error.
    missing = error.name
    if not missing:
        return False
    return name == missing or name.startswith(missing + ".")


class ImportResolver(BaseResolver):
    """Load names through `importlib.import_module` (i.e. `sys.meta_path`)."""

    def __init__(self, settings: Any = None, **kwargs: Any) -> None:
        self.settings = settings

    def load_module(self, name: str, **kwargs: Any) -> bool:
        try:
            importlib.import_module(name)
        except ModuleNotFoundError as error:
            if _is_missing(error, name):
                logger.debug("Module not found: %s", name)
                return False
            raise
        return True

    def invalidate_caches(self) -> None:
        """Forget cached finder state so newly created files become importable."""

        importlib.invalidate_caches()
