"""Wire settings, logging and the configured resolver into a `LoadHook`."""

from __future__ import annotations

from pathlib import Path

from construct_static.core.settings import Settings, load_settings
from construct_static.libs.resolver import ResolverFactory
from construct_static.loader.chain import ResolverChain
from construct_static.loader.import_hook import install_import_hook
from construct_static.loader.load_hook import LoadHook
from construct_static.observability.logger import get_logger, set_package_level


def build_load_hook(
    settings: Settings,
    chain: ResolverChain | None = None,
    *,
    import_hook: bool = False,
) -> LoadHook:
    """Create the configured resolver and wrap it in a `LoadHook`.

    With `import_hook=True` the hook is also installed on `sys.meta_path`.
    """

    set_package_level(settings.observability.log_level)
    logger = get_logger("construct_static.bootstrap", settings.observability.log_level)

    resolver = ResolverFactory.create(settings)
    hook = LoadHook(resolver, chain=chain, settings=settings)
    logger.info(
        "Load hook ready (resolver=%s, initializer=%s, replay=%s)",
        settings.resolver.provider,
        settings.hook.initializer_name,
        settings.hook.replay_loaded,
    )

    if import_hook:
        install_import_hook(hook)
    return hook


def bootstrap(
    settings_path: str | Path = "config/settings.yaml",
    chain: ResolverChain | None = None,
    *,
    import_hook: bool = False,
) -> LoadHook:
    return build_load_hook(load_settings(settings_path), chain, import_hook=import_hook)
