"""Resolver 提供者工厂。

职责：
1) 维护 provider 注册表（名称 -> 类）。
2) 按 `settings.resolver.provider` 创建具体 Resolver 实例。
3) 在配置错误时给出清晰、可执行的报错信息。
"""

from __future__ import annotations

from typing import Any

from construct_static.libs.resolver.base_resolver import BaseResolver


class ResolverFactory:
    """基于注册表的 Resolver 工厂。"""

    _PROVIDERS: dict[str, type[BaseResolver]] = {}

    @classmethod
    def register_provider(
        cls,
        provider_name: str,
        provider_class: type[BaseResolver],
    ) -> None:
        """注册 Resolver 实现类。

        参数说明：
        - provider_name: Resolver 名称（如 `import`、`path`），统一小写存储。
        - provider_class: Resolver 类，必须继承 BaseResolver。
        """

        normalized_name = provider_name.strip().lower()
        if not normalized_name:
            raise ValueError("Provider name cannot be empty")

        if not isinstance(provider_class, type) or not issubclass(provider_class, BaseResolver):
            raise ValueError("Provider class must inherit from BaseResolver")

        cls._PROVIDERS[normalized_name] = provider_class

    @classmethod
    def create(cls, settings: Any, **overrides: Any) -> BaseResolver:
        """根据配置创建 Resolver 实例。

        参数说明：
        - settings: 全局配置对象，要求包含 `settings.resolver.provider`。
        - **overrides: 单次覆盖构造参数（常用于测试）。
        """

        resolver_settings = getattr(settings, "resolver", None)
        provider_raw = getattr(resolver_settings, "provider", None)

        if not isinstance(provider_raw, str) or not provider_raw.strip():
            raise ValueError(
                "Missing required configuration: settings.resolver.provider. "
                "Please set resolver provider in settings.yaml"
            )

        provider_name = provider_raw.strip().lower()

        resolver_class = cls._PROVIDERS.get(provider_name)
        if resolver_class is None:
            available_providers = cls.list_providers()
            available_text = ", ".join(available_providers) if available_providers else "none"
            raise ValueError(
                f"Unsupported Resolver provider: '{provider_raw}'. "
                f"Available providers: {available_text}."
            )

        resolver_constructor: Any = resolver_class
        return resolver_constructor(settings=settings, **overrides)

    @classmethod
    def list_providers(cls) -> list[str]:
        """返回已注册 provider 名称列表（字母序）。"""

        return sorted(cls._PROVIDERS.keys())
