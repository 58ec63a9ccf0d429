"""Settings loading and validation.

This module provides a minimal, type-safe configuration loader for the project.

Design principles:
- Fail-fast: missing required fields raise a readable error that includes field path
- No side effects: this module only parses/validates configuration; nothing is
  imported or registered here
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from construct_static.core.errors import ConstructStaticError

DEFAULT_INITIALIZER_NAME = "__construct_static__"


class SettingsError(ConstructStaticError, ValueError):
    """Raised when settings are missing or invalid."""


@dataclass(frozen=True)
class HookSettings:
    initializer_name: str = DEFAULT_INITIALIZER_NAME
    replay_loaded: bool = False
    once_per_type: bool = True
    exclusive: bool = True


@dataclass(frozen=True)
class ResolverSettings:
    provider: str
    search_paths: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ObservabilitySettings:
    log_level: str = "INFO"
    trace_enabled: bool = False
    trace_file: str = "./logs/traces.jsonl"


@dataclass(frozen=True)
class Settings:
    hook: HookSettings
    resolver: ResolverSettings
    observability: ObservabilitySettings


def _require_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None or not isinstance(value, Mapping):
        raise SettingsError(f"Missing required section: {key}")
    return value


def _optional_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SettingsError(f"Invalid section type: {key}")
    return value


def _require(raw: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in raw:
        raise SettingsError(f"Missing required field: {path}")
    return raw[key]


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"Invalid value for {path}: expected non-empty string")
    return value


def _as_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"Invalid value for {path}: expected bool")
    return value


def _as_str_list(value: Any, path: str) -> list[str]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        raise SettingsError(f"Invalid value for {path}: expected list[str]")
    out: list[str] = []
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise SettingsError(f"Invalid value for {path}[{i}]: expected str")
        out.append(item)
    return out


def validate_settings(settings: Settings) -> None:
    """Validate required fields and basic invariants."""

    if not settings.hook.initializer_name.isidentifier():
        raise SettingsError(
            "Invalid value for hook.initializer_name: expected a Python identifier"
        )
    if not settings.resolver.provider:
        raise SettingsError("Missing required field: resolver.provider")
    if settings.observability.log_level.upper() not in (
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
        "CRITICAL",
    ):
        raise SettingsError(
            f"Invalid value for observability.log_level: {settings.observability.log_level}"
        )


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML file."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path}")

    try:
        raw_obj = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file: {settings_path}") from e

    if raw_obj is None or not isinstance(raw_obj, Mapping):
        raise SettingsError(f"Invalid settings root: expected mapping in {settings_path}")

    hook_raw = _optional_section(raw_obj, "hook")
    resolver_raw = _require_section(raw_obj, "resolver")
    observability_raw = _optional_section(raw_obj, "observability")

    hook = HookSettings(
        initializer_name=_as_str(
            hook_raw.get("initializer_name", DEFAULT_INITIALIZER_NAME),
            "hook.initializer_name",
        ),
        replay_loaded=_as_bool(hook_raw.get("replay_loaded", False), "hook.replay_loaded"),
        once_per_type=_as_bool(hook_raw.get("once_per_type", True), "hook.once_per_type"),
        exclusive=_as_bool(hook_raw.get("exclusive", True), "hook.exclusive"),
    )

    resolver = ResolverSettings(
        provider=_as_str(
            _require(resolver_raw, "provider", "resolver.provider"),
            "resolver.provider",
        ),
        search_paths=_as_str_list(
            resolver_raw.get("search_paths") or [],
            "resolver.search_paths",
        ),
    )

    observability = ObservabilitySettings(
        log_level=_as_str(
            observability_raw.get("log_level", "INFO"),
            "observability.log_level",
        ),
        trace_enabled=_as_bool(
            observability_raw.get("trace_enabled", False),
            "observability.trace_enabled",
        ),
        trace_file=_as_str(
            observability_raw.get("trace_file", "./logs/traces.jsonl"),
            "observability.trace_file",
        ),
    )

    settings = Settings(
        hook=hook,
        resolver=resolver,
        observability=observability,
    )

    validate_settings(settings)
    return settings
