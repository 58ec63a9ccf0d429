"""Name lookup and static initializer discovery.

All lookups read the interpreter's current state (`sys.modules` and the class
tree); nothing here imports or loads code.
"""

from __future__ import annotations

import sys
from collections import deque
from types import ModuleType
from typing import Any, Callable, Iterator, Optional

from construct_static.core.errors import ReflectionError
from construct_static.core.settings import DEFAULT_INITIALIZER_NAME


def validate_name(name: str) -> None:
    """Raise `ReflectionError` unless `name` is a dotted Python identifier."""

    if not isinstance(name, str):
        raise ReflectionError(repr(name), "Name must be a string")
    if not name or not all(part.isidentifier() for part in name.split(".")):
        raise ReflectionError(name, "Malformed name")


def locate(name: str) -> Any:
    """Return the already-loaded module, class or attribute named `name`.

    The longest prefix present in `sys.modules` is taken as the module; the
    remaining parts are read as attributes.
    """

    validate_name(name)
    parts = name.split(".")
    for index in range(len(parts), 0, -1):
        module = sys.modules.get(".".join(parts[:index]))
        if module is None:
            continue
        target: Any = module
        for attr in parts[index:]:
            try:
                target = getattr(target, attr)
            except AttributeError as error:
                raise ReflectionError(name, "Cannot locate attribute") from error
        return target
    raise ReflectionError(name, "No loaded module provides")


def _nested_types(cls: type) -> Iterator[type]:
    prefix = cls.__qualname__ + "."
    for value in list(vars(cls).values()):
        if (
            isinstance(value, type)
            and value.__module__ == cls.__module__
            and value.__qualname__.startswith(prefix)
        ):
            yield value
            yield from _nested_types(value)


def defined_types(target: Any, name: str = "") -> list[type]:
    """Types made available by loading `target`, in definition order.

    A class yields itself and its nested classes. A module yields the classes
    whose `__module__` is that module (imported aliases are skipped).
    """

    if isinstance(target, type):
        found = [target, *_nested_types(target)]
    elif isinstance(target, ModuleType):
        found = []
        for value in list(vars(target).values()):
            if isinstance(value, type) and value.__module__ == target.__name__:
                found.append(value)
                found.extend(_nested_types(value))
    else:
        raise ReflectionError(name or repr(target), "Not a class or module")

    unique: list[type] = []
    seen: set[int] = set()
    for cls in found:
        if id(cls) not in seen:
            seen.add(id(cls))
            unique.append(cls)
    return unique


def _candidate_names(cls: type, method_name: str) -> list[str]:
    # Private names are stored mangled: __init_once -> _Cls__init_once
    if method_name.startswith("__") and not method_name.endswith("__"):
        return [f"_{cls.__name__.lstrip('_')}{method_name}", method_name]
    return [method_name]


def find_static_initializer(
    cls: type,
    method_name: str = DEFAULT_INITIALIZER_NAME,
) -> Optional[Callable[[], Any]]:
    """Return the zero-argument initializer declared on `cls` itself, or None.

    Only `staticmethod` and `classmethod` entries of `cls.__dict__` qualify;
    inherited initializers and plain instance functions are ignored.
    """

    namespace = vars(cls)
    for candidate in _candidate_names(cls, method_name):
        raw = namespace.get(candidate)
        if isinstance(raw, staticmethod):
            return raw.__func__
        if isinstance(raw, classmethod):
            return raw.__get__(None, cls)
    return None


def is_static_initializable(cls: type, method_name: str = DEFAULT_INITIALIZER_NAME) -> bool:
    return find_static_initializer(cls, method_name) is not None


def iter_declared_types() -> Iterator[type]:
    """Yield every class currently alive in the interpreter, parents first."""

    seen: set[int] = {id(object)}
    pending: deque[type] = deque([object])
    while pending:
        current = pending.popleft()
        yield current
        for child in type.__subclasses__(current):
            if id(child) not in seen:
                seen.add(id(child))
                pending.append(child)
