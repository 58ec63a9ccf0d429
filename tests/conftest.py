"""Shared fixtures: throwaway packages written to disk and cleaned from sys.modules."""

from __future__ import annotations

import sys
import textwrap
import uuid
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def package_name() -> str:
    return f"cs_fixture_{uuid.uuid4().hex[:10]}"


@pytest.fixture
def make_package(tmp_path: Path) -> Callable[..., Path]:
    """Write `files` as modules of a package under a fresh root; return the root.

    The key `__init__` is the package's own body; dotted keys create
    subpackages (`sub.mod` -> sub/__init__.py + sub/mod.py).
    """

    created: list[str] = []
    root = tmp_path / "site"

    def _make(package: str, files: dict[str, str]) -> Path:
        package_dir = root / package
        package_dir.mkdir(parents=True, exist_ok=True)
        (package_dir / "__init__.py").write_text(
            textwrap.dedent(files.get("__init__", "")), encoding="utf-8"
        )
        for module, source in files.items():
            if module == "__init__":
                continue
            *subpackages, leaf = module.split(".")
            target_dir = package_dir
            for sub in subpackages:
                target_dir = target_dir / sub
                target_dir.mkdir(exist_ok=True)
                init_file = target_dir / "__init__.py"
                if not init_file.exists():
                    init_file.write_text("", encoding="utf-8")
            (target_dir / f"{leaf}.py").write_text(textwrap.dedent(source), encoding="utf-8")
        created.append(package)
        return root

    yield _make

    for name in list(sys.modules):
        if any(name == package or name.startswith(package + ".") for package in created):
            del sys.modules[name]
