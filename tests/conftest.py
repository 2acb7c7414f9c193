"""
Shared fixtures for sync tests.

Builds a throwaway project root with vendored trees under ``system/lib`` and
sibling upstream checkouts (``llvm-project``, ``musl``) inside ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest

from vendorsync.sync.profiles import COMPILER_RT_DIRS, LLVM_PUSH_DIRS


def write_tree(base: Path, files: Dict[str, str]) -> Path:
    """Create ``files`` (relative path -> text) under ``base``."""
    base.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = base / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return base


def read_tree(base: Path) -> Dict[str, str]:
    """Map every regular file under ``base`` to its text content."""
    return {
        p.relative_to(base).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(base.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project root with vendored compiler-rt, libcxx, libcxxabi and musl."""
    root = tmp_path / "emscripten"
    lib = root / "system" / "lib"

    write_tree(lib / "compiler-rt", {
        "readme.txt": "local readme",
        "include/sanitizer/old_header.h": "stale",
        "include/sanitizer/emscripten_extra.h": "local",
        "lib/builtins/old.c": "stale",
        "lib/builtins/readme.txt": "keep me",
    })
    write_tree(lib / "libcxx", {"include/vector": "local vector"})
    write_tree(lib / "libcxxabi", {"src/cxa.cpp": "local cxa"})
    write_tree(lib / "libc" / "musl", {
        "src/string/strlen.c": "local strlen",
        "include/stdio.h": "local stdio",
    })
    return root


@pytest.fixture
def llvm_checkout(tmp_path: Path) -> Path:
    """Upstream llvm-project checkout next to the project root."""
    llvm = tmp_path / "llvm-project"
    rt = llvm / "compiler-rt"

    files = {
        "CREDITS.TXT": "credits",
        "LICENSE.TXT": "license",
        "CMakeLists.txt": "top cmake",
    }
    for d in COMPILER_RT_DIRS:
        name = d.rsplit("/", 1)[-1]
        files[f"{d}/{name}.c"] = f"upstream {name}"
        files[f"{d}/CMakeLists.txt"] = "cmake"
        files[f"{d}/.clang-format"] = "fmt"
        files[f"{d}/{name}.syms.extra"] = "syms"
        files[f"{d}/{name}_asm.S"] = "asm"
        files[f"{d}/tests/{name}_test.cpp"] = "nested"
    write_tree(rt, files)

    for d in LLVM_PUSH_DIRS:
        if d != "compiler-rt":
            write_tree(llvm / d, {"upstream_only.txt": "upstream"})
    return llvm


@pytest.fixture
def musl_checkout(tmp_path: Path) -> Path:
    """Upstream musl checkout next to the project root."""
    return write_tree(tmp_path / "musl", {
        "src/string/strlen.c": "upstream strlen",
        "COPYRIGHT": "musl copyright",
    })
