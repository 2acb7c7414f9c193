"""
Built-in sync profiles.

Paths are relative to the project root (the directory holding ``system/lib``).
Upstream checkouts are expected as siblings of the project root unless an
override path is given on the command line.
"""

from __future__ import annotations

from typing import Dict

from .models import (
    DIRECTION_PUSH,
    DIRECTION_UPDATE,
    MODE_FILTERED,
    MODE_MIRROR,
    DirPairing,
    FileFilter,
    SyncProfile,
)

COMPILER_RT_DIRS = [
    "include/sanitizer",
    "lib/sanitizer_common",
    "lib/asan",
    "lib/interception",
    "lib/builtins",
    "lib/lsan",
    "lib/ubsan",
    "lib/ubsan_minimal",
]

LLVM_PUSH_DIRS = [
    "compiler-rt",
    "libcxx",
    "libcxxabi",
]

COMPILER_RT = SyncProfile(
    name="compiler-rt",
    description="Copy compiler-rt sources from the upstream llvm tree",
    direction=DIRECTION_UPDATE,
    local_dir="system/lib/compiler-rt",
    upstream_default="../llvm-project",
    upstream_label="llvm tree",
    upstream_subdir="compiler-rt",
    required=["lib/builtins", "include/sanitizer"],
    mode=MODE_FILTERED,
    filters=FileFilter(
        preserve=["readme.txt"],
        preserve_markers=["emscripten"],
        ignore_names=[
            ".clang-format",
            "CMakeLists.txt",
            "README.txt",
            "weak_symbols.txt",
        ],
        ignore_suffixes=[".syms.extra", ".S"],
    ),
    pairings=[DirPairing.same(d) for d in COMPILER_RT_DIRS],
    extra_files=["CREDITS.TXT", "LICENSE.TXT"],
)

LLVM = SyncProfile(
    name="llvm",
    description="Push local llvm library changes into the upstream llvm tree",
    direction=DIRECTION_PUSH,
    local_dir="system/lib",
    upstream_default="../llvm-project",
    upstream_label="llvm tree",
    require_destinations=True,
    mode=MODE_MIRROR,
    pairings=[DirPairing.same(d) for d in LLVM_PUSH_DIRS],
)

MUSL = SyncProfile(
    name="musl",
    description="Push local musl changes into the upstream musl tree",
    direction=DIRECTION_PUSH,
    local_dir="system/lib/libc/musl",
    upstream_default="../musl",
    upstream_label="musl tree",
    mode=MODE_MIRROR,
)

BUILTIN_PROFILES: Dict[str, SyncProfile] = {
    p.name: p for p in (COMPILER_RT, LLVM, MUSL)
}
