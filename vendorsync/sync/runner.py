"""
Sync Runner — Execute a sync profile against a project root.

A run is a short fixed sequence:
1. resolve every path from the project root and optional upstream override
2. pre-flight: every required path must exist, or nothing is touched
3. each pairing in order: mirror, or clear + copy filtered files
4. copy extra top-level files (license, credits)

There is no rollback. If pairing N fails, pairings before it stay copied and
the rest are never attempted; re-running the profile converges because every
destination is fully replaced.

## Usage

    from vendorsync.sync.profiles import BUILTIN_PROFILES
    from vendorsync.sync.runner import run_profile

    result = run_profile(BUILTIN_PROFILES["musl"], root=Path("."))
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..mirror.tree import check_overlap, list_names, mirror_tree, remove_path
from ..validation import validate_path_exists
from .models import MODE_FILTERED, FileFilter, SyncProfile

logger = logging.getLogger(__name__)


@dataclass
class SyncPaths:
    """Absolute paths resolved for one run of a profile."""

    local_dir: Path
    upstream_root: Path
    upstream_dir: Path
    pairings: List[Tuple[Path, Path]] = field(default_factory=list)
    extra_files: List[Tuple[Path, Path]] = field(default_factory=list)


@dataclass
class SyncResult:
    """Outcome of a profile run."""

    profile: str
    dry_run: bool = False
    pairings: List[Tuple[Path, Path]] = field(default_factory=list)
    files_copied: int = 0
    files_skipped: int = 0
    entries_cleared: int = 0


def resolve_paths(profile: SyncProfile, root: Path, upstream: Optional[Path] = None) -> SyncPaths:
    """
    Resolve all paths of ``profile``.

    Args:
        root: Project root holding the vendored trees
        upstream: Override for the upstream checkout; defaults to
                  ``root / profile.upstream_default``
    """
    root = Path(root).resolve()
    if upstream is not None:
        upstream_root = Path(upstream).resolve()
    else:
        upstream_root = (root / profile.upstream_default).resolve()

    local_dir = root / profile.local_dir
    upstream_dir = upstream_root / profile.upstream_subdir if profile.upstream_subdir else upstream_root

    pairings: List[Tuple[Path, Path]] = []
    for pairing in profile.pairings:
        if profile.is_push:
            src = _join(local_dir, pairing.source)
            dest = _join(upstream_dir, pairing.destination)
        else:
            src = _join(upstream_dir, pairing.source)
            dest = _join(local_dir, pairing.destination)
        pairings.append((src, dest))

    extra_files = [(upstream_dir / name, local_dir / Path(name).name) for name in profile.extra_files]

    return SyncPaths(
        local_dir=local_dir,
        upstream_root=upstream_root,
        upstream_dir=upstream_dir,
        pairings=pairings,
        extra_files=extra_files,
    )


def _join(base: Path, rel: str) -> Path:
    return base / rel if rel else base


def check_paths(profile: SyncProfile, paths: SyncPaths) -> None:
    """
    Pre-flight check. Raises MissingPathError for the first missing path,
    or ValueError when a filtered pairing's source and destination overlap.

    Nothing on disk is modified.
    """
    validate_path_exists(paths.upstream_root, profile.upstream_label)
    validate_path_exists(paths.upstream_dir)

    for rel in profile.required:
        validate_path_exists(paths.upstream_dir / rel)

    for src, dest in paths.pairings:
        validate_path_exists(src)
        if profile.require_destinations:
            validate_path_exists(dest)
        if profile.mode == MODE_FILTERED:
            # Clearing a destination that overlaps its source would delete
            # the files about to be copied.
            check_overlap(src, dest)

    for src, _ in paths.extra_files:
        validate_path_exists(src)


def clear_directory(directory: Path, filters: FileFilter) -> int:
    """
    Remove every entry of ``directory`` that the filter does not preserve.

    The directory is created if it does not exist yet.

    Returns:
        Number of entries removed
    """
    if not directory.exists():
        directory.mkdir(parents=True)
        return 0

    removed = 0
    for name in list_names(directory):
        if filters.is_preserved(name):
            logger.debug(f"Preserving {directory / name}")
            continue
        remove_path(directory / name)
        removed += 1
    return removed


def copy_filtered_files(source: Path, destination: Path, filters: FileFilter) -> Tuple[int, int]:
    """
    Copy the regular top-level files of ``source`` into ``destination``.

    Subdirectories are not descended into. Symlinks to files are
    dereferenced.

    Returns:
        (files copied, files skipped by the filter)
    """
    copied = 0
    skipped = 0
    for name in list_names(source):
        src_path = source / name
        if not src_path.is_file():
            continue
        if filters.is_ignored(name):
            skipped += 1
            continue
        shutil.copyfile(src_path, destination / name)
        copied += 1
    return copied, skipped


def run_profile(
    profile: SyncProfile,
    root: Path,
    upstream: Optional[Path] = None,
    *,
    dry_run: bool = False,
    on_pairing: Optional[Callable[[Path, Path], None]] = None,
) -> SyncResult:
    """
    Run a sync profile.

    Args:
        profile: Profile to run
        root: Project root
        upstream: Optional upstream checkout override
        dry_run: Only resolve and pre-flight; return the planned pairings
        on_pairing: Called with (source, destination) before each pairing

    Raises:
        MissingPathError: a required path is missing (nothing was touched)
        OSError: a copy failed (earlier pairings stay copied)
    """
    paths = resolve_paths(profile, root, upstream)
    check_paths(profile, paths)

    result = SyncResult(profile=profile.name, dry_run=dry_run)
    log_extra = {"profile": profile.name}

    if dry_run:
        result.pairings = list(paths.pairings)
        logger.info(f"[{profile.name}] dry run: {len(paths.pairings)} pairing(s) planned", extra=log_extra)
        return result

    for src, dest in paths.pairings:
        if on_pairing is not None:
            on_pairing(src, dest)
        logger.info(f"[{profile.name}] copying {src} -> {dest}", extra={**log_extra, "pairing": dest.name})

        if profile.mode == MODE_FILTERED:
            result.entries_cleared += clear_directory(dest, profile.filters)
            copied, skipped = copy_filtered_files(src, dest, profile.filters)
            result.files_copied += copied
            result.files_skipped += skipped
        else:
            mirror_tree(src, dest)

        result.pairings.append((src, dest))

    for src, dest in paths.extra_files:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)
        result.files_copied += 1

    logger.info(
        f"[{profile.name}] done: {len(result.pairings)} pairing(s), "
        f"{result.files_copied} file(s) copied, {result.files_skipped} skipped",
        extra=log_extra,
    )
    return result
