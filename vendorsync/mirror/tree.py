"""
Tree Mirror — Destructive recursive directory copy.

``mirror_tree(source, destination)`` replaces ``destination`` with a copy of
``source``. Any existing destination (file, directory, or symlink) is removed
first; symlinks found inside ``source`` are dereferenced, so the destination
only ever holds regular files and directories.

Unlike ``shutil.copytree(..., dirs_exist_ok=True)`` nothing from a previous
destination survives, which is what keeps re-running a sync idempotent.

## Usage

    from vendorsync.mirror.tree import mirror_tree

    mirror_tree(local_dir, upstream_dir)
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import List, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def mirror_tree(source: PathLike, destination: PathLike) -> None:
    """
    Mirror ``source`` into ``destination``.

    Raises:
        FileNotFoundError: ``source`` does not exist (destination untouched)
        NotADirectoryError: ``source`` is not a directory (destination untouched)
        ValueError: ``source`` and ``destination`` overlap
        OSError: permission or device errors, propagated as-is
    """
    src = Path(source)
    dest = Path(destination)

    _check_source(src)
    check_overlap(src, dest)

    dest.parent.mkdir(parents=True, exist_ok=True)
    files, dirs = _mirror_dir(src, dest)
    logger.info(
        f"Mirrored {files} files, {dirs} directories: {src} -> {dest}",
        extra={"source": src, "destination": dest},
    )


def remove_path(path: Path) -> None:
    """Remove a file, symlink, or directory tree. Symlinks are never followed."""
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)


def _check_source(src: Path) -> None:
    if not src.exists():
        raise FileNotFoundError(f"Source directory not found: {src}")
    if not src.is_dir():
        raise NotADirectoryError(f"Source is not a directory: {src}")


def check_overlap(src: Path, dest: Path) -> None:
    """Raise ValueError if ``src`` and ``dest`` are the same or nested."""
    # The last component of dest is not followed: a symlinked destination
    # is unlinked, so whatever it points at is never touched.
    src_real = Path(src).resolve()
    dest = Path(dest)
    if dest.is_symlink():
        dest_real = dest.parent.resolve() / dest.name
    else:
        dest_real = dest.resolve()
    if dest_real == src_real:
        raise ValueError(f"Source and destination are the same directory: {src}")
    if _is_within(dest_real, src_real):
        raise ValueError(f"Destination {dest} lies inside source {src}")
    if _is_within(src_real, dest_real):
        raise ValueError(f"Source {src} lies inside destination {dest}")


def _is_within(path: Path, parent: Path) -> bool:
    try:
        path.relative_to(parent)
    except ValueError:
        return False
    return True


def list_names(directory: Path) -> List[str]:
    """Read a whole directory listing and release the handle."""
    with os.scandir(directory) as it:
        return [entry.name for entry in it]


def _mirror_dir(src: Path, dest: Path) -> Tuple[int, int]:
    if dest.exists() or dest.is_symlink():
        logger.debug(f"Removing existing destination {dest}")
        remove_path(dest)
    dest.mkdir()

    files = 0
    dirs = 1
    for name in list_names(src):
        src_path = src / name
        dest_path = dest / name
        # is_dir() follows symlinks: linked directories are copied as directories
        if src_path.is_dir():
            sub_files, sub_dirs = _mirror_dir(src_path, dest_path)
            files += sub_files
            dirs += sub_dirs
        else:
            shutil.copyfile(src_path, dest_path)
            logger.debug(f"copied {src_path}")
            files += 1

    return files, dirs
