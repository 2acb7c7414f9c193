"""
Sync Models — Pydantic schemas for sync profiles.

A profile describes one vendoring relationship:
- which local directory holds the vendored copy
- where the upstream checkout lives by default
- which subdirectories are paired, and in which direction they flow
- how destinations are cleared and which files are filtered
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field, model_validator

DIRECTION_UPDATE = "update"  # upstream -> local
DIRECTION_PUSH = "push"      # local -> upstream

MODE_MIRROR = "mirror"
MODE_FILTERED = "filtered"


class FileFilter(BaseModel):
    """Allow-list and block-list applied by filtered syncs."""

    preserve: List[str] = Field(default_factory=list)
    preserve_markers: List[str] = Field(default_factory=list)
    ignore_names: List[str] = Field(default_factory=list)
    ignore_suffixes: List[str] = Field(default_factory=list)

    def is_preserved(self, name: str) -> bool:
        """True if an existing destination entry must survive clearing."""
        if name in self.preserve:
            return True
        return any(marker in name for marker in self.preserve_markers)

    def is_ignored(self, name: str) -> bool:
        """True if a source file must not be copied."""
        if name in self.ignore_names:
            return True
        return any(name.endswith(suffix) for suffix in self.ignore_suffixes)


class DirPairing(BaseModel):
    """A source/destination subdirectory pair. Empty string means the tree root."""

    source: str = ""
    destination: str = ""

    @classmethod
    def same(cls, path: str) -> "DirPairing":
        """Pairing where both sides share the same relative path."""
        return cls(source=path, destination=path)

    @property
    def label(self) -> str:
        if self.source == self.destination:
            return self.source or "."
        return f"{self.source or '.'} -> {self.destination or '.'}"


class SyncProfile(BaseModel):
    """One vendored tree and how it is synchronized with upstream."""

    name: str
    description: str = ""
    direction: Literal["update", "push"]
    local_dir: str
    upstream_default: str
    upstream_label: str = "upstream tree"
    upstream_subdir: str = ""
    required: List[str] = Field(default_factory=list)
    require_destinations: bool = False
    mode: Literal["mirror", "filtered"] = MODE_MIRROR
    filters: FileFilter = Field(default_factory=FileFilter)
    pairings: List[DirPairing] = Field(default_factory=lambda: [DirPairing()])
    extra_files: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_consistency(self) -> "SyncProfile":
        if not self.pairings:
            raise ValueError(f"profile '{self.name}' has no pairings")
        if self.extra_files and self.direction != DIRECTION_UPDATE:
            raise ValueError("extra_files is only supported for update profiles")
        return self

    @property
    def is_push(self) -> bool:
        return self.direction == DIRECTION_PUSH


class ProfilesFile(BaseModel):
    """The profiles YAML schema."""

    version: int = 1
    profiles: List[SyncProfile] = Field(default_factory=list)
