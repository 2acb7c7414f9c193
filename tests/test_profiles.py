"""
Tests for sync profile models and loading.

These tests verify:
- Built-in profiles carry the expected layout
- YAML parsing and validation
- Error handling for malformed profile files
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from vendorsync.sync.loader import get_profile, load_profiles, load_profiles_file, load_yaml
from vendorsync.sync.models import DirPairing, FileFilter, SyncProfile
from vendorsync.sync.profiles import BUILTIN_PROFILES, COMPILER_RT_DIRS
from vendorsync.validation import ConfigurationError

PROFILES_YAML = """
version: 1
profiles:
  - name: zlib
    description: Vendored zlib
    direction: update
    local_dir: third_party/zlib
    upstream_default: ../zlib
    upstream_label: zlib tree
    pairings:
      - source: ""
        destination: ""
  - name: musl
    direction: push
    local_dir: vendor/musl
    upstream_default: ../musl-fork
"""


class TestBuiltinProfiles:
    """Tests for the built-in profiles."""

    def test_names(self):
        assert set(BUILTIN_PROFILES) == {"compiler-rt", "llvm", "musl"}

    def test_compiler_rt_layout(self):
        """compiler-rt pulls every runtime subdirectory from llvm-project."""
        profile = BUILTIN_PROFILES["compiler-rt"]

        assert profile.direction == "update"
        assert profile.mode == "filtered"
        assert profile.upstream_subdir == "compiler-rt"
        assert [p.source for p in profile.pairings] == COMPILER_RT_DIRS
        assert profile.extra_files == ["CREDITS.TXT", "LICENSE.TXT"]
        assert profile.filters.is_preserved("readme.txt")
        assert profile.filters.is_ignored("weak_symbols.txt")

    def test_llvm_layout(self):
        """llvm pushes three libraries and requires their upstream dirs."""
        profile = BUILTIN_PROFILES["llvm"]

        assert profile.is_push
        assert profile.require_destinations is True
        assert [p.destination for p in profile.pairings] == ["compiler-rt", "libcxx", "libcxxabi"]

    def test_musl_layout(self):
        """musl mirrors the whole local tree onto the upstream root."""
        profile = BUILTIN_PROFILES["musl"]

        assert profile.is_push
        assert profile.local_dir == "system/lib/libc/musl"
        assert profile.upstream_default == "../musl"
        assert profile.pairings == [DirPairing()]


class TestModels:
    """Tests for model validation."""

    def test_pairing_label(self):
        assert DirPairing.same("lib/asan").label == "lib/asan"
        assert DirPairing().label == "."
        assert DirPairing(source="site", destination="").label == "site -> ."

    def test_invalid_direction_rejected(self):
        with pytest.raises(PydanticValidationError):
            SyncProfile(name="x", direction="sideways", local_dir="a", upstream_default="b")

    def test_empty_pairings_rejected(self):
        with pytest.raises(PydanticValidationError):
            SyncProfile(name="x", direction="push", local_dir="a", upstream_default="b", pairings=[])

    def test_extra_files_only_for_update(self):
        with pytest.raises(PydanticValidationError):
            SyncProfile(
                name="x",
                direction="push",
                local_dir="a",
                upstream_default="b",
                extra_files=["LICENSE"],
            )

    def test_filter_defaults_keep_and_copy_everything(self):
        f = FileFilter()
        assert not f.is_preserved("anything")
        assert not f.is_ignored("anything")


class TestLoadProfilesFile:
    """Tests for profile YAML loading."""

    def test_loads_valid_file(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text(PROFILES_YAML)

        profiles = load_profiles_file(path)

        assert set(profiles) == {"zlib", "musl"}
        assert profiles["zlib"].upstream_label == "zlib tree"
        assert profiles["musl"].pairings == [DirPairing()]

    def test_load_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_yaml(path) is None

    def test_empty_file_has_no_profiles(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("# nothing here\n")

        assert load_profiles_file(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_profiles_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("profiles: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_profiles_file(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_profiles_file(path)

    def test_schema_error(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("profiles:\n  - name: x\n    direction: push\n")

        with pytest.raises(ConfigurationError, match="Invalid profiles"):
            load_profiles_file(path)

    def test_duplicate_names(self, tmp_path):
        path = tmp_path / "dup.yaml"
        entry = "  - {name: a, direction: push, local_dir: x, upstream_default: y}\n"
        path.write_text("profiles:\n" + entry + entry)

        with pytest.raises(ConfigurationError, match="Duplicate"):
            load_profiles_file(path)


class TestLoadProfiles:
    """Tests for merging built-in and user profiles."""

    def test_builtins_only(self):
        assert set(load_profiles()) == set(BUILTIN_PROFILES)

    def test_user_profiles_override_builtins(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text(PROFILES_YAML)

        profiles = load_profiles(path)

        assert set(profiles) == {"compiler-rt", "llvm", "musl", "zlib"}
        assert profiles["musl"].upstream_default == "../musl-fork"
        assert profiles["llvm"] is BUILTIN_PROFILES["llvm"]

    def test_get_profile(self):
        assert get_profile("musl") is BUILTIN_PROFILES["musl"]

    def test_get_unknown_profile(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_profile("glibc")

        assert "Unknown profile: glibc" in str(exc_info.value)
        assert "compiler-rt" in str(exc_info.value)
