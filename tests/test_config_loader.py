"""Tests for kdef.yaml profile loading."""

import pytest
import yaml

from kdef.core.config_loader import ConfigLoader
from kdef.core.entry import EntryKind
from kdef.core.errors import ProfileError
from kdef.core.filters import Filter


class TestConfigLoader:
    """Test ConfigLoader functionality."""

    def test_init_with_explicit_path(self, tmp_path):
        """Test initialization with explicit config path."""
        config_file = tmp_path / "kdef.yaml"
        config_file.write_text("profiles: {}")

        loader = ConfigLoader(config_file)
        assert loader.config_path == config_file

    def test_init_with_nonexistent_explicit_path(self, tmp_path):
        """Test initialization with nonexistent explicit path."""
        loader = ConfigLoader(tmp_path / "nonexistent.yaml")
        assert loader.config_path is None
        assert loader.load() == {}

    def test_find_config_in_current_dir(self, tmp_path, monkeypatch):
        """Test finding kdef.yaml in current directory."""
        config_file = tmp_path / "kdef.yaml"
        config_file.write_text("profiles: {}")
        monkeypatch.chdir(tmp_path)

        loader = ConfigLoader()
        assert loader.config_path == config_file

    def test_find_config_in_parent_dir(self, tmp_path, monkeypatch):
        """Test finding kdef.yaml in parent directory."""
        config_file = tmp_path / "kdef.yaml"
        config_file.write_text("profiles: {}")
        subdir = tmp_path / "subdir"
        subdir.mkdir()
        monkeypatch.chdir(subdir)

        loader = ConfigLoader()
        assert loader.config_path == config_file

    def test_load_valid_config(self, tmp_path):
        """Test loading a valid configuration file."""
        config_data = {
            "profiles": {
                "qemu": {
                    "prefix": "CONFIG_",
                    "fragments": [{"path": "base.config"}, "debug.fragment"],
                }
            }
        }
        config_file = tmp_path / "kdef.yaml"
        config_file.write_text(yaml.dump(config_data))

        loader = ConfigLoader(config_file)
        assert loader.load() == config_data
        assert loader.profile_names() == ["qemu"]
        assert loader.get_prefix("qemu") == "CONFIG_"
        assert loader.get_fragments("qemu") == [{"path": "base.config"}, "debug.fragment"]

    def test_load_invalid_yaml(self, tmp_path):
        """Test loading an invalid YAML file."""
        config_file = tmp_path / "kdef.yaml"
        config_file.write_text("invalid: yaml: content: [")

        loader = ConfigLoader(config_file)
        with pytest.raises(ValueError, match="Invalid kdef.yaml"):
            loader.load()

    def test_load_non_mapping_root(self, tmp_path):
        config_file = tmp_path / "kdef.yaml"
        config_file.write_text("- a\n- b\n")

        loader = ConfigLoader(config_file)
        with pytest.raises(ValueError, match="root must be a mapping"):
            loader.load()

    def test_missing_profile(self, tmp_path):
        config_file = tmp_path / "kdef.yaml"
        config_file.write_text(yaml.dump({"profiles": {"qemu": {"fragments": []}}}))

        loader = ConfigLoader(config_file)
        assert loader.get_profile_config("release") is None
        assert loader.get_fragments("release") == []
        assert loader.get_prefix("release") is None

    def test_parse_fragment_relative_path(self, tmp_path):
        """Test that relative paths resolve against the yaml directory."""
        config_file = tmp_path / "kdef.yaml"
        config_file.write_text("profiles: {}")
        loader = ConfigLoader(config_file)

        parsed = loader.parse_fragment({"path": "configs/base.config", "name": "base"})
        assert parsed["path"] == tmp_path / "configs" / "base.config"
        assert parsed["mode"] == "merge"
        assert parsed["name"] == "base"
        assert "filter" not in parsed

    def test_parse_fragment_string_shorthand(self, tmp_path):
        loader = ConfigLoader(tmp_path / "missing.yaml")
        parsed = loader.parse_fragment(str(tmp_path / "a.config"))
        assert parsed["path"] == tmp_path / "a.config"

    def test_parse_fragment_with_filter_and_mode(self, tmp_path):
        loader = ConfigLoader(tmp_path / "missing.yaml")
        parsed = loader.parse_fragment(
            {
                "path": str(tmp_path / "debug.fragment"),
                "mode": "override",
                "prefix": "BR2_",
                "filter": {"include_regex": "^DEBUG_", "kinds": ["bool"]},
            }
        )
        assert parsed["mode"] == "override"
        assert parsed["prefix"] == "BR2_"
        filter_obj = parsed["filter"]
        assert isinstance(filter_obj, Filter)
        assert filter_obj.include_regex.pattern == "^DEBUG_"
        assert filter_obj.kinds == frozenset({EntryKind.BOOL})

    def test_parse_fragment_missing_path(self):
        loader = ConfigLoader()
        with pytest.raises(ProfileError, match="must have a 'path'"):
            loader.parse_fragment({"name": "Invalid"})

    def test_parse_fragment_unknown_mode(self, tmp_path):
        loader = ConfigLoader(tmp_path / "missing.yaml")
        with pytest.raises(ProfileError, match="unknown mode"):
            loader.parse_fragment({"path": "a", "mode": "replace"})

    def test_parse_fragment_bad_filter(self, tmp_path):
        loader = ConfigLoader(tmp_path / "missing.yaml")
        with pytest.raises(ProfileError, match="invalid filter"):
            loader.parse_fragment({"path": "a", "filter": {"kinds": ["float"]}})
        with pytest.raises(ProfileError, match="invalid filter"):
            loader.parse_fragment({"path": "a", "filter": {"include_regex": "("}})
