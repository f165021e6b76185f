"""Loader for kdef.yaml profile files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ProfileError
from .filters import Filter
from .source import MERGE, MODES

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "kdef.yaml"


class ConfigLoader:
    """Handles loading and parsing of kdef.yaml profile files.

    A kdef.yaml file maps profile names to an ordered list of fragments::

        profiles:
          qemu:
            prefix: CONFIG_
            fragments:
              - path: configs/base.config
              - path: configs/debug.fragment
                mode: override
                filter:
                  include_regex: "^DEBUG_"
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config loader.

        Args:
            config_path: Path to kdef.yaml. If None, looks in current
                directory and parent directories.
        """
        self.config_path = self._find_config_file(config_path)
        self._config: Optional[Dict[str, Any]] = None

    def _find_config_file(
        self, config_path: Optional[Union[str, Path]] = None
    ) -> Optional[Path]:
        if config_path is not None:
            path = Path(config_path)
            if path.exists():
                return path
            return None

        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            if current == current.parent:
                return None
            current = current.parent

    @property
    def base_dir(self) -> Path:
        """Directory that relative fragment paths are resolved against."""
        if self.config_path is None:
            return Path.cwd()
        return self.config_path.parent

    def load(self) -> Dict[str, Any]:
        """Load the configuration file.

        Returns:
            Parsed configuration dictionary, or empty dict if no config file.

        Raises:
            ValueError: If the config file is invalid YAML.
        """
        if self.config_path is None:
            return {}

        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILENAME} at {self.config_path}: {e}") from e
        except OSError as e:
            logger.warning("Could not read %s at %s: %s", CONFIG_FILENAME, self.config_path, e)
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILENAME} at {self.config_path}: root must be a mapping")
        self._config = data
        return self._config

    def profile_names(self) -> List[str]:
        return list(self.load().get("profiles", {}) or {})

    def get_profile_config(self, profile_name: str) -> Optional[Dict[str, Any]]:
        """Get configuration for a specific profile, or None if not found."""
        profiles = self.load().get("profiles", {}) or {}
        return profiles.get(profile_name)

    def get_fragments(self, profile_name: str) -> List[Dict[str, Any]]:
        profile = self.get_profile_config(profile_name)
        if profile is None:
            return []
        return profile.get("fragments", []) or []

    def get_prefix(self, profile_name: str) -> Optional[str]:
        profile = self.get_profile_config(profile_name)
        if profile is None:
            return None
        return profile.get("prefix")

    def parse_fragment(self, fragment_config: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
        """Parse a fragment configuration into components.

        A bare string is shorthand for ``{"path": ...}``.

        Args:
            fragment_config: Raw fragment configuration from YAML.

        Returns:
            Dictionary with ``path``, ``mode`` and optional ``filter``,
            ``name`` and ``prefix``.

        Raises:
            ProfileError: If the fragment has no path or an unknown mode.
        """
        if isinstance(fragment_config, str):
            fragment_config = {"path": fragment_config}
        if not isinstance(fragment_config, dict) or "path" not in fragment_config:
            raise ProfileError("Fragment must have a 'path'")

        path = Path(fragment_config["path"])
        if not path.is_absolute():
            path = self.base_dir / path

        mode = fragment_config.get("mode", MERGE)
        if mode not in MODES:
            raise ProfileError(f"Fragment {path} has unknown mode {mode!r}")

        result: Dict[str, Any] = {"path": path, "mode": mode}

        filter_config = fragment_config.get("filter")
        if filter_config:
            try:
                result["filter"] = Filter.from_dict(filter_config)
            except (ValueError, TypeError, re.error) as e:
                raise ProfileError(f"Fragment {path} has an invalid filter: {e}") from e

        if "name" in fragment_config:
            result["name"] = fragment_config["name"]
        if "prefix" in fragment_config:
            result["prefix"] = fragment_config["prefix"]

        return result
