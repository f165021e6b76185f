"""Profiles: named stacks of config fragments."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from .config import DEFAULT_PREFIX, Config
from .config_loader import ConfigLoader
from .errors import ProfileError
from .filters import Filter
from .operations import filter as filter_entries
from .operations import merge, override
from .source import MERGE, OVERRIDE, RegisteredSource, Source

logger = logging.getLogger(__name__)


class Profile:
    """Combine config fragments into one Config.

    Fragments are applied in registration order on top of an empty config:
    ``merge`` fragments replace keys in place and append new ones,
    ``override`` fragments only replace keys that are already present.
    Entries keep their source path, so `operations.group_by_source` on the
    result tells where each value came from.
    """

    def __init__(
        self,
        name: str,
        fragments: Optional[List[Union[str, Path]]] = None,
        config_path: Optional[Union[str, Path]] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a Profile.

        Args:
            name: Name of the profile in kdef.yaml (e.g. "qemu", "release").
            fragments: Optional list of fragment files registered after the
                ones listed in kdef.yaml.
            config_path: Optional path to kdef.yaml. If not provided,
                searches the current and parent directories.
            prefix: Key prefix of the result. Defaults to the profile's
                ``prefix`` setting, then ``CONFIG_``.
        """
        self.name = name
        self._registered: List[RegisteredSource] = []
        self._config_loader = ConfigLoader(config_path)
        self.prefix = prefix or self._config_loader.get_prefix(name) or DEFAULT_PREFIX

        self._load_from_config_file()

        if fragments:
            self.register_fragments(*fragments)

    def _load_from_config_file(self) -> None:
        """Register fragments listed for this profile in kdef.yaml."""
        for fragment_config in self._config_loader.get_fragments(self.name):
            try:
                parsed = self._config_loader.parse_fragment(fragment_config)
            except ProfileError as e:
                logger.warning("Skipping fragment of profile %r: %s", self.name, e)
                continue
            self.register_fragment(
                parsed["path"],
                mode=parsed["mode"],
                filter=parsed.get("filter"),
                name=parsed.get("name"),
                prefix=parsed.get("prefix"),
            )

    def register_fragments(self, *paths: Union[str, Path]) -> None:
        for path in paths:
            self.register_fragment(path)

    def register_fragment(
        self,
        path: Union[str, Path],
        *,
        mode: str = MERGE,
        filter: Optional[Filter] = None,
        name: Optional[str] = None,
        prefix: Optional[str] = None,
    ) -> None:
        """Register a fragment file.

        Args:
            path: Path to the Kconfig fragment.
            mode: ``merge`` or ``override``.
            filter: Optional filter applied to the fragment's entries.
            name: Optional name for the source.
            prefix: Fragment prefix; defaults to the profile prefix.
        """
        from ..sources.kconfig_file import KconfigFileSource

        source = KconfigFileSource(path, name=name, prefix=prefix or self.prefix)
        self._registered.append(RegisteredSource(source=source, mode=mode, filter=filter))

    def add_source(self, source: Source, *, mode: str = MERGE, filter: Optional[Filter] = None) -> None:
        """Register a ready-made source instance."""
        self._registered.append(RegisteredSource(source=source, mode=mode, filter=filter))

    @property
    def registered_sources(self) -> List[RegisteredSource]:
        return list(self._registered)

    def get_config(self) -> Config:
        """Load every fragment and fold them into one Config.

        Raises:
            ProfileError: If the profile has no fragments.
            FileReadError: If a fragment cannot be read.
        """
        if not self._registered:
            raise ProfileError(f"Profile {self.name!r} has no fragments")

        result = Config(prefix=self.prefix, metadata={"profile": self.name})
        for rs in self._registered:
            fragment = rs.source.load()
            if rs.filter is not None:
                fragment = filter_entries(fragment, rs.filter)
            if rs.mode == OVERRIDE:
                result = override(result, fragment)
            else:
                result = merge(result, fragment)
            logger.debug("Applied %s fragment %s", rs.mode, rs.source.name)

        sources = [rs.source.id for rs in self._registered]
        return Config(
            entries=result.entries,
            prefix=self.prefix,
            metadata={**result.metadata, "profile": self.name, "sources": sources},
        )

    def save(self, config: Config, path: Union[str, Path]) -> None:
        from ..sources.kconfig_file import KconfigFileSource

        KconfigFileSource(path, prefix=config.prefix).save(config)

    @property
    def config_file_path(self) -> Optional[Path]:
        """Path to the loaded kdef.yaml file, if any."""
        return self._config_loader.config_path
