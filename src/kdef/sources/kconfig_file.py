"""Kconfig file (.config / defconfig fragment) source."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..core.config import Config
from ..core.formatter import format as format_config
from ..core.parser import parse_file
from ..core.source import Source

logger = logging.getLogger(__name__)


class KconfigFileSource(Source):
    """Configuration source backed by a Kconfig text file.

    Reading goes through `parse_file`, so entries carry the file path as
    their ``source`` and their line numbers.
    """

    def __init__(
        self,
        path: Union[str, Path],
        name: Optional[str] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize KconfigFileSource.

        Args:
            path: Path to the Kconfig file.
            name: Optional custom name for this source.
            prefix: Key prefix; inferred from the content when omitted.
        """
        self.path = Path(path)
        self.name = name or f"kconfig:{self.path.name}"
        self.id = str(self.path.resolve())
        self.prefix = prefix

    def load(self) -> Config:
        """Parse the file.

        Raises:
            FileReadError: If the file cannot be read.
        """
        config = parse_file(self.path, source=str(self.path), prefix=self.prefix)
        logger.debug("Loaded %d entries from %s", len(config), self.path)
        return config

    def save(self, config: Config) -> None:
        """Write a config to the file, ending with a newline.

        A parsed file keeps its trailing blank entry, which already renders
        the final newline.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        text = format_config(config)
        if text and not text.endswith("\n"):
            text += "\n"
        self.path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %d entries to %s", len(config), self.path)

    def exists(self) -> bool:
        return self.path.is_file()
