"""Source protocol and registration for config fragments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .config import Config
from .filters import Filter

MERGE = "merge"
OVERRIDE = "override"
MODES = (MERGE, OVERRIDE)


class Source(Protocol):
    """Interface for anything that can provide or store a Config.

    The core library never touches files itself; sources are the boundary
    where text is read and written.
    """

    id: str
    name: str

    def load(self) -> Config:
        """Load and parse the source.

        Returns:
            Parsed configuration.
        """
        ...

    def save(self, config: Config) -> None:
        """Persist a configuration to the source.

        Args:
            config: Configuration to write.
        """
        ...

    def exists(self) -> bool:
        """Check whether the source currently has content to load."""
        ...


@dataclass
class RegisteredSource:
    """A source registered with a Profile.

    Attributes:
        source: The source instance.
        mode: How the fragment is combined: ``merge`` adds new keys,
            ``override`` only replaces existing ones.
        filter: Optional filter applied to the loaded entries.
    """

    source: Source
    mode: str = MERGE
    filter: Optional[Filter] = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Unknown fragment mode {self.mode!r}, expected one of {MODES}")
