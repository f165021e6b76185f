from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from .entry import Entry

DEFAULT_PREFIX = "CONFIG_"


@dataclass(frozen=True)
class Config:
    """Ordered, immutable collection of Kconfig entries.

    Duplicate keys are legal and kept in place; lookups return the first
    match. Every modifying method returns a new Config.
    """

    entries: Tuple[Entry, ...] = ()
    prefix: str = DEFAULT_PREFIX
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # read-only private copy
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Entry],
        prefix: str = DEFAULT_PREFIX,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> "Config":
        return cls(tuple(entries), prefix, metadata or {})

    def with_entries(self, entries: Iterable[Entry]) -> "Config":
        return replace(self, entries=tuple(entries))

    def add(self, entry: Entry) -> "Config":
        return self.with_entries(self.entries + (entry,))

    def get(self, key: str) -> Optional[Entry]:
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def get_all(self, key: str) -> List[Entry]:
        return [entry for entry in self.entries if entry.key == key]

    def remove(self, key: str) -> "Config":
        return self.with_entries(e for e in self.entries if e.key != key)

    def set(self, entry: Entry) -> "Config":
        """Replace every entry for ``entry.key`` with ``entry``.

        The new entry is always appended at the end; it does not take the
        position of the entries it replaces. `operations.merge` is the
        position-preserving alternative. Comments and blanks are appended.
        """
        if entry.key is None:
            return self.add(entry)
        return self.remove(entry.key).add(entry)

    def keys(self) -> List[str]:
        return [entry.key for entry in self.entries if entry.key is not None]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        return any(entry.key == key for entry in self.entries if entry.key is not None)

    def __str__(self) -> str:
        from .formatter import format as format_config

        return format_config(self)
