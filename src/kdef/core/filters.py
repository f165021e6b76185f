"""Declarative entry filters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Optional, Pattern

from .entry import Entry, EntryKind


@dataclass(frozen=True)
class Filter:
    """Predicate selecting entries by key, kind and source.

    Instances are callable and can be passed to `operations.filter`.

    Attributes:
        include_regex: Pattern searched against keys. Keyless entries pass.
        kinds: Allowed entry kinds, or None for all.
        sources: Allowed source labels, or None for all.
    """

    include_regex: Optional[Pattern[str]] = None
    kinds: Optional[FrozenSet[EntryKind]] = None
    sources: Optional[FrozenSet[Optional[str]]] = None

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> Optional["Filter"]:
        """Create a Filter from a mapping such as a kdef.yaml ``filter`` block.

        Args:
            d: Mapping with optional ``include_regex``, ``kinds`` and
                ``sources`` keys.

        Returns:
            Filter instance or None if d is None/empty.

        Raises:
            ValueError: If a kind name is unknown.
        """
        if not d:
            return None
        regex = d.get("include_regex")
        compiled: Optional[Pattern[str]] = (
            re.compile(regex) if isinstance(regex, str) else None
        )
        kinds = d.get("kinds")
        sources = d.get("sources")
        return Filter(
            include_regex=compiled,
            kinds=_kinds(kinds) if kinds else None,
            sources=frozenset(sources) if sources else None,
        )

    def __call__(self, entry: Entry) -> bool:
        return should_include_entry(entry, self)


def _kinds(names: Iterable[Any]) -> FrozenSet[EntryKind]:
    return frozenset(EntryKind(name) for name in names)


def should_include_entry(entry: Entry, flt: Optional[Filter]) -> bool:
    """Check if an entry passes a filter (None includes everything)."""
    if flt is None:
        return True
    if flt.kinds is not None and entry.kind not in flt.kinds:
        return False
    if flt.sources is not None and entry.source not in flt.sources:
        return False
    if flt.include_regex and entry.key is not None:
        return bool(flt.include_regex.search(entry.key))
    return True
