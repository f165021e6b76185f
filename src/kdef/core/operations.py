"""Merge, diff and override logic for Kconfig configurations."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .config import Config
from .entry import Entry, conflicts
from .types import DiffResult

logger = logging.getLogger(__name__)

Predicate = Callable[[Entry], bool]


def _entries_by_key(config: Config) -> Dict[str, Entry]:
    # later duplicates win
    return {entry.key: entry for entry in config.entries if entry.key is not None}


def _find_index(entries: List[Entry], key: str) -> Optional[int]:
    for index, entry in enumerate(entries):
        if entry.key == key:
            return index
    return None


def merge(base: Config, override: Config) -> Config:
    """Merge two configs with ``override`` taking precedence.

    Base order is kept: a keyed override entry replaces the first entry
    with the same key in place, or is appended when the key is new.
    Comments and blanks from ``override`` are always appended.

    Args:
        base: Config providing order and defaults.
        override: Config whose entries win.

    Returns:
        New Config with the base prefix and shallow-merged metadata.
    """
    result: List[Entry] = list(base.entries)
    replaced = appended = 0

    for entry in override.entries:
        if entry.key is None:
            result.append(entry)
            continue
        index = _find_index(result, entry.key)
        if index is None:
            result.append(entry)
            appended += 1
        else:
            result[index] = entry
            replaced += 1

    logger.debug("Merged config: %d replaced, %d appended", replaced, appended)
    return Config(
        entries=tuple(result),
        prefix=base.prefix,
        metadata={**base.metadata, **override.metadata},
    )


def diff(base: Config, target: Config) -> DiffResult:
    """Compare two configs key by key.

    Comments and blanks are ignored. With duplicate keys the last entry
    counts. Results follow target order for ``added``/``changed`` and base
    order for ``removed``.
    """
    base_map = _entries_by_key(base)
    target_map = _entries_by_key(target)

    added = [entry for key, entry in target_map.items() if key not in base_map]
    removed = [entry for key, entry in base_map.items() if key not in target_map]
    changed = []
    unchanged = 0
    for key, target_entry in target_map.items():
        base_entry = base_map.get(key)
        if base_entry is None:
            continue
        if conflicts(base_entry, target_entry):
            changed.append((base_entry, target_entry))
        else:
            unchanged += 1

    return DiffResult(added=added, removed=removed, changed=changed, unchanged_count=unchanged)


def override(base: Config, overlay: Config) -> Config:
    """Replace base entries with overlay entries of the same key.

    Unlike `merge`, keys that exist only in ``overlay`` are dropped, so the
    result has exactly the keys of ``base`` in the same order.
    """
    overlay_map = _entries_by_key(overlay)
    entries = [
        overlay_map.get(entry.key, entry) if entry.key is not None else entry
        for entry in base.entries
    ]
    dropped = [key for key in overlay_map if key not in base]
    if dropped:
        logger.debug("Override ignored %d keys absent from base: %s", len(dropped), dropped)
    return Config(
        entries=tuple(entries),
        prefix=base.prefix,
        metadata={**base.metadata, **overlay.metadata},
    )


def filter(config: Config, predicate: Predicate) -> Config:
    return config.with_entries(entry for entry in config.entries if predicate(entry))


def config_only(config: Config) -> Config:
    """Drop comment and blank entries."""
    return filter(config, lambda entry: entry.is_config)


def group_by_source(config: Config) -> Dict[Optional[str], List[Entry]]:
    groups: Dict[Optional[str], List[Entry]] = {}
    for entry in config.entries:
        groups.setdefault(entry.source, []).append(entry)
    return groups
