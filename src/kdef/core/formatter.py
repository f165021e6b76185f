"""Render configs and diff reports back to text."""

from __future__ import annotations

from typing import Iterable, List

from .config import DEFAULT_PREFIX, Config
from .entry import Entry, render
from .types import DiffResult


def format(config: Config, preserve_comments: bool = True, sort_entries: bool = False) -> str:
    """Format a Config as Kconfig text.

    Args:
        config: Config to render; its own prefix is used.
        preserve_comments: Keep comment and blank entries.
        sort_entries: Sort by key. Only applies together with
            ``preserve_comments=False``; otherwise the original order is kept.

    Returns:
        Lines joined with ``\\n``, without a trailing newline.
    """
    entries: Iterable[Entry] = config.entries
    if not preserve_comments:
        entries = [entry for entry in entries if entry.is_config]
        if sort_entries:
            entries = sorted(entries, key=lambda entry: entry.key)
    return "\n".join(render(entry, config.prefix) for entry in entries)


def format_minimal(config: Config) -> str:
    return format(config, preserve_comments=False, sort_entries=True)


def _section(title: str, lines: List[str]) -> List[str]:
    if not lines:
        return []
    return [title, "", *lines, ""]


def format_diff(diff_result: DiffResult, prefix: str = DEFAULT_PREFIX) -> str:
    """Human-readable report of a `DiffResult`. Empty sections are omitted."""
    changed: List[str] = []
    for old, new in diff_result.changed:
        changed.append(f"- {render(old, prefix)}")
        changed.append(f"+ {render(new, prefix)}")

    lines = [
        *_section("Added entries:", [f"+ {render(e, prefix)}" for e in diff_result.added]),
        *_section("Removed entries:", [f"- {render(e, prefix)}" for e in diff_result.removed]),
        *_section("Changed entries:", changed),
        f"Unchanged entries: {diff_result.unchanged_count}",
    ]
    return "\n".join(lines)
