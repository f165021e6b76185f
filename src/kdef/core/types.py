"""Value types returned by kdef operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .entry import Entry
from .errors import InvalidConfig


@dataclass(frozen=True)
class DiffResult:
    """Key-level comparison of two configs.

    Attributes:
        added: Entries whose key exists only in the target.
        removed: Entries whose key exists only in the base.
        changed: ``(base_entry, target_entry)`` pairs whose values differ.
        unchanged_count: Number of shared keys with equal values.
    """

    added: List[Entry] = field(default_factory=list)
    removed: List[Entry] = field(default_factory=list)
    changed: List[Tuple[Entry, Entry]] = field(default_factory=list)
    unchanged_count: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.changed)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an entry or a config.

    Truthy when valid. ``index`` is only set for config validation.
    """

    ok: bool
    reason: Optional[str] = None
    index: Optional[int] = None

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def invalid(cls, reason: str, index: Optional[int] = None) -> "ValidationResult":
        return cls(ok=False, reason=reason, index=index)

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_invalid(self) -> None:
        if not self.ok:
            raise InvalidConfig(self.index if self.index is not None else 0, self.reason or "")
