"""Structural checks over entries and configs.

Validation is opt-in and never raises: failures come back as a falsy
`ValidationResult`.
"""

from __future__ import annotations

from typing import Any

from .config import Config
from .entry import KEYLESS_KINDS, Entry, EntryKind, is_tristate_value
from .types import ValidationResult

INVALID_KEY = "Invalid key"
INVALID_VALUE = "Invalid value for type"


def _key_ok(key: Any, kind: Any) -> bool:
    if kind in KEYLESS_KINDS:
        return key is None
    return isinstance(key, str) and len(key) > 0


def _value_ok(value: Any, kind: Any) -> bool:
    if kind in KEYLESS_KINDS:
        return value is None
    if kind is EntryKind.BOOL:
        return isinstance(value, bool)
    if kind is EntryKind.TRISTATE:
        return is_tristate_value(value)
    if kind is EntryKind.STRING:
        return isinstance(value, str)
    integer = isinstance(value, int) and not isinstance(value, bool)
    if kind is EntryKind.INT:
        return integer
    if kind is EntryKind.HEX:
        return integer and value >= 0
    return False


def validate_entry(entry: Entry) -> ValidationResult:
    if not _key_ok(entry.key, entry.kind):
        return ValidationResult.invalid(INVALID_KEY)
    if not _value_ok(entry.value, entry.kind):
        return ValidationResult.invalid(INVALID_VALUE)
    return ValidationResult.valid()


def validate_config(config: Config) -> ValidationResult:
    """Validate entries in order, stopping at the first invalid one."""
    for index, entry in enumerate(config.entries):
        result = validate_entry(entry)
        if not result:
            return ValidationResult.invalid(result.reason or INVALID_VALUE, index=index)
    return ValidationResult.valid()
