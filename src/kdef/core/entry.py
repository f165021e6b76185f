"""Typed representation of a single Kconfig line."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .errors import InvalidValue


class EntryKind(str, Enum):
    """Kind of a Kconfig entry. Fixed at creation."""

    BOOL = "bool"
    TRISTATE = "tristate"
    STRING = "string"
    INT = "int"
    HEX = "hex"
    COMMENT = "comment"
    BLANK = "blank"


KEYLESS_KINDS = frozenset({EntryKind.COMMENT, EntryKind.BLANK})


class _Module(Enum):
    MODULE = "m"

    def __repr__(self) -> str:
        return "MODULE"


# Third tristate state: built as a loadable module (``=m``).
MODULE = _Module.MODULE

TristateValue = Union[bool, _Module]
EntryValue = Union[bool, _Module, str, int, None]


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_tristate_value(value: Any) -> bool:
    return value is True or value is False or value is MODULE


@dataclass(frozen=True)
class Entry:
    """One logical line of a Kconfig file.

    Build entries through the kind factories (`Entry.bool`, `Entry.hex`,
    ...), which reject values outside the kind's domain. Direct construction
    performs no checks; use `kdef.core.validator` for those.

    Attributes:
        key: Option name without prefix, or None for comments and blanks.
        value: Typed value; None for comments and blanks.
        kind: The entry kind.
        line_number: 1-based source line, None when built in code.
        source: Provenance label such as a file path.
        inline_comment: Body text of comment entries.
        metadata: Read-only auxiliary flags, e.g. ``disabled_comment``.
    """

    key: Optional[str]
    value: EntryValue
    kind: EntryKind
    line_number: Optional[int] = None
    source: Optional[str] = None
    inline_comment: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def _make(
        cls,
        key: Optional[str],
        value: EntryValue,
        kind: EntryKind,
        line_number: Optional[int] = None,
        source: Optional[str] = None,
        inline_comment: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> "Entry":
        return cls(
            key=key,
            value=value,
            kind=kind,
            line_number=line_number,
            source=source,
            inline_comment=inline_comment,
            metadata=metadata or {},
        )

    @classmethod
    def bool(cls, key: str, value: Any, **opts: Any) -> "Entry":
        """Create a boolean entry (``=y`` / ``is not set``)."""
        if not isinstance(value, bool):
            raise InvalidValue(f"bool entry {key!r} requires True or False, got {value!r}")
        return cls._make(key, value, EntryKind.BOOL, **opts)

    @classmethod
    def tristate(cls, key: str, value: Any, **opts: Any) -> "Entry":
        """Create a tristate entry (True, False or MODULE)."""
        if not is_tristate_value(value):
            raise InvalidValue(
                f"tristate entry {key!r} requires True, False or MODULE, got {value!r}"
            )
        return cls._make(key, value, EntryKind.TRISTATE, **opts)

    @classmethod
    def string(cls, key: str, value: Any, **opts: Any) -> "Entry":
        if not isinstance(value, str):
            raise InvalidValue(f"string entry {key!r} requires a str, got {value!r}")
        return cls._make(key, value, EntryKind.STRING, **opts)

    @classmethod
    def int(cls, key: str, value: Any, **opts: Any) -> "Entry":
        if not _is_integer(value):
            raise InvalidValue(f"int entry {key!r} requires an integer, got {value!r}")
        return cls._make(key, value, EntryKind.INT, **opts)

    @classmethod
    def hex(cls, key: str, value: Any, **opts: Any) -> "Entry":
        """Create a hex entry.

        Negative values are accepted here and reported by the validator.
        They render as ``0x-N``, which does not parse back as hex, so run
        `validate_config` before writing configs built in code.
        """
        if not _is_integer(value):
            raise InvalidValue(f"hex entry {key!r} requires an integer, got {value!r}")
        return cls._make(key, value, EntryKind.HEX, **opts)

    @classmethod
    def comment(cls, text: str, **opts: Any) -> "Entry":
        if not isinstance(text, str):
            raise InvalidValue(f"comment text must be a str, got {text!r}")
        opts["inline_comment"] = text
        return cls._make(None, None, EntryKind.COMMENT, **opts)

    @classmethod
    def blank(cls, **opts: Any) -> "Entry":
        return cls._make(None, None, EntryKind.BLANK, **opts)

    @property
    def is_config(self) -> bool:
        return self.kind not in KEYLESS_KINDS

    def render(self, prefix: str = "CONFIG_") -> str:
        return render(self, prefix)

    def __repr__(self) -> str:
        if self.kind is EntryKind.COMMENT:
            return f"<Entry comment: {self.inline_comment!r}>"
        if self.kind is EntryKind.BLANK:
            return "<Entry blank>"
        return f"<Entry {self.key}={self.value!r} ({self.kind.value})>"


def render(entry: Entry, prefix: str = "CONFIG_") -> str:
    """Render an entry as one line of Kconfig text."""
    kind = entry.kind
    if kind is EntryKind.COMMENT:
        return f"# {entry.inline_comment or ''}"
    if kind is EntryKind.BLANK:
        return ""
    name = f"{prefix}{entry.key}"
    if kind in (EntryKind.BOOL, EntryKind.TRISTATE):
        if entry.value is MODULE:
            return f"{name}=m"
        if entry.value:
            return f"{name}=y"
        return f"# {name} is not set"
    if kind is EntryKind.STRING:
        # Embedded quotes are written back untouched.
        return f'{name}="{entry.value}"'
    if kind is EntryKind.INT:
        return f"{name}={entry.value}"
    if kind is EntryKind.HEX:
        return f"{name}=0x{entry.value:x}"
    raise InvalidValue(f"Cannot render entry of kind {kind!r}")


def same_key(a: Entry, b: Entry) -> bool:
    return a.key is not None and a.key == b.key


def values_equal(a: Entry, b: Entry) -> bool:
    """Compare values by type and value, so ``True`` and ``1`` differ."""
    return type(a.value) is type(b.value) and a.value == b.value


def conflicts(a: Entry, b: Entry) -> bool:
    """True when both entries set the same key to different values."""
    return same_key(a, b) and not values_equal(a, b)
