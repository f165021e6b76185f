"""Fluent construction of configs in code."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .config import DEFAULT_PREFIX, Config
from .entry import MODULE, Entry, EntryKind
from .errors import InvalidValue


class ConfigBuilder:
    """Build a Config entry by entry.

    Every method returns the builder so calls can be chained::

        config = (
            ConfigBuilder()
            .enable("DEBUG")
            .module("E1000")
            .hex("BASE_ADDR", 0x1000)
            .build()
        )

    Entry options (``line_number``, ``source``, ``inline_comment``,
    ``metadata``) are passed through to the `Entry` factories.
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX, metadata: Optional[Dict[str, Any]] = None):
        self._config = Config(prefix=prefix, metadata=dict(metadata or {}))

    def add(self, entry: Entry) -> "ConfigBuilder":
        self._config = self._config.add(entry)
        return self

    def bool(self, key: str, value: Any, **opts: Any) -> "ConfigBuilder":
        return self.add(Entry.bool(key, value, **opts))

    def tristate(self, key: str, value: Any, **opts: Any) -> "ConfigBuilder":
        return self.add(Entry.tristate(key, value, **opts))

    def string(self, key: str, value: Any, **opts: Any) -> "ConfigBuilder":
        return self.add(Entry.string(key, value, **opts))

    def int(self, key: str, value: Any, **opts: Any) -> "ConfigBuilder":
        return self.add(Entry.int(key, value, **opts))

    def hex(self, key: str, value: Any, **opts: Any) -> "ConfigBuilder":
        return self.add(Entry.hex(key, value, **opts))

    def comment(self, text: str, **opts: Any) -> "ConfigBuilder":
        return self.add(Entry.comment(text, **opts))

    def blank(self, **opts: Any) -> "ConfigBuilder":
        return self.add(Entry.blank(**opts))

    def _switch(self, key: str, value: Any, kind: Any, opts: Dict[str, Any]) -> "ConfigBuilder":
        try:
            kind = EntryKind(kind)
        except ValueError as e:
            raise InvalidValue(f"Unknown entry kind {kind!r}") from e
        if kind is EntryKind.BOOL:
            return self.bool(key, value, **opts)
        if kind is EntryKind.TRISTATE:
            return self.tristate(key, value, **opts)
        raise InvalidValue(f"enable/disable only supports bool or tristate, got {kind.value!r}")

    def enable(self, key: str, kind: Any = EntryKind.BOOL, **opts: Any) -> "ConfigBuilder":
        return self._switch(key, True, kind, opts)

    def disable(self, key: str, kind: Any = EntryKind.BOOL, **opts: Any) -> "ConfigBuilder":
        return self._switch(key, False, kind, opts)

    def module(self, key: str, **opts: Any) -> "ConfigBuilder":
        """Mark a tristate option as built as a module (``=m``)."""
        return self.tristate(key, MODULE, **opts)

    def build(self) -> Config:
        return self._config
