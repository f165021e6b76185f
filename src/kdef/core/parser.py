"""Parser for Kconfig configuration text.

Converts ``KEY=value`` / ``# KEY is not set`` text into a `Config` while
keeping ordering, comments, blank lines and line provenance. Lines that do
not fit the grammar are kept as comments instead of failing the parse.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Tuple, Union

from .config import DEFAULT_PREFIX, Config
from .entry import MODULE, Entry, EntryKind
from .errors import FileReadError, ParseError

logger = logging.getLogger(__name__)

# ASCII only, like a non-unicode \w.
IDENT = r"[A-Za-z0-9_]+"

# Tried in order, each against every assignment-looking line.
_PREFIX_CANDIDATES: Tuple[Pattern[str], ...] = (
    re.compile(rf"^(CONFIG_){IDENT}="),
    re.compile(rf"^(BR2_){IDENT}="),
    re.compile(rf"^([A-Z]+_){IDENT}="),
)

_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")
_INT_RE = re.compile(r"^-?[0-9]+$")
_QUOTED_RE = re.compile(r'^".*"$', re.DOTALL)


def infer_prefix(content: str) -> str:
    """Guess the key prefix used by ``content``.

    Candidates are tried in order over the whole input, so a single stray
    ``FOO_X=`` line does not hide the ``CONFIG_`` or ``BR2_`` lines after it.
    Comment and blank lines are skipped. Falls back to ``CONFIG_``.
    """
    lines = [line.strip() for line in content.split("\n")]
    lines = [line for line in lines if line and not line.startswith("#")]
    for pattern in _PREFIX_CANDIDATES:
        for line in lines:
            match = pattern.match(line)
            if match:
                logger.debug("Inferred prefix %r", match.group(1))
                return match.group(1)
    return DEFAULT_PREFIX


class _LineParser:
    """Classifies lines for one prefix."""

    def __init__(self, prefix: str, source: Optional[str]):
        self.prefix = prefix
        self.source = source
        escaped = re.escape(prefix)
        self._disabled_re = re.compile(rf"^#\s*{escaped}({IDENT})\s+is not set\s*$")
        self._assign_re = re.compile(rf"^{escaped}({IDENT})=(.+)$")

    def _opts(self, line_number: int, **extra: Any) -> Dict[str, Any]:
        return dict(line_number=line_number, source=self.source, **extra)

    def parse_line(self, line: str, line_number: int) -> Entry:
        trimmed = line.strip()
        if not trimmed:
            return Entry.blank(**self._opts(line_number))
        if trimmed.startswith("#"):
            return self._comment_line(trimmed, line_number)
        if trimmed.startswith(self.prefix):
            return self._config_line(trimmed, line_number)
        logger.debug("Line %d is not a config line, keeping as comment", line_number)
        return Entry.comment(trimmed, **self._opts(line_number))

    def _comment_line(self, line: str, line_number: int) -> Entry:
        match = self._disabled_re.match(line)
        if match:
            return Entry.bool(
                match.group(1),
                False,
                **self._opts(line_number, metadata={"disabled_comment": True}),
            )
        text = line.lstrip("#").strip()
        return Entry.comment(text, **self._opts(line_number))

    def _config_line(self, line: str, line_number: int) -> Entry:
        match = self._assign_re.match(line)
        if not match:
            logger.debug("Line %d has no assignment, keeping as comment", line_number)
            return Entry.comment(line, **self._opts(line_number))
        key, raw = match.group(1), match.group(2).strip()
        kind, value = classify_value(raw)
        opts = self._opts(line_number)
        if kind is EntryKind.BOOL:
            return Entry.bool(key, value, **opts)
        if kind is EntryKind.TRISTATE:
            return Entry.tristate(key, value, **opts)
        if kind is EntryKind.HEX:
            return Entry.hex(key, value, **opts)
        if kind is EntryKind.INT:
            return Entry.int(key, value, **opts)
        return Entry.string(key, value, **opts)


def classify_value(raw: str) -> Tuple[EntryKind, Any]:
    """Infer the kind and typed value of an assignment's right-hand side."""
    if raw in ("y", "Y"):
        return EntryKind.BOOL, True
    if raw in ("n", "N"):
        return EntryKind.BOOL, False
    if raw in ("m", "M"):
        return EntryKind.TRISTATE, MODULE
    if _QUOTED_RE.match(raw):
        return EntryKind.STRING, raw[1:-1]
    if _HEX_RE.match(raw):
        return EntryKind.HEX, int(raw[2:], 16)
    if _INT_RE.match(raw):
        return EntryKind.INT, int(raw, 10)
    return EntryKind.STRING, raw


def parse(
    content: Union[str, bytes],
    source: Optional[str] = "unknown",
    prefix: Optional[str] = None,
) -> Config:
    """Parse Kconfig text into a Config.

    Args:
        content: Full file content. Bytes are decoded as UTF-8.
        source: Provenance label stored on every entry and in the metadata.
        prefix: Key prefix. Inferred from the content when omitted.

    Returns:
        Config with one entry per input line.

    Raises:
        ParseError: If the content cannot be processed at all.
    """
    try:
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        effective_prefix = prefix if prefix is not None else infer_prefix(content)
        lines = content.split("\n")
        line_parser = _LineParser(effective_prefix, source)
        entries: List[Entry] = [
            line_parser.parse_line(line, number) for number, line in enumerate(lines, 1)
        ]
    except Exception as e:
        raise ParseError(f"Parse error: {e}") from e

    logger.debug(
        "Parsed %d lines from %s with prefix %r", len(lines), source, effective_prefix
    )
    return Config(
        entries=tuple(entries),
        prefix=effective_prefix,
        metadata={
            "source": source,
            "parsed_at": datetime.now(timezone.utc),
            "line_count": len(lines),
        },
    )


def parse_file(
    path: Union[str, Path],
    source: Optional[str] = None,
    prefix: Optional[str] = None,
) -> Config:
    """Read and parse a Kconfig file.

    ``source`` defaults to the path as given.

    Raises:
        FileReadError: If the file cannot be read or decoded.
        ParseError: If the content cannot be parsed.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, str(e)) from e
    return parse(content, source=source if source is not None else str(path), prefix=prefix)
