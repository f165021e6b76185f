from .entry import MODULE, Entry, EntryKind
from .config import Config
from .errors import (
    FileReadError,
    InvalidConfig,
    InvalidValue,
    KdefError,
    ParseError,
    ProfileError,
)
from .types import DiffResult, ValidationResult
from .parser import parse, parse_file
from .formatter import format, format_diff, format_minimal
from .operations import config_only, diff, filter, group_by_source, merge, override
from .validator import validate_config, validate_entry
from .filters import Filter
from .builder import ConfigBuilder
from .source import RegisteredSource, Source
from .profile import Profile

__all__ = [
    "MODULE",
    "Entry",
    "EntryKind",
    "Config",
    "KdefError",
    "InvalidValue",
    "ParseError",
    "InvalidConfig",
    "FileReadError",
    "ProfileError",
    "DiffResult",
    "ValidationResult",
    "parse",
    "parse_file",
    "format",
    "format_minimal",
    "format_diff",
    "merge",
    "diff",
    "override",
    "filter",
    "config_only",
    "group_by_source",
    "validate_entry",
    "validate_config",
    "Filter",
    "ConfigBuilder",
    "Source",
    "RegisteredSource",
    "Profile",
]
