"""kdef - Kconfig configuration library.

Parse, build, merge, override, diff and render Kconfig-style
``CONFIG_FOO=y`` files while keeping ordering, comments and provenance.
"""

from .core.entry import MODULE, Entry, EntryKind
from .core.config import Config
from .core.errors import (
    FileReadError,
    InvalidConfig,
    InvalidValue,
    KdefError,
    ParseError,
    ProfileError,
)
from .core.parser import parse, parse_file
from .core.formatter import format, format_diff, format_minimal
from .core.operations import config_only, diff, group_by_source, merge, override
from .core.validator import validate_config, validate_entry
from .core.filters import Filter
from .core.builder import ConfigBuilder
from .core.profile import Profile
from .sources.kconfig_file import KconfigFileSource

__version__ = "0.1.0"

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
    "parse",
    "parse_file",
    "format",
    "format_minimal",
    "format_diff",
    "merge",
    "diff",
    "override",
    "config_only",
    "group_by_source",
    "validate_entry",
    "validate_config",
    "Filter",
    "ConfigBuilder",
    "Profile",
    "KconfigFileSource",
]
