"""Source implementations for kdef."""

from .kconfig_file import KconfigFileSource

__all__ = [
    "KconfigFileSource",
]
