"""Per-platform attribute providers."""

from .base import AttributeProvider
from .linux import LinuxProvider
from .posix import PosixProvider
from .registry import ProviderRegistry, get_provider
from .windows import WindowsProvider

__all__ = [
    "AttributeProvider",
    "LinuxProvider",
    "PosixProvider",
    "ProviderRegistry",
    "WindowsProvider",
    "get_provider",
]
