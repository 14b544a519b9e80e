"""Provider discovery and selection by host platform."""

import logging
import platform
from typing import Optional

from .base import DEFAULT_COMMAND_TIMEOUT, AttributeProvider
from .linux import LinuxProvider
from .posix import PosixProvider
from .windows import WindowsProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Registry mapping provider names and platforms to provider classes."""

    _providers: dict[str, type[AttributeProvider]] = {}

    @classmethod
    def register(cls, provider_class: type[AttributeProvider]) -> None:
        """Register a provider class."""
        cls._providers[provider_class.name()] = provider_class

    @classmethod
    def get(cls, name: str) -> type[AttributeProvider] | None:
        """Get provider class by name, returning None if not found."""
        return cls._providers.get(name)

    @classmethod
    def list_all(cls) -> list[str]:
        """List all registered provider names."""
        return list(cls._providers.keys())

    @classmethod
    def for_platform(cls, system: str) -> type[AttributeProvider]:
        """Provider class for a ``platform.system()`` value.

        Unrecognized platforms get the generic POSIX provider.
        """
        for provider_class in cls._providers.values():
            if system in provider_class.platforms():
                return provider_class
        return PosixProvider


for _provider_cls in (PosixProvider, LinuxProvider, WindowsProvider):
    ProviderRegistry.register(_provider_cls)


def get_provider(
    system: Optional[str] = None,
    command_timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT,
) -> AttributeProvider:
    """Instantiate the provider for ``system`` (defaults to the running host)."""
    system = system or platform.system()
    provider_class = ProviderRegistry.for_platform(system)
    logger.debug(f"Using {provider_class.name()} provider for platform '{system}'")
    return provider_class(command_timeout=command_timeout)
