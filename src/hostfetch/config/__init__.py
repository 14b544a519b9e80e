"""Configuration loading."""

from .loader import ConfigError, load_hostfetch_config
from .models import ColorConfig, HostfetchConfig

__all__ = ["ColorConfig", "ConfigError", "HostfetchConfig", "load_hostfetch_config"]
