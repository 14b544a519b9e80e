"""YAML configuration file loading with Pydantic validation."""

import logging
import os
from pathlib import Path
from typing import Optional, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .models import HostfetchConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

CONFIG_ENV_VAR = "HOSTFETCH_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "hostfetch" / "config.yaml"


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top level of {path}")
    return data


def load_config(path: Path, model_class: type[T]) -> T:
    """Load and validate a YAML config file against a Pydantic model.

    Raises:
        ConfigError: If validation fails.
    """
    data = load_yaml(path)
    try:
        return model_class(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e


def resolve_config_path(path: Optional[Path] = None) -> Optional[Path]:
    """Pick the config file to load.

    An explicit path wins, then ``$HOSTFETCH_CONFIG``, then the default
    location if it exists. Returns None when there is nothing to load.
    """
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.is_file():
        return DEFAULT_CONFIG_PATH
    return None


def load_hostfetch_config(path: Optional[Path] = None) -> HostfetchConfig:
    """Load the hostfetch configuration, falling back to defaults."""
    resolved = resolve_config_path(path)
    if resolved is None:
        logger.debug("No configuration file; using defaults")
        return HostfetchConfig()
    logger.debug(f"Loading configuration from {resolved}")
    return load_config(resolved, HostfetchConfig)
