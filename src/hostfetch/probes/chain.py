"""Ordered fallback chains and the data-source helpers strategies are built from.

A strategy is a zero-argument callable. It returns the attribute value, or
``None`` / an empty value when its source has nothing to offer on this
host. Raising is also allowed: every exception is treated the same as an
empty result.
"""

import json
import logging
import os
import platform
import subprocess
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Strategy = Callable[[], Optional[T]]


class ProbeError(Exception):
    """Raised when a data source answered but its output could not be parsed."""


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def first_available(strategies: Sequence[Strategy], fallback: T, name: str = "") -> T:
    """Evaluate strategies in order and return the first non-empty result.

    Args:
        strategies: Callables tried in priority order.
        fallback: Placeholder returned when every strategy comes up empty.
        name: Attribute name, only used in debug logging.

    Returns:
        The first usable value, or ``fallback``.
    """
    for strategy in strategies:
        label = getattr(strategy, "__name__", repr(strategy))
        try:
            value = strategy()
        except Exception as e:
            logger.debug(f"{name or 'probe'}: {label} failed: {e}")
            continue
        if not _is_empty(value):
            return value
        logger.debug(f"{name or 'probe'}: {label} returned nothing")
    return fallback


def run_command(argv: Sequence[str], timeout: Optional[float] = None) -> Optional[str]:
    """Run a utility and return its stripped stdout.

    Returns ``None`` when the utility is missing, exits non-zero, times out,
    or prints nothing.
    """
    try:
        result = subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"{argv[0]} could not be run: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"{argv[0]} exited with code {result.returncode}")
        return None

    output = result.stdout.strip()
    return output or None


def read_text(path) -> Optional[str]:
    """Read a (pseudo-)file, returning ``None`` if it cannot be read."""
    try:
        return Path(path).read_text()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {path}: {e}")
        return None


def env_first(*names: str) -> Optional[str]:
    """Return the first environment variable in ``names`` that is set and non-empty."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def run_powershell(script: str, timeout: Optional[float] = None) -> Optional[str]:
    """Run a PowerShell snippet. Never attempted off Windows."""
    if platform.system() != "Windows":
        return None
    return run_command(["powershell", "-NoProfile", "-Command", script], timeout=timeout)


def run_powershell_json(script: str, timeout: Optional[float] = None) -> Optional[list[dict]]:
    """Run a PowerShell pipeline through ``ConvertTo-Json`` and decode it.

    PowerShell emits a bare object for a single result and an array for
    several; both come back as a list of dicts.

    Raises:
        ProbeError: If the output is not valid JSON objects.
    """
    output = run_powershell(f"{script} | ConvertTo-Json -Compress -Depth 3", timeout=timeout)
    if output is None:
        return None
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise ProbeError(f"Invalid JSON from PowerShell: {e}") from e
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ProbeError("Unexpected PowerShell JSON shape")
    return data
