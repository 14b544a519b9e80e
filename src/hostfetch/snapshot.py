"""System snapshot collection."""

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any

from hostfetch.providers.base import AttributeProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SystemSnapshot:
    """Display-ready host attributes collected once per run."""

    username: str
    hostname: str
    os: str
    host: str
    kernel: str
    uptime: str
    packages: str
    shell: str
    display: tuple[str, ...] = ()
    de: str = "unknown"
    wm: str = "unknown"
    wm_theme: str = "unknown"
    icons: str = "unknown"
    font: str = "unknown"
    cursor: str = "unknown"
    terminal: str = "unknown"
    cpu: str = "unknown"
    gpu: tuple[str, ...] = ()
    memory: str = "unknown"
    swap: str = "unknown"
    disk: tuple[str, ...] = ()
    local_ip: str = "unknown"
    battery: str = "No battery detected"
    locale: str = "unknown"

    def __post_init__(self):
        # List-valued attributes are stored as tuples
        for name in ("display", "gpu", "disk"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def attribute_names() -> list[str]:
    """Snapshot field names in display order."""
    return [f.name for f in fields(SystemSnapshot)]


def collect_snapshot(provider: AttributeProvider) -> SystemSnapshot:
    """Ask ``provider`` for every attribute and assemble the snapshot.

    Provider methods never raise for unavailable data, so neither does this.
    """
    values = {name: getattr(provider, name)() for name in attribute_names()}
    snapshot = SystemSnapshot(**values)
    logger.debug(f"Collected snapshot via {provider.name()}: {snapshot.as_dict()}")
    return snapshot
