"""Abstract base class for platform attribute providers.

A provider answers one method per snapshot attribute. Each attribute has
an ordered tuple of strategy method names in ``STRATEGIES`` and a
placeholder in ``FALLBACKS``; ``probe()`` walks the tuple and returns the
first usable value. Subclasses extend the tables rather than overriding
the attribute methods.
"""

import getpass
import ipaddress
import logging
import os
import platform
import socket
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from hostfetch.probes.chain import (
    env_first,
    first_available,
    read_text,
    run_command,
    run_powershell,
    run_powershell_json,
)
from hostfetch.probes.formatting import GIB, format_uptime, format_usage

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_TIMEOUT = 10.0

# Filesystems that show up as partitions but are not disks a user cares about
_PSEUDO_FILESYSTEMS = {"squashfs", "tmpfs", "devtmpfs", "iso9660", "udf"}


class AttributeProvider(ABC):
    """Collects every snapshot attribute for one platform family."""

    STRATEGIES: dict[str, tuple[str, ...]] = {
        "username": ("_username_from_env", "_username_from_getpass"),
        "hostname": ("_hostname_from_socket",),
        "kernel": ("_kernel_from_platform",),
        "uptime": ("_uptime_from_psutil",),
        "terminal": ("_terminal_from_env",),
        "cpu": ("_cpu_from_cpuinfo",),
        "gpu": ("_gpu_from_pynvml", "_gpu_from_nvidia_smi"),
        "memory": ("_memory_from_psutil",),
        "swap": ("_swap_from_psutil",),
        "disk": ("_disk_from_psutil",),
        "local_ip": ("_local_ip_from_psutil",),
        "battery": ("_battery_from_psutil",),
        "locale": ("_locale_from_env",),
    }

    FALLBACKS: dict[str, Any] = {
        "username": "unknown",
        "hostname": "unknown",
        "host": "Unknown",
        "kernel": "unknown",
        "uptime": "unknown",
        "packages": "0",
        "shell": "unknown",
        "display": [],
        "de": "unknown",
        "wm": "unknown",
        "wm_theme": "unknown",
        "icons": "unknown",
        "font": "unknown",
        "cursor": "unknown",
        "terminal": "unknown",
        "gpu": ["Unknown GPU"],
        "memory": "unknown",
        "swap": "unknown",
        "disk": ["Unknown disk"],
        "local_ip": "unknown",
        "battery": "No battery detected",
        "locale": "unknown",
    }

    def __init__(self, command_timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT) -> None:
        self.command_timeout = command_timeout

    @classmethod
    @abstractmethod
    def name(cls) -> str:
        """Provider identifier (e.g., 'linux', 'windows')."""

    @classmethod
    def platforms(cls) -> tuple[str, ...]:
        """``platform.system()`` values this provider is registered for."""
        return ()

    # -- probe machinery -------------------------------------------------

    def probe(self, attribute: str) -> Any:
        """Run the strategy chain for ``attribute``."""
        strategies = [getattr(self, method) for method in self.STRATEGIES.get(attribute, ())]
        return first_available(strategies, self.fallback(attribute), name=attribute)

    def fallback(self, attribute: str) -> Any:
        """Placeholder for ``attribute`` when no strategy produced a value."""
        if attribute == "os":
            system = platform.system().lower() or "unknown"
            return f"{system} {platform.machine()}".strip()
        if attribute == "cpu":
            return f"Unknown ({os.cpu_count() or 1} cores)"
        value = self.FALLBACKS[attribute]
        return list(value) if isinstance(value, list) else value

    def _run(self, *argv: str) -> Optional[str]:
        return run_command(argv, timeout=self.command_timeout)

    def _read(self, path) -> Optional[str]:
        return read_text(path)

    def _powershell(self, script: str) -> Optional[str]:
        return run_powershell(script, timeout=self.command_timeout)

    def _powershell_json(self, script: str) -> Optional[list[dict]]:
        return run_powershell_json(script, timeout=self.command_timeout)

    # -- attributes --------------------------------------------------------

    def username(self) -> str:
        return self.probe("username")

    def hostname(self) -> str:
        return self.probe("hostname")

    def os(self) -> str:
        return self.probe("os")

    def host(self) -> str:
        return self.probe("host")

    def kernel(self) -> str:
        return self.probe("kernel")

    def uptime(self) -> str:
        return self.probe("uptime")

    def packages(self) -> str:
        return self.probe("packages")

    def shell(self) -> str:
        return self.probe("shell")

    def display(self) -> list[str]:
        return self.probe("display")

    def de(self) -> str:
        return self.probe("de")

    def wm(self) -> str:
        return self.probe("wm")

    def wm_theme(self) -> str:
        return self.probe("wm_theme")

    def icons(self) -> str:
        return self.probe("icons")

    def font(self) -> str:
        return self.probe("font")

    def cursor(self) -> str:
        return self.probe("cursor")

    def terminal(self) -> str:
        return self.probe("terminal")

    def cpu(self) -> str:
        return self.probe("cpu")

    def gpu(self) -> list[str]:
        return self.probe("gpu")

    def memory(self) -> str:
        return self.probe("memory")

    def swap(self) -> str:
        return self.probe("swap")

    def disk(self) -> list[str]:
        return self.probe("disk")

    def local_ip(self) -> str:
        return self.probe("local_ip")

    def battery(self) -> str:
        return self.probe("battery")

    def locale(self) -> str:
        return self.probe("locale")

    # -- shared strategies -------------------------------------------------

    def _username_from_env(self) -> Optional[str]:
        return env_first("USER", "USERNAME")

    def _username_from_getpass(self) -> Optional[str]:
        return getpass.getuser()

    def _hostname_from_socket(self) -> Optional[str]:
        return socket.gethostname()

    def _kernel_from_platform(self) -> Optional[str]:
        return platform.release()

    def _terminal_from_env(self) -> Optional[str]:
        return env_first("TERM_PROGRAM", "TERMINAL_EMULATOR")

    def _locale_from_env(self) -> Optional[str]:
        return env_first("LANG")

    def _uptime_from_psutil(self) -> Optional[str]:
        import psutil

        return format_uptime(time.time() - psutil.boot_time())

    def _cpu_from_cpuinfo(self) -> Optional[str]:
        import cpuinfo

        brand = cpuinfo.get_cpu_info().get("brand_raw")
        if not brand:
            return None
        return f"{brand} ({os.cpu_count() or 1})"

    def _gpu_from_pynvml(self) -> Optional[list[str]]:
        import pynvml

        pynvml.nvmlInit()
        try:
            gpus = []
            for index in range(pynvml.nvmlDeviceGetCount()):
                handle = pynvml.nvmlDeviceGetHandleByIndex(index)
                name = pynvml.nvmlDeviceGetName(handle)
                if isinstance(name, bytes):
                    name = name.decode("utf-8")
                mem = pynvml.nvmlDeviceGetMemoryInfo(handle)
                gpus.append(f"{name} ({mem.total / GIB:.2f} GiB) [Discrete]")
            return gpus
        finally:
            pynvml.nvmlShutdown()

    def _gpu_from_nvidia_smi(self) -> Optional[list[str]]:
        output = self._run(
            "nvidia-smi", "--query-gpu=name,memory.total", "--format=csv,noheader,nounits"
        )
        if output is None:
            return None
        gpus = []
        for line in output.splitlines():
            name, _, mem_mib = line.rpartition(",")
            if not name:
                continue
            try:
                memory = f"{int(mem_mib.strip()) / 1024:.2f} GiB"
            except ValueError:
                # [N/A] on boards with shared memory
                memory = "Unknown"
            gpus.append(f"{name.strip()} ({memory}) [Discrete]")
        return gpus

    def _memory_from_psutil(self) -> Optional[str]:
        import psutil

        mem = psutil.virtual_memory()
        return format_usage(mem.total - mem.available, mem.total)

    def _swap_from_psutil(self) -> Optional[str]:
        import psutil

        swap = psutil.swap_memory()
        if swap.total == 0:
            return "No swap"
        return format_usage(swap.total - swap.free, swap.total)

    def _disk_from_psutil(self) -> Optional[list[str]]:
        import psutil

        lines = []
        seen = set()
        for part in psutil.disk_partitions(all=False):
            if part.fstype in _PSEUDO_FILESYSTEMS or part.mountpoint in seen:
                continue
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError as e:
                logger.debug(f"Skipping {part.mountpoint}: {e}")
                continue
            if usage.total <= 0:
                continue
            seen.add(part.mountpoint)
            mount = part.mountpoint.rstrip("\\") or part.mountpoint
            used = usage.total - usage.free
            lines.append(f"Disk ({mount}): {format_usage(used, usage.total)} - {part.fstype}")
        return lines

    def _local_ip_from_psutil(self) -> Optional[str]:
        import psutil

        stats = psutil.net_if_stats()
        for iface, addresses in psutil.net_if_addrs().items():
            iface_stats = stats.get(iface)
            if iface_stats is None or not iface_stats.isup:
                continue
            for addr in addresses:
                if addr.family != socket.AF_INET:
                    continue
                if addr.address.startswith(("127.", "169.254.")):
                    continue
                return f"Local IP ({iface}): {addr.address}/{_prefix_length(addr.netmask)}"
        return "No active network connection"

    def _battery_from_psutil(self) -> Optional[str]:
        import psutil

        battery = psutil.sensors_battery()
        if battery is None:
            return None
        return f"Battery: {int(battery.percent)}% {_power_status(battery.power_plugged, battery.percent)}"


def _prefix_length(netmask: Optional[str]) -> int:
    if not netmask:
        return 32
    return ipaddress.IPv4Network(f"0.0.0.0/{netmask}").prefixlen


def _power_status(plugged: Optional[bool], percent: float) -> str:
    if plugged is False:
        return "[On Battery]"
    if plugged and percent < 100:
        return "[AC Connected, Charging]"
    return "[AC Connected]"
