"""Linux provider: procfs/sysfs pseudo-files first, utilities second."""

import logging
import os
import platform
from pathlib import Path
from typing import Optional

from hostfetch.probes.chain import ProbeError
from hostfetch.probes.formatting import format_uptime, format_usage, parse_meminfo

from .posix import PosixProvider

logger = logging.getLogger(__name__)

PROC_UPTIME = Path("/proc/uptime")
PROC_MEMINFO = Path("/proc/meminfo")
PROC_CPUINFO = Path("/proc/cpuinfo")
OS_RELEASE = Path("/etc/os-release")
DMI_ID = Path("/sys/devices/virtual/dmi/id")
POWER_SUPPLY = Path("/sys/class/power_supply")

# Vendor placeholder strings commonly left in DMI tables
_DMI_JUNK = {"", "none", "default string", "to be filled by o.e.m.", "system product name", "system version"}

_GNOME_INTERFACE = "org.gnome.desktop.interface"


class LinuxProvider(PosixProvider):
    """Linux hosts."""

    STRATEGIES = {
        **PosixProvider.STRATEGIES,
        "os": ("_os_from_os_release",),
        "host": ("_host_from_dmi",),
        "uptime": ("_uptime_from_proc", "_uptime_from_psutil"),
        "display": ("_display_from_xrandr",),
        "wm_theme": ("_gtk_theme",),
        "icons": ("_icon_theme",),
        "font": ("_font_name",),
        "cursor": ("_cursor_theme",),
        "cpu": ("_cpu_from_proc", "_cpu_from_cpuinfo"),
        "gpu": ("_gpu_from_pynvml", "_gpu_from_nvidia_smi", "_gpu_from_lspci"),
        "memory": ("_memory_from_proc", "_memory_from_psutil"),
        "swap": ("_swap_from_proc", "_swap_from_psutil"),
        "battery": ("_battery_from_sysfs", "_battery_from_psutil"),
    }

    PACKAGE_MANAGERS = (
        ("dpkg", ("dpkg-query", "-f", ".\n", "-W")),
        ("rpm", ("rpm", "-qa")),
        ("pacman", ("pacman", "-Qq")),
        ("apk", ("apk", "info")),
        ("xbps", ("xbps-query", "-l")),
        ("portage", ("qlist", "-I")),
        ("flatpak", ("flatpak", "list", "--app")),
        ("snap", ("snap", "list")),
    )

    @classmethod
    def name(cls) -> str:
        return "linux"

    @classmethod
    def platforms(cls) -> tuple[str, ...]:
        return ("Linux",)

    def _os_from_os_release(self) -> Optional[str]:
        content = self._read(OS_RELEASE)
        if content is None:
            return None
        for line in content.splitlines():
            key, sep, value = line.partition("=")
            if sep and key.strip() == "PRETTY_NAME":
                pretty = value.strip().strip('"').strip("'")
                if pretty:
                    return f"{pretty} {platform.machine()}".strip()
        return None

    def _host_from_dmi(self) -> Optional[str]:
        parts = []
        for node in ("product_name", "product_version"):
            value = (self._read(DMI_ID / node) or "").strip()
            if value.lower() not in _DMI_JUNK:
                parts.append(value)
        return " ".join(parts) or None

    def _uptime_from_proc(self) -> Optional[str]:
        content = self._read(PROC_UPTIME)
        if content is None:
            return None
        fields = content.split()
        if not fields:
            raise ProbeError(f"{PROC_UPTIME} is empty")
        return format_uptime(float(fields[0]))

    def _meminfo(self) -> Optional[dict[str, int]]:
        content = self._read(PROC_MEMINFO)
        if content is None:
            return None
        return parse_meminfo(content)

    def _memory_from_proc(self) -> Optional[str]:
        meminfo = self._meminfo()
        if not meminfo or "MemTotal" not in meminfo or "MemAvailable" not in meminfo:
            return None
        total = meminfo["MemTotal"]
        return format_usage(total - meminfo["MemAvailable"], total)

    def _swap_from_proc(self) -> Optional[str]:
        meminfo = self._meminfo()
        if not meminfo or "SwapTotal" not in meminfo or "SwapFree" not in meminfo:
            return None
        total = meminfo["SwapTotal"]
        if total == 0:
            return "No swap"
        return format_usage(total - meminfo["SwapFree"], total)

    def _cpu_from_proc(self) -> Optional[str]:
        content = self._read(PROC_CPUINFO)
        if content is None:
            return None
        for line in content.splitlines():
            if line.startswith("model name"):
                _, _, model = line.partition(":")
                if model.strip():
                    return f"{model.strip()} ({os.cpu_count() or 1})"
        return None

    def _battery_from_sysfs(self) -> Optional[str]:
        try:
            supplies = sorted(POWER_SUPPLY.glob("BAT*"))
        except OSError:
            return None
        for supply in supplies:
            capacity = self._read(supply / "capacity")
            if capacity is None:
                continue
            status = (self._read(supply / "status") or "").strip()
            if status == "Discharging":
                state = "[On Battery]"
            elif status == "Charging":
                state = "[AC Connected, Charging]"
            else:
                state = "[AC Connected]"
            return f"Battery ({supply.name}): {int(capacity.strip())}% {state}"
        return None

    def _display_from_xrandr(self) -> Optional[list[str]]:
        output = self._run("xrandr", "--current")
        if output is None:
            return None
        displays = []
        connector = None
        for line in output.splitlines():
            if " connected" in line and not line.startswith(" "):
                connector = line.split()[0]
                continue
            if connector and line.startswith(" ") and "*" in line:
                tokens = line.split()
                rate = next((t for t in tokens[1:] if "*" in t), None)
                hz = round(float(rate.rstrip("*+"))) if rate else None
                suffix = f" @ {hz} Hz" if hz else ""
                displays.append(f"Display ({connector}): {tokens[0]}{suffix}")
                connector = None
        return displays

    def _gsettings(self, key: str) -> Optional[str]:
        value = self._run("gsettings", "get", _GNOME_INTERFACE, key)
        if value is None:
            return None
        return value.strip().strip("'\"") or None

    def _gtk_theme(self) -> Optional[str]:
        return self._gsettings("gtk-theme")

    def _icon_theme(self) -> Optional[str]:
        return self._gsettings("icon-theme")

    def _font_name(self) -> Optional[str]:
        return self._gsettings("font-name")

    def _cursor_theme(self) -> Optional[str]:
        theme = self._gsettings("cursor-theme")
        if theme is None:
            return None
        size = self._gsettings("cursor-size")
        return f"{theme} ({size}px)" if size and size.isdigit() else theme
