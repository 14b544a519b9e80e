"""Windows provider: psutil and CIM queries (PowerShell with JSON output)."""

import logging
import platform
from typing import Optional

from hostfetch.probes.chain import env_first
from hostfetch.probes.formatting import GIB, basename_of, format_uptime, format_usage

from .base import AttributeProvider

logger = logging.getLogger(__name__)

_PERSONALIZE_KEY = r"SOFTWARE\Microsoft\Windows\CurrentVersion\Themes\Personalize"

# Builds above this number are Insider/dev channel releases
_DEV_BUILD_THRESHOLD = 22000

_BATTERY_STATUS = {
    1: "[On Battery]",
    2: "[AC Connected, Charging]",
}


class WindowsProvider(AttributeProvider):
    """Windows hosts."""

    STRATEGIES = {
        **AttributeProvider.STRATEGIES,
        "hostname": ("_hostname_from_env", "_hostname_from_socket"),
        "os": ("_os_from_cim",),
        "host": ("_host_from_cim",),
        "kernel": ("_kernel_from_cim", "_kernel_from_platform_version"),
        "uptime": ("_uptime_from_cim", "_uptime_from_psutil"),
        "packages": ("_packages_from_choco", "_packages_from_winget"),
        "shell": ("_shell_from_powershell", "_shell_from_env"),
        "display": ("_display_from_cim",),
        "wm": ("_wm_from_cim",),
        "wm_theme": ("_theme_from_registry",),
        "cpu": ("_cpu_from_cim", "_cpu_from_cpuinfo"),
        "gpu": ("_gpu_from_cim", "_gpu_from_pynvml", "_gpu_from_nvidia_smi"),
        "memory": ("_memory_from_psutil", "_memory_from_cim"),
        "swap": ("_swap_from_psutil", "_swap_from_cim"),
        "disk": ("_disk_from_psutil", "_disk_from_cim"),
        "local_ip": ("_local_ip_from_psutil", "_local_ip_from_cim"),
        "battery": ("_battery_from_psutil", "_battery_from_cim"),
        "locale": ("_locale_from_culture", "_locale_from_env"),
    }

    FALLBACKS = {
        **AttributeProvider.FALLBACKS,
        "display": ["Display: 1920x1080 @ 60 Hz [Built-in]"],
        "de": "Fluent",
        "wm": "Desktop Window Manager",
        "font": "Segoe UI (12pt) [Caption / Menu / Message / Status]",
        "cursor": "Windows Default (32px)",
        "terminal": "Windows Terminal",
    }

    @classmethod
    def name(cls) -> str:
        return "windows"

    @classmethod
    def platforms(cls) -> tuple[str, ...]:
        return ("Windows",)

    def _cim(self, class_name: str, *properties: str) -> Optional[list[dict]]:
        select = ",".join(properties)
        return self._powershell_json(
            f"Get-CimInstance -ClassName {class_name} | Select-Object {select}"
        )

    def _hostname_from_env(self) -> Optional[str]:
        return env_first("COMPUTERNAME")

    def _os_from_cim(self) -> Optional[str]:
        rows = self._cim("Win32_OperatingSystem", "Caption")
        if not rows or not rows[0].get("Caption"):
            return None
        caption = rows[0]["Caption"].replace("Microsoft ", "").strip()
        arch = env_first("PROCESSOR_ARCHITECTURE") or platform.machine()
        return f"{caption} {arch}".strip()

    def _host_from_cim(self) -> Optional[str]:
        rows = self._powershell_json(
            "[pscustomobject]@{"
            "Serial=(Get-CimInstance -ClassName Win32_BIOS).SerialNumber;"
            "Model=(Get-CimInstance -ClassName Win32_ComputerSystem).Model}"
        )
        if not rows:
            return None
        host = f"{rows[0].get('Serial') or ''} ({rows[0].get('Model') or ''})"
        return None if host == " ()" else host

    def _kernel_from_cim(self) -> Optional[str]:
        rows = self._cim("Win32_OperatingSystem", "Version", "BuildNumber")
        if not rows or not rows[0].get("Version"):
            return None
        kernel = f"WIN32_NT {rows[0]['Version']}"
        try:
            build = int(rows[0].get("BuildNumber") or 0)
        except ValueError:
            build = 0
        if build > _DEV_BUILD_THRESHOLD:
            kernel += " (Dev)"
        return kernel

    def _kernel_from_platform_version(self) -> Optional[str]:
        version = platform.version()
        return f"WIN32_NT {version}" if version else None

    def _uptime_from_cim(self) -> Optional[str]:
        output = self._powershell(
            "[int]((Get-Date) - (Get-CimInstance -ClassName Win32_OperatingSystem)"
            ".LastBootUpTime).TotalSeconds"
        )
        if output is None:
            return None
        return format_uptime(int(output))

    def _packages_from_choco(self) -> Optional[str]:
        output = self._run("choco", "list", "--local-only")
        if output is None:
            return None
        count = sum(
            1 for line in output.splitlines()
            if line.strip() and "packages installed" not in line
        )
        if count == 0:
            return None
        # First line is the Chocolatey version banner
        return f"{count - 1} (choco)"

    def _packages_from_winget(self) -> Optional[str]:
        output = self._run("winget", "list")
        if output is None:
            return None
        count = sum(
            1 for line in output.splitlines()
            if line.strip() and not line.startswith("Name") and not line.startswith("-")
        )
        return f"{count} (winget)" if count else None

    def _shell_from_powershell(self) -> Optional[str]:
        version = self._powershell("$PSVersionTable.PSVersion.ToString()")
        return f"Windows PowerShell {version}" if version else None

    def _shell_from_env(self) -> Optional[str]:
        shell = env_first("SHELL", "ComSpec")
        return basename_of(shell) if shell else None

    def _display_from_cim(self) -> Optional[list[str]]:
        rows = self._cim(
            "Win32_VideoController",
            "CurrentHorizontalResolution",
            "CurrentVerticalResolution",
            "CurrentRefreshRate",
        )
        displays = []
        for row in rows or []:
            width = row.get("CurrentHorizontalResolution")
            height = row.get("CurrentVerticalResolution")
            if not width or not height:
                continue
            line = f"Display: {width}x{height}"
            if row.get("CurrentRefreshRate"):
                line += f" @ {row['CurrentRefreshRate']} Hz"
            displays.append(line)
        return displays

    def _wm_from_cim(self) -> Optional[str]:
        rows = self._cim("Win32_OperatingSystem", "Version")
        if not rows or not rows[0].get("Version"):
            return None
        return f"Desktop Window Manager {rows[0]['Version']}"

    def _theme_from_registry(self) -> Optional[str]:
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, _PERSONALIZE_KEY) as key:
                system_light, _ = winreg.QueryValueEx(key, "SystemUsesLightTheme")
                apps_light, _ = winreg.QueryValueEx(key, "AppsUseLightTheme")
        except OSError as e:
            logger.debug(f"Theme registry values unavailable: {e}")
            return "Custom - Blue"
        system_mode = "Light" if system_light else "Dark"
        apps_mode = "Light" if apps_light else "Dark"
        return f"Custom - Blue (System: {system_mode}, Apps: {apps_mode})"

    def _cpu_from_cim(self) -> Optional[str]:
        rows = self._cim("Win32_Processor", "Name", "NumberOfLogicalProcessors", "MaxClockSpeed")
        if not rows or not rows[0].get("Name"):
            return None
        cpu = rows[0]
        ghz = (cpu.get("MaxClockSpeed") or 0) / 1000
        return f"{cpu['Name'].strip()} ({cpu.get('NumberOfLogicalProcessors')}) @ {ghz:.2f} GHz"

    def _gpu_from_cim(self) -> Optional[list[str]]:
        rows = self._cim("Win32_VideoController", "Name", "AdapterRAM")
        gpus = []
        for row in rows or []:
            name = row.get("Name")
            if not name:
                continue
            adapter_ram = row.get("AdapterRAM") or 0
            memory = f"{adapter_ram / GIB:.2f} GiB" if adapter_ram > 0 else "Unknown"
            integrated = adapter_ram < 2 * GIB or "Intel" in name
            gpus.append(f"{name} ({memory}) {'[Integrated]' if integrated else '[Discrete]'}")
        return gpus

    def _memory_from_cim(self) -> Optional[str]:
        rows = self._cim("Win32_OperatingSystem", "TotalVisibleMemorySize", "FreePhysicalMemory")
        if not rows or not rows[0].get("TotalVisibleMemorySize"):
            return None
        total = int(rows[0]["TotalVisibleMemorySize"]) * 1024
        free = int(rows[0].get("FreePhysicalMemory") or 0) * 1024
        return format_usage(total - free, total)

    def _swap_from_cim(self) -> Optional[str]:
        rows = self._cim("Win32_PageFileUsage", "CurrentUsage", "AllocatedBaseSize")
        if rows is None:
            return None
        # Both values are reported in MiB
        total = sum(int(row.get("AllocatedBaseSize") or 0) for row in rows) * 1024**2
        used = sum(int(row.get("CurrentUsage") or 0) for row in rows) * 1024**2
        if total == 0:
            return "No swap"
        return format_usage(used, total)

    def _disk_from_cim(self) -> Optional[list[str]]:
        rows = self._powershell_json(
            "Get-CimInstance -ClassName Win32_LogicalDisk | Where-Object {$_.DriveType -eq 3} | "
            "Select-Object DeviceID,Size,FreeSpace,FileSystem"
        )
        disks = []
        for row in rows or []:
            size = int(row.get("Size") or 0)
            if size <= 0:
                continue
            used = size - int(row.get("FreeSpace") or 0)
            disks.append(
                f"Disk ({row.get('DeviceID')}): {format_usage(used, size)} - {row.get('FileSystem')}"
            )
        return disks

    def _local_ip_from_cim(self) -> Optional[str]:
        rows = self._powershell_json(
            "$adapter = Get-NetAdapter | Where-Object {$_.Status -eq 'Up'} | Select-Object -First 1; "
            "$(if ($adapter) { "
            "Get-NetIPAddress -InterfaceIndex $adapter.InterfaceIndex -AddressFamily IPv4 | "
            "Where-Object {$_.IPAddress -notlike '169.254.*'} | Select-Object -First 1 | "
            "Select-Object @{n='Name';e={$adapter.Name}},IPAddress,PrefixLength "
            "} else { [pscustomobject]@{Name=$null} })"
        )
        if not rows:
            return None
        row = rows[0]
        if not row.get("Name") or not row.get("IPAddress"):
            return "No active network connection"
        return f"Local IP ({row.get('Name')}): {row.get('IPAddress')}/{row.get('PrefixLength')}"

    def _battery_from_cim(self) -> Optional[str]:
        rows = self._cim("Win32_Battery", "Name", "EstimatedChargeRemaining", "BatteryStatus")
        if not rows:
            return None
        battery = rows[0]
        status = _BATTERY_STATUS.get(battery.get("BatteryStatus"), "[AC Connected]")
        return f"Battery ({battery.get('Name')}): {battery.get('EstimatedChargeRemaining')}% {status}"

    def _locale_from_culture(self) -> Optional[str]:
        return self._powershell("(Get-Culture).Name")
