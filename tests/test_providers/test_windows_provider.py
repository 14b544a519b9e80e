"""Tests for the Windows attribute provider (CIM output is mocked)."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from hostfetch.providers.windows import WindowsProvider


def make_provider(cim=None, powershell=None, commands=None):
    """WindowsProvider answering CIM queries by class name from a dict."""
    cim = cim or {}
    powershell = powershell or {}
    commands = commands or {}
    provider = WindowsProvider()

    def powershell_json(script):
        for class_name, rows in cim.items():
            if class_name in script:
                return rows
        return None

    def run_powershell(script):
        for fragment, output in powershell.items():
            if fragment in script:
                return output
        return None

    provider._powershell_json = powershell_json
    provider._powershell = run_powershell
    provider._run = lambda *argv: commands.get(argv)
    return provider


class TestOperatingSystem:
    def test_caption_and_arch(self, monkeypatch):
        monkeypatch.setenv("PROCESSOR_ARCHITECTURE", "AMD64")
        provider = make_provider(
            cim={"Win32_OperatingSystem": [{"Caption": "Microsoft Windows 11 Pro"}]}
        )
        assert provider.os() == "Windows 11 Pro AMD64"

    def test_dev_build_kernel(self):
        provider = make_provider(
            cim={"Win32_OperatingSystem": [{"Version": "10.0.26100", "BuildNumber": "26100"}]}
        )
        assert provider.kernel() == "WIN32_NT 10.0.26100 (Dev)"

    def test_release_build_kernel(self):
        provider = make_provider(
            cim={"Win32_OperatingSystem": [{"Version": "10.0.19045", "BuildNumber": "19045"}]}
        )
        assert provider.kernel() == "WIN32_NT 10.0.19045"

    def test_window_manager(self):
        provider = make_provider(cim={"Win32_OperatingSystem": [{"Version": "10.0.22631"}]})
        assert provider.wm() == "Desktop Window Manager 10.0.22631"

    def test_window_manager_fallback(self):
        assert make_provider().wm() == "Desktop Window Manager"

    def test_uptime(self):
        provider = make_provider(powershell={"LastBootUpTime": "90000"})
        assert provider.uptime() == "1 day, 1 hour"


class TestHost:
    def test_serial_and_model(self):
        provider = make_provider(cim={"Win32_BIOS": [{"Serial": "PF3ABCDE", "Model": "21HM"}]})
        assert provider.host() == "PF3ABCDE (21HM)"

    def test_blank_values_are_unavailable(self):
        provider = make_provider(cim={"Win32_BIOS": [{"Serial": None, "Model": ""}]})
        assert provider._host_from_cim() is None
        assert provider.host() == "Unknown"


class TestPackages:
    def test_choco(self):
        output = "Chocolatey v2.2.2\ngit 2.43.0\nnodejs 20.10.0\n2 packages installed."
        provider = make_provider(commands={("choco", "list", "--local-only"): output})
        assert provider.packages() == "2 (choco)"

    def test_winget(self):
        output = (
            "Name        Id              Version\n"
            "-----------------------------------\n"
            "Git         Git.Git         2.43.0\n"
            "PowerToys   Microsoft.PowerToys 0.76.2\n"
        )
        provider = make_provider(commands={("winget", "list"): output})
        assert provider.packages() == "2 (winget)"

    def test_none(self):
        assert make_provider().packages() == "0"


class TestShell:
    def test_powershell_version(self):
        provider = make_provider(powershell={"PSVersionTable": "5.1.22621.2506"})
        assert provider.shell() == "Windows PowerShell 5.1.22621.2506"

    def test_comspec(self, monkeypatch):
        monkeypatch.delenv("SHELL", raising=False)
        monkeypatch.setenv("ComSpec", "C:\\Windows\\system32\\cmd.exe")
        assert make_provider().shell() == "cmd.exe"


class TestHardware:
    def test_cpu(self):
        provider = make_provider(
            cim={
                "Win32_Processor": [
                    {
                        "Name": "13th Gen Intel(R) Core(TM) i7-1365U  ",
                        "NumberOfLogicalProcessors": 12,
                        "MaxClockSpeed": 1800,
                    }
                ]
            }
        )
        assert provider.cpu() == "13th Gen Intel(R) Core(TM) i7-1365U (12) @ 1.80 GHz"

    def test_gpus(self):
        provider = make_provider(
            cim={
                "Win32_VideoController": [
                    {"Name": "Intel(R) UHD Graphics", "AdapterRAM": 1073741824},
                    {"Name": "NVIDIA GeForce RTX 3080", "AdapterRAM": 4293918720},
                    {"Name": "Microsoft Basic Display Adapter", "AdapterRAM": None},
                ]
            }
        )
        assert provider.gpu() == [
            "Intel(R) UHD Graphics (1.00 GiB) [Integrated]",
            "NVIDIA GeForce RTX 3080 (4.00 GiB) [Discrete]",
            "Microsoft Basic Display Adapter (Unknown) [Integrated]",
        ]

    def test_display_resolution(self):
        provider = make_provider(
            cim={
                "Win32_VideoController": [
                    {
                        "CurrentHorizontalResolution": 2560,
                        "CurrentVerticalResolution": 1440,
                        "CurrentRefreshRate": 144,
                    }
                ]
            }
        )
        assert provider.display() == ["Display: 2560x1440 @ 144 Hz"]

    def test_display_fallback(self):
        assert make_provider().display() == ["Display: 1920x1080 @ 60 Hz [Built-in]"]


class TestCimFallbacks:
    @pytest.fixture(autouse=True)
    def no_psutil(self):
        with patch.dict(sys.modules, {"psutil": None}):
            yield

    def test_memory(self):
        provider = make_provider(
            cim={
                "Win32_OperatingSystem": [
                    {"TotalVisibleMemorySize": 16777216, "FreePhysicalMemory": 4194304}
                ]
            }
        )
        assert provider.memory() == "12.00 GiB / 16.00 GiB (75%)"

    def test_swap(self):
        provider = make_provider(
            cim={"Win32_PageFileUsage": [{"CurrentUsage": 512, "AllocatedBaseSize": 2048}]}
        )
        assert provider.swap() == "0.50 GiB / 2.00 GiB (25%)"

    def test_disk(self):
        provider = make_provider(
            cim={
                "Win32_LogicalDisk": [
                    {"DeviceID": "C:", "Size": 1073741824 * 100, "FreeSpace": 1073741824 * 40, "FileSystem": "NTFS"}
                ]
            }
        )
        assert provider.disk() == ["Disk (C:): 60.00 GiB / 100.00 GiB (60%) - NTFS"]

    def test_local_ip(self):
        provider = make_provider(
            cim={"Get-NetAdapter": [{"Name": "Wi-Fi", "IPAddress": "10.0.0.42", "PrefixLength": 24}]}
        )
        assert provider.local_ip() == "Local IP (Wi-Fi): 10.0.0.42/24"

    def test_no_adapter(self):
        provider = make_provider(cim={"Get-NetAdapter": [{"Name": None}]})
        assert provider.local_ip() == "No active network connection"

    def test_local_ip_script_is_a_single_pipeline(self):
        # ConvertTo-Json is appended to the script, so the branch must be
        # a subexpression rather than a bare if statement
        scripts = []
        provider = WindowsProvider()
        provider._powershell_json = lambda script: scripts.append(script)
        assert provider._local_ip_from_cim() is None
        last_statement = scripts[0].split("; ", 1)[1].strip()
        assert last_statement.startswith("$(if ($adapter)")
        assert last_statement.endswith("})")

    def test_battery(self):
        provider = make_provider(
            cim={
                "Win32_Battery": [
                    {"Name": "DELL 7FJ5T", "EstimatedChargeRemaining": 64, "BatteryStatus": 2}
                ]
            }
        )
        assert provider.battery() == "Battery (DELL 7FJ5T): 64% [AC Connected, Charging]"

    def test_no_battery(self):
        assert make_provider().battery() == "No battery detected"


class TestThemeAndLocale:
    def test_registry_theme(self):
        winreg = MagicMock()
        winreg.QueryValueEx.side_effect = [(0, 4), (1, 4)]
        with patch.dict(sys.modules, {"winreg": winreg}):
            assert make_provider().wm_theme() == "Custom - Blue (System: Dark, Apps: Light)"

    def test_registry_unreadable(self):
        winreg = MagicMock()
        winreg.OpenKey.side_effect = FileNotFoundError("no Personalize key")
        with patch.dict(sys.modules, {"winreg": winreg}):
            assert make_provider().wm_theme() == "Custom - Blue"

    def test_culture(self):
        provider = make_provider(powershell={"Get-Culture": "de-DE"})
        assert provider.locale() == "de-DE"

    def test_lang_fallback(self, monkeypatch):
        monkeypatch.setenv("LANG", "en_GB.UTF-8")
        assert make_provider().locale() == "en_GB.UTF-8"


class TestFixedValues:
    def test_static_fallbacks(self, monkeypatch):
        monkeypatch.delenv("TERM_PROGRAM", raising=False)
        monkeypatch.delenv("TERMINAL_EMULATOR", raising=False)
        provider = make_provider()
        assert provider.de() == "Fluent"
        assert provider.font() == "Segoe UI (12pt) [Caption / Menu / Message / Status]"
        assert provider.cursor() == "Windows Default (32px)"
        assert provider.terminal() == "Windows Terminal"

    def test_computername(self, monkeypatch):
        monkeypatch.setenv("COMPUTERNAME", "DESKTOP-4F2K9")
        assert make_provider().hostname() == "DESKTOP-4F2K9"
