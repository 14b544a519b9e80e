"""Shared fixtures for hostfetch tests."""

import sys

import pytest

SESSION_ENV_VARS = (
    "USER",
    "USERNAME",
    "LOGNAME",
    "LNAME",
    "COMPUTERNAME",
    "SHELL",
    "ComSpec",
    "XDG_CURRENT_DESKTOP",
    "DESKTOP_SESSION",
    "XDG_SESSION_TYPE",
    "TERM_PROGRAM",
    "TERMINAL_EMULATOR",
    "LANG",
    "PROCESSOR_ARCHITECTURE",
    "HOSTFETCH_CONFIG",
)


def _fail(*args, **kwargs):
    raise OSError("unavailable")


@pytest.fixture
def dead_host(monkeypatch, tmp_path):
    """Make every data source a probe can reach come up empty or fail."""
    monkeypatch.setattr("hostfetch.providers.base.run_command", lambda *a, **k: None)
    monkeypatch.setattr("hostfetch.providers.base.read_text", lambda path: None)
    monkeypatch.setattr("hostfetch.providers.base.run_powershell", lambda *a, **k: None)
    monkeypatch.setattr("hostfetch.providers.base.run_powershell_json", lambda *a, **k: None)
    monkeypatch.setattr("hostfetch.providers.base.getpass.getuser", _fail)
    monkeypatch.setattr("hostfetch.providers.base.socket.gethostname", _fail)
    monkeypatch.setattr("hostfetch.providers.base.platform.release", lambda: "")
    monkeypatch.setattr("hostfetch.providers.windows.platform.version", lambda: "")
    for module in ("psutil", "cpuinfo", "pynvml", "winreg"):
        monkeypatch.setitem(sys.modules, module, None)
    for var in SESSION_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "hostfetch.config.loader.DEFAULT_CONFIG_PATH", tmp_path / "no-config.yaml"
    )
