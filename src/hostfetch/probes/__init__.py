"""Fallible data-source helpers and display formatting for attribute probes."""

from .chain import (
    ProbeError,
    env_first,
    first_available,
    read_text,
    run_command,
    run_powershell,
    run_powershell_json,
)
from .formatting import (
    basename_of,
    format_bytes_gib,
    format_uptime,
    format_usage,
    parse_meminfo,
    usage_percent,
)

__all__ = [
    "ProbeError",
    "basename_of",
    "env_first",
    "first_available",
    "format_bytes_gib",
    "format_uptime",
    "format_usage",
    "parse_meminfo",
    "read_text",
    "run_command",
    "run_powershell",
    "run_powershell_json",
    "usage_percent",
]
