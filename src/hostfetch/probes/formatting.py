"""Display formatting shared by all providers."""

import re

GIB = 1024**3


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_uptime(seconds) -> str:
    """Format seconds since boot as e.g. ``1 day, 1 hour``.

    Units with a zero count are left out; anything under a minute reads
    ``less than a minute``.
    """
    seconds = int(seconds)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60

    parts = []
    if days > 0:
        parts.append(_plural(days, "day"))
    if hours > 0:
        parts.append(_plural(hours, "hour"))
    if minutes > 0:
        parts.append(_plural(minutes, "min"))

    return ", ".join(parts) if parts else "less than a minute"


def format_bytes_gib(num_bytes) -> str:
    """Format a byte count in binary gigabytes with two decimals."""
    return f"{num_bytes / GIB:.2f} GiB"


def usage_percent(used, total) -> int:
    """Used share of ``total`` as a whole percentage, truncated."""
    if total <= 0:
        return 0
    return int(used * 100 // total)


def format_usage(used, total) -> str:
    """Format ``used / total (pct%)`` in GiB."""
    return f"{format_bytes_gib(used)} / {format_bytes_gib(total)} ({usage_percent(used, total)}%)"


def parse_meminfo(text: str) -> dict[str, int]:
    """Parse ``/proc/meminfo`` style ``Key: value kB`` lines into bytes.

    Lines without a numeric value are skipped.
    """
    values = {}
    for line in text.splitlines():
        key, sep, rest = line.partition(":")
        if not sep:
            continue
        fields = rest.split()
        if not fields:
            continue
        try:
            values[key.strip()] = int(fields[0]) * 1024
        except ValueError:
            continue
    return values


def basename_of(path: str) -> str:
    """Last path component, splitting on both ``/`` and ``\\``."""
    return re.split(r"[/\\]", path.rstrip("/\\"))[-1]
