"""Two-column terminal display: logo on the left, attributes on the right."""

from typing import Iterable, Optional

from rich.console import Console
from rich.text import Text

from hostfetch.config.models import ColorConfig
from hostfetch.snapshot import SystemSnapshot

DEFAULT_LOGO_WIDTH = 40
SEPARATOR_CHAR = "─"

# Snapshot field -> row label for single-value rows
_LABELED = {
    "os": "OS",
    "host": "Host",
    "kernel": "Kernel",
    "uptime": "Uptime",
    "packages": "Packages",
    "shell": "Shell",
    "de": "DE",
    "wm": "WM",
    "wm_theme": "WM Theme",
    "icons": "Icons",
    "font": "Font",
    "cursor": "Cursor",
    "terminal": "Terminal",
    "cpu": "CPU",
    "memory": "Memory",
    "swap": "Swap",
    "locale": "Locale",
}

# Display order. Fields absent from _LABELED are emitted verbatim
# (their lines already carry a label) or, for gpu, one "GPU:" row each.
_ORDER = (
    "os", "host", "kernel", "uptime", "packages", "shell",
    "display",
    "de", "wm", "wm_theme", "icons", "font", "cursor", "terminal",
    "cpu", "gpu", "memory", "swap",
    "disk", "local_ip", "battery",
    "locale",
)


def build_info_lines(snapshot: SystemSnapshot, hidden: Iterable[str] = ()) -> list[str]:
    """Flatten a snapshot into the right-hand column, header first."""
    hidden = set(hidden)
    user_host = f"{snapshot.username}@{snapshot.hostname}"
    lines = [user_host, SEPARATOR_CHAR * len(user_host)]

    for name in _ORDER:
        if name in hidden:
            continue
        value = getattr(snapshot, name)
        if name in _LABELED:
            lines.append(f"{_LABELED[name]}: {value}")
        elif name == "gpu":
            lines.extend(f"GPU: {gpu}" for gpu in value)
        elif isinstance(value, tuple):
            lines.extend(value)
        else:
            lines.append(value)
    return lines


def style_info_line(index: int, line: str, colors: Optional[ColorConfig] = None) -> Text:
    """Color one info row by its role.

    Row 0 is the user@host header and row 1 the separator. Other rows
    color the label up to the first colon; rows without a colon stay plain.
    """
    colors = colors or ColorConfig()
    if index == 0:
        return Text(line, style=colors.header)
    if index == 1:
        return Text(line, style=colors.separator)

    label, sep, value = line.partition(":")
    if not sep:
        return Text(line)
    text = Text()
    text.append(label, style=colors.label)
    text.append(sep + value)
    return text


def compose_rows(
    logo: list[str],
    info_lines: list[str],
    width: int = DEFAULT_LOGO_WIDTH,
    colors: Optional[ColorConfig] = None,
) -> list[Text]:
    """Zip logo and info columns into ``max(len(logo), len(info_lines))`` rows.

    The logo cell is left-justified to ``width``; the shorter column is
    padded with blank cells.
    """
    colors = colors or ColorConfig()
    rows = []
    for i in range(max(len(logo), len(info_lines))):
        if i < len(logo):
            row = Text(logo[i].ljust(width), style=colors.logo)
        else:
            row = Text(" " * width)
        if i < len(info_lines):
            row.append_text(style_info_line(i, info_lines[i], colors))
        rows.append(row)
    return rows


def render(
    snapshot: SystemSnapshot,
    logo: list[str],
    console: Optional[Console] = None,
    width: int = DEFAULT_LOGO_WIDTH,
    colors: Optional[ColorConfig] = None,
    hidden: Iterable[str] = (),
) -> None:
    """Print the snapshot beside the logo, framed by blank lines."""
    console = console or Console(highlight=False)
    rows = compose_rows(logo, build_info_lines(snapshot, hidden), width=width, colors=colors)
    console.print()
    for row in rows:
        console.print(row, soft_wrap=True)
    console.print()
