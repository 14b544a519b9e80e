"""Static logos shown in the left column."""

import platform
from typing import Optional

_PANE_ROW = "/////////////////  /////////////////"

WINDOWS = [
    "",
    *[_PANE_ROW] * 7,
    "",
    *[_PANE_ROW] * 7,
    "",
]

TUX = [
    "        .--.",
    "       |o_o |",
    "       |:_/ |",
    "      //   \\ \\",
    "     (|     | )",
    "    /'\\_   _/`\\",
    "    \\___)=(___/",
]

APPLE = [
    "                    'c.",
    "                 ,xNMM.",
    "               .OMMMMo",
    "               OMMM0,",
    "     .;loddo:' loolloddol;.",
    "   cKMMMMMMMMMMNWMMMMMMMMMM0:",
    " .KMMMMMMMMMMMMMMMMMMMMMMMWd.",
    " XMMMMMMMMMMMMMMMMMMMMMMMX.",
    ";MMMMMMMMMMMMMMMMMMMMMMMM:",
    ":MMMMMMMMMMMMMMMMMMMMMMMM:",
    ".MMMMMMMMMMMMMMMMMMMMMMMMX.",
    " kMMMMMMMMMMMMMMMMMMMMMMMMWd.",
    " .XMMMMMMMMMMMMMMMMMMMMMMMMMMk",
    "  .XMMMMMMMMMMMMMMMMMMMMMMMMK.",
    "    kMMMMMMMMMMMMMMMMMMMMMMd",
    "     ;KMMMMMMMWXXWMMMMMMMk.",
    "       .cooc,.    .,coo:.",
]

GENERIC = [
    " _________",
    "|  _____  |",
    "| |     | |",
    "| |_____| |",
    "|_________|",
    "   _|_|_",
    "  |_____|",
]

LOGOS: dict[str, list[str]] = {
    "windows": WINDOWS,
    "tux": TUX,
    "apple": APPLE,
    "generic": GENERIC,
    "none": [],
}

_PLATFORM_LOGOS = {
    "Windows": "windows",
    "Linux": "tux",
    "Darwin": "apple",
}


def get_logo(name: str = "auto", system: Optional[str] = None) -> list[str]:
    """Return logo lines by name; ``auto`` picks one for the host platform.

    Raises:
        KeyError: If ``name`` is not a known logo.
    """
    if name == "auto":
        name = _PLATFORM_LOGOS.get(system or platform.system(), "generic")
    return list(LOGOS[name])
