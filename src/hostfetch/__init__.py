"""hostfetch - host system information at a glance."""

__version__ = "0.3.0"
