"""Generic Unix provider (macOS, BSDs, and the base for Linux)."""

import logging
from typing import Optional

from hostfetch.probes.chain import env_first
from hostfetch.probes.formatting import basename_of

from .base import AttributeProvider

logger = logging.getLogger(__name__)


class PosixProvider(AttributeProvider):
    """Unix-like hosts: utilities on ``$PATH`` plus session environment variables."""

    STRATEGIES = {
        **AttributeProvider.STRATEGIES,
        "hostname": ("_hostname_from_utility", "_hostname_from_socket"),
        "kernel": ("_kernel_from_uname", "_kernel_from_platform"),
        "packages": ("_packages_from_managers",),
        "shell": ("_shell_from_env",),
        "de": ("_de_from_env",),
        "wm": ("_wm_from_env",),
        "gpu": ("_gpu_from_pynvml", "_gpu_from_nvidia_smi", "_gpu_from_lspci"),
    }

    # Tried in order; the first manager reporting at least one package wins.
    PACKAGE_MANAGERS: tuple[tuple[str, tuple[str, ...]], ...] = (
        ("brew", ("brew", "list", "--formula", "-1")),
        ("port", ("port", "-q", "installed")),
        ("pkg", ("pkg", "info", "-q")),
    )

    @classmethod
    def name(cls) -> str:
        return "posix"

    def _hostname_from_utility(self) -> Optional[str]:
        return self._run("hostname")

    def _kernel_from_uname(self) -> Optional[str]:
        return self._run("uname", "-r")

    def _shell_from_env(self) -> Optional[str]:
        shell = env_first("SHELL")
        return basename_of(shell) if shell else None

    def _de_from_env(self) -> Optional[str]:
        return env_first("XDG_CURRENT_DESKTOP", "DESKTOP_SESSION")

    def _wm_from_env(self) -> Optional[str]:
        return env_first("XDG_SESSION_TYPE")

    def _packages_from_managers(self) -> Optional[str]:
        for manager, argv in self.PACKAGE_MANAGERS:
            output = self._run(*argv)
            if output is None:
                continue
            count = sum(1 for line in output.splitlines() if line.strip())
            if count > 0:
                return f"{count} ({manager})"
            logger.debug(f"{manager} reported no packages")
        return None

    def _gpu_from_lspci(self) -> Optional[list[str]]:
        output = self._run("lspci")
        if output is None:
            return None
        gpus = []
        for line in output.splitlines():
            if not any(kind in line for kind in ("VGA compatible controller", "3D controller", "Display controller")):
                continue
            # "00:02.0 VGA compatible controller: Intel Corporation ..."
            _, _, description = line.partition(": ")
            if description:
                gpus.append(description.strip())
        return gpus
