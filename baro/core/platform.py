"""
Platform detection for baro.

The Zig download index keys its builds by ``<cpu-arch>-<os>`` using Zig's own
target names (``x86_64-linux``, ``aarch64-macos``, ``x86_64-windows``, ...).
This module maps the interpreter's view of the host onto that key.

Usage:
    from baro.core.platform import detect_platform

    info = detect_platform()
    print(info.key())  # e.g. 'x86_64-linux'
"""

import functools
import platform
from dataclasses import dataclass

_ARCH_ALIASES = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "arm64": "aarch64",
    "armv8": "aarch64",
    "i386": "x86",
    "i686": "x86",
    "armv7l": "armv7a",
    "ppc64le": "powerpc64le",
}

_OS_ALIASES = {
    "darwin": "macos",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform information.

    Attributes:
        arch: CPU architecture in Zig naming ('x86_64', 'aarch64', ...)
        os: Operating system in Zig naming ('linux', 'macos', 'windows', ...)
    """

    arch: str
    os: str

    def key(self) -> str:
        """
        Get the index platform key.

        Example:
            >>> PlatformInfo('x86_64', 'linux').key()
            'x86_64-linux'
        """
        return f"{self.arch}-{self.os}"

    def __str__(self) -> str:
        return self.key()


def _detect_architecture() -> str:
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


def _detect_os() -> str:
    system = platform.system().lower()
    return _OS_ALIASES.get(system, system)


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect the current platform.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(arch=_detect_architecture(), os=_detect_os())


def platform_key() -> str:
    """Shortcut for ``detect_platform().key()``."""
    return detect_platform().key()
