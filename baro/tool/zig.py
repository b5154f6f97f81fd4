"""
The Zig compiler.

Installs builds listed in https://ziglang.org/download/index.json under
``<appdata>/zigc`` and activates them as ``<appdata>/bin/zig``.
"""

from baro.config.parser import ZIG_INDEX_URL
from baro.tool.manager import ToolManager


class ZigCompiler(ToolManager):
    """Manager for Zig compiler builds."""

    PREFIX = "zigc"
    BINARY_NAME = "zig"
    INDEX_URL = ZIG_INDEX_URL
