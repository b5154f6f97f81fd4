"""
Global activation of an installed version.

``<appdata>/bin/<binary>`` is the single globally visible entry point. It is
replaced (deleted, then recreated), so it is briefly absent during a switch.
"""

import logging
from pathlib import Path
from typing import Optional

from baro.core.directory import init_if_not_exists
from baro.core.exceptions import NotInstalledError
from baro.core.filesystem import replace_symlink
from baro.tool.info import ToolInfo

logger = logging.getLogger(__name__)


class Activator:
    """Switches the active binary between installed versions."""

    def __init__(self, info: ToolInfo, log: Optional[logging.Logger] = None):
        self.info = info
        self.log = log or logger

    def use(self, version: str, exe_path: Path, binary_name: str) -> Path:
        """
        Point ``bin/<binary_name>`` at ``exe_path``.

        Args:
            version: Version being activated (for diagnostics)
            exe_path: Installed binary (or channel symlink) to activate
            binary_name: File name under ``bin/`` (e.g. 'zig')

        Returns:
            Path of the activated link

        Raises:
            NotInstalledError: If ``exe_path`` does not exist
        """
        exe_path = Path(exe_path)
        self.log.debug(f"Exe path: {exe_path}")
        if not exe_path.exists():
            raise NotInstalledError(f"version `{version}` of {self.info.prefix}")

        if init_if_not_exists(self.info.bin_dir):
            self.log.debug("Create the new bin folder.")

        link = self.info.bin_dir / binary_name
        replace_symlink(link, exe_path)
        self.log.info(f"Now using {self.info.prefix} {version}")
        return link
