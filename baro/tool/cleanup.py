"""
Removal of installed versions.

Cleaning the active version is allowed; the ``bin`` link is then left
dangling until another version is activated.
"""

import logging
from pathlib import Path
from typing import Optional

from baro.core.exceptions import NotInstalledError
from baro.core.filesystem import remove_file, safe_rmtree
from baro.tool.info import MASTER, ToolInfo

logger = logging.getLogger(__name__)


class Cleaner:
    """Deletes installed version directories."""

    def __init__(self, info: ToolInfo, log: Optional[logging.Logger] = None):
        self.info = info
        self.log = log or logger

    def clean(self, version: str, dir_path: Path) -> None:
        """
        Delete ``dir_path`` and everything in it.

        Args:
            version: Version token being cleaned; ``master`` also removes the
                channel symlink
            dir_path: Installed version directory

        Raises:
            NotInstalledError: If ``dir_path`` does not exist
        """
        dir_path = Path(dir_path)
        if not dir_path.is_dir():
            raise NotInstalledError(f"version `{version}` of {self.info.prefix}")

        safe_rmtree(dir_path, require_prefix=self.info.data_path)
        self.log.debug(f"Removed {dir_path}")

        if version == MASTER:
            self.log.debug(f"Master exe: {self.info.master_symlink_path}")
            remove_file(self.info.master_symlink_path)
