"""
Master channel update.

Replaces the installed master build with the one the index currently pins.
The old build is destroyed before the new one is installed and nothing is
rolled back: if the install fails, the master channel is left without a
build (and without its symlink) until ``install master`` is run again.
"""

import logging
from typing import Optional

from baro.core.filesystem import remove_file, safe_rmtree
from baro.tool.index import RemoteIndexClient
from baro.tool.info import MASTER, ToolInfo
from baro.tool.installer import Installer
from baro.tool.resolver import VersionResolver

logger = logging.getLogger(__name__)

SWITCH_TO_MASTER_HINT = (
    "\nIf you want to update the master version,\n"
    "you must be in the master version to update.\n"
    "Use `baro use master` to switch into the master\n"
    "version."
)


class MasterUpdater:
    """Destroy-then-install update of the master channel."""

    def __init__(
        self,
        info: ToolInfo,
        index_client: RemoteIndexClient,
        resolver: VersionResolver,
        installer: Installer,
        log: Optional[logging.Logger] = None,
    ):
        self.info = info
        self.index_client = index_client
        self.resolver = resolver
        self.installer = installer
        self.log = log or logger

    def update(self) -> bool:
        """
        Update the master build.

        Returns:
            True if a new master build was installed; False if the active
            version is not master (a warning is logged) or master is already
            up to date

        Raises:
            NotFoundError: If the remote sends no freshness token or the
                ``master`` symlink is missing
            FetchingFailedError: If the index or archive download fails
            UnsupportedError: If master has no build for the local platform
        """
        if not self.info.active_is_master():
            self.log.warning(SWITCH_TO_MASTER_HINT)
            return False

        self.index_client.refresh()
        resolved = self.resolver.resolve(MASTER)

        master = self.info.master_info()
        if (
            master.dir_path == self.info.version_dir(resolved.version)
            and master.exe_path.exists()
        ):
            self.log.info(f"Master is already up to date ({resolved.version}).")
            return False

        self.log.debug(f"Old path version: {master.dir_path}")
        if master.dir_path.is_dir():
            safe_rmtree(master.dir_path, require_prefix=self.info.data_path)
        self.log.debug(f"Master exe: {master.symlink_path}")
        remove_file(master.symlink_path)

        self.installer.install(resolved.version, resolved.download_url, is_master=True)
        return True
