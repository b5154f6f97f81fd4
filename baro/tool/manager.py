"""
Per-tool manager.

:class:`ToolManager` wires the index client, resolver, installer, activator,
cleaner and master updater together for one :class:`ToolInfo`, and exposes the
token-level operations the CLI commands call. Concrete tools subclass it and
set their prefix, binary name and index URL.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from baro.config.parser import BaroConfig, ToolConfig
from baro.tool.activator import Activator
from baro.tool.cleanup import Cleaner
from baro.tool.index import RemoteIndexClient
from baro.tool.info import MASTER, ToolInfo
from baro.tool.installer import Installer
from baro.tool.resolver import VersionResolver
from baro.tool.updater import MasterUpdater

logger = logging.getLogger(__name__)


def _part_key(part: str) -> Tuple[int, int, str]:
    return (0, int(part), "") if part.isdigit() else (1, 0, part)


def version_sort_key(version: str) -> Tuple:
    """
    Order versions numerically, so 0.9.0 sorts before 0.10.0.

    A pre-release such as ``0.14.0-dev.1`` sorts before ``0.14.0``.

    Example:
        >>> sorted(["0.10.0", "0.9.0"], key=version_sort_key)
        ['0.9.0', '0.10.0']
    """
    release, _, pre = version.partition("-")
    return (
        tuple(_part_key(p) for p in release.split(".")),
        not pre,
        tuple(_part_key(p) for p in re.split(r"[.+]", pre)) if pre else (),
    )


@dataclass(frozen=True)
class InstalledVersion:
    """One installed version directory."""

    version: str
    path: Path
    active: bool = False


class ToolManager:
    """
    Manages the installed versions of one tool.

    Subclasses must define ``PREFIX``, ``BINARY_NAME`` and ``INDEX_URL``.

    Example:
        >>> manager = ZigCompiler.from_config(load_config())
        >>> manager.install("0.13.0")
        >>> manager.use("0.13.0")
    """

    PREFIX: str = ""
    BINARY_NAME: str = ""
    INDEX_URL: str = ""

    def __init__(
        self,
        info: ToolInfo,
        index_url: Optional[str] = None,
        timeout: Optional[float] = None,
        check_for_update: bool = True,
    ):
        self.info = info
        self.index_url = index_url or self.INDEX_URL
        self.auto_check = check_for_update
        self.log = logging.getLogger(f"baro.tool.{info.prefix}")

        self.index_client = RemoteIndexClient(
            info, self.index_url, timeout=timeout, log=self.log
        )
        self.resolver = VersionResolver(info, log=self.log)
        self.installer = Installer(info, timeout=timeout, log=self.log)
        self.activator = Activator(info, log=self.log)
        self.cleaner = Cleaner(info, log=self.log)
        self.updater = MasterUpdater(
            info, self.index_client, self.resolver, self.installer, log=self.log
        )

    @classmethod
    def from_config(
        cls, config: BaroConfig, tool_config: Optional[ToolConfig] = None
    ) -> "ToolManager":
        """Build a manager from the loaded configuration."""
        tool_config = tool_config or ToolConfig(index_url=cls.INDEX_URL)
        info = ToolInfo(
            prefix=cls.PREFIX,
            appdata_path=config.appdata_path,
            cache_path=config.cache_file_path,
            binary_name=cls.BINARY_NAME,
        )
        return cls(
            info,
            index_url=tool_config.index_url,
            timeout=config.timeout,
            check_for_update=tool_config.check_for_update,
        )

    # ------------------------------------------------------------------
    # Index
    # ------------------------------------------------------------------

    def check_for_update(self) -> bool:
        """Run the freshness check, if enabled. Returns True if the index was fetched."""
        if not self.auto_check:
            self.log.debug("Freshness check disabled")
            return False
        return self.index_client.check_for_update()

    def list_available(self) -> List[str]:
        """Versions listed in the cached index."""
        self.check_for_update()
        return self.resolver.available_versions()

    # ------------------------------------------------------------------
    # Installed versions
    # ------------------------------------------------------------------

    def install(self, token: str) -> Path:
        """Install the build ``token`` resolves to."""
        self.log.info("Check version index...")
        self.check_for_update()
        resolved = self.resolver.resolve(token)
        return self.installer.install(
            resolved.version, resolved.download_url, is_master=token == MASTER
        )

    def use(self, token: str) -> Path:
        """Activate an installed version."""
        self.check_for_update()
        version = self.resolver.resolve_version(token)
        if token == MASTER:
            exe = self.info.master_symlink_path
        else:
            exe = self.info.version_binary(version)
        return self.activator.use(version, exe, self.info.binary_name)

    def clean(self, token: str) -> None:
        """Remove an installed version."""
        self.log.info(f"Cleaning {token} version dir...")
        if token == MASTER and self.info.master_symlink_path.is_symlink():
            dir_path = self.info.master_info().dir_path
        else:
            self.check_for_update()
            dir_path = self.info.version_dir(self.resolver.resolve_version(token))
        self.cleaner.clean(token, dir_path)
        self.log.info("Done!")

    def update(self) -> bool:
        """Replace the master build with the newest one."""
        return self.updater.update()

    def list_installed(self) -> List[InstalledVersion]:
        """
        List installed versions.

        Versions are ordered numerically. Only directories named
        ``<prefix>-<version>`` count; the index file, channel symlink and
        leftover archives are skipped.
        """
        data_path = self.info.data_path
        if not data_path.is_dir():
            return []

        active_dir = self._active_dir()
        prefix = f"{self.info.prefix}-"
        installed = []
        for entry in data_path.iterdir():
            if entry.is_symlink() or not entry.is_dir():
                continue
            if not entry.name.startswith(prefix):
                continue
            installed.append(
                InstalledVersion(
                    version=entry.name[len(prefix):],
                    path=entry,
                    active=entry == active_dir,
                )
            )
        installed.sort(key=lambda item: version_sort_key(item.version))
        return installed

    def _active_dir(self) -> Optional[Path]:
        target = self.info.active_target()
        if target is None:
            return None
        if target.name == MASTER:
            return self.info.master_info().dir_path if target.is_symlink() else None
        return target.parent
