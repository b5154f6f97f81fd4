"""
Tool location metadata.

A :class:`ToolInfo` names one managed tool's namespace on disk. Every other
component of the tool manager reads its paths from here:

    <appdata>/bin/<binary>               active version symlink
    <appdata>/<prefix>/index.json        cached remote index
    <appdata>/<prefix>/<prefix>-<v>/     one installed version
    <appdata>/<prefix>/master            master channel symlink
    <cache file>                         shared freshness tokens
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from baro.core.cache import CacheStore
from baro.core.directory import init_if_not_exists
from baro.core.exceptions import NotFoundError
from baro.core.filesystem import read_link

logger = logging.getLogger(__name__)

MASTER = "master"
INDEX_FILE_NAME = "index.json"


@dataclass(frozen=True)
class MasterInfo:
    """Where the master channel currently points."""

    exe_path: Path
    """Binary the ``master`` symlink points at"""

    dir_path: Path
    """Installed version directory owning ``exe_path``"""

    symlink_path: Path
    """The ``master`` symlink itself"""


@dataclass(frozen=True)
class ToolInfo:
    """
    Identifies one managed tool's namespace.

    Attributes:
        prefix: Tool prefix, used for the data sub-directory, installed
            directory names and cache field names (e.g. 'zigc')
        appdata_path: Application-data root shared by all tools
        cache_path: Path of the shared cache file
        binary_name: Name of the tool's entry binary (e.g. 'zig')
    """

    prefix: str
    appdata_path: Path
    cache_path: Path
    binary_name: str

    @property
    def data_path(self) -> Path:
        """Tool data directory, e.g. ``$appdata/zigc``."""
        return self.appdata_path / self.prefix

    @property
    def index_file_path(self) -> Path:
        return self.data_path / INDEX_FILE_NAME

    @property
    def master_symlink_path(self) -> Path:
        return self.data_path / MASTER

    @property
    def bin_dir(self) -> Path:
        return self.appdata_path / "bin"

    @property
    def active_binary_path(self) -> Path:
        """The globally visible binary, e.g. ``$appdata/bin/zig``."""
        return self.bin_dir / self.binary_name

    def version_dir(self, version: str) -> Path:
        """Directory owning an installed ``version``."""
        return self.data_path / f"{self.prefix}-{version}"

    def version_binary(self, version: str) -> Path:
        return self.version_dir(version) / self.binary_name

    def ensure_data_path(self) -> Path:
        """Create the tool data directory if missing and return it."""
        init_if_not_exists(self.data_path)
        return self.data_path

    def cache(self) -> CacheStore:
        """
        Open the shared cache scoped to this tool.

        The cache file is created on first use.
        """
        return CacheStore(self.cache_path, self.prefix)

    def master_info(self) -> MasterInfo:
        """
        Read the master build's location through the ``master`` symlink.

        Raises:
            NotFoundError: If the ``master`` symlink does not exist
        """
        exe_path = read_link(self.master_symlink_path)
        if exe_path is None:
            raise NotFoundError(f"the master channel link ({self.master_symlink_path})")
        return MasterInfo(
            exe_path=exe_path,
            dir_path=exe_path.parent,
            symlink_path=self.master_symlink_path,
        )

    def active_target(self) -> Optional[Path]:
        """Where the active binary symlink points, one level deep."""
        return read_link(self.active_binary_path)

    def active_is_master(self) -> bool:
        """
        Check whether the active binary is the master channel.

        ``use master`` links ``bin/<binary>`` to the ``master`` symlink rather
        than to a versioned directory, so the link target's trailing segment
        identifies the channel.
        """
        target = self.active_target()
        return target is not None and target.name == MASTER

    def installed_master_version(self) -> Optional[str]:
        """Version currently behind the ``master`` symlink, if any."""
        try:
            dir_name = self.master_info().dir_path.name
        except NotFoundError:
            return None
        prefix = f"{self.prefix}-"
        return dir_name[len(prefix):] if dir_name.startswith(prefix) else None
