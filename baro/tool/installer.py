"""
Release installation.

Downloads a release archive, extracts it into ``<prefix>-<version>`` and, for
the master channel, republishes the ``master`` symlink. There is no rollback:
a failure after the destination directory is created leaves it partially
populated on disk.
"""

import logging
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import urlparse

from baro.core.download import DownloadProgress, download_file
from baro.core.exceptions import AlreadyInstalledError
from baro.core.filesystem import extract_archive, remove_file, replace_symlink
from baro.tool.info import ToolInfo

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = (".tar.xz", ".tar.gz", ".tar.bz2", ".tgz", ".zip")


def archive_suffix(url: str) -> str:
    """
    Pick the archive extension from a download URL.

    Example:
        >>> archive_suffix("https://ziglang.org/download/0.13.0/zig-linux-x86_64-0.13.0.tar.xz")
        '.tar.xz'
    """
    name = PurePosixPath(urlparse(url).path).name.lower()
    for suffix in ARCHIVE_SUFFIXES:
        if name.endswith(suffix):
            return suffix
    return ".tar.xz"


class Installer:
    """Installs release archives into the tool data directory."""

    def __init__(
        self,
        info: ToolInfo,
        timeout: Optional[float] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.info = info
        self.timeout = timeout
        self.log = log or logger

    def _report_progress(self, progress: DownloadProgress) -> None:
        self.log.debug(f"Downloading... {progress}")

    def install(self, version: str, download_url: str, is_master: bool) -> Path:
        """
        Download and extract ``version``.

        Args:
            version: Concrete version to install
            download_url: Archive URL for the local platform
            is_master: Also point the ``master`` symlink at the new build

        Returns:
            The installed version directory

        Raises:
            AlreadyInstalledError: If the version directory already exists
            FetchingFailedError: If the archive download fails
            ArchiveExtractionError: If extraction fails
        """
        output_dir = self.info.version_dir(version)
        if output_dir.exists():
            raise AlreadyInstalledError(f"version `{version}` of {self.info.prefix}")

        data_path = self.info.ensure_data_path()
        archive = data_path / f"download-{version}{archive_suffix(download_url)}"

        download_file(
            download_url,
            archive,
            progress_callback=self._report_progress,
            timeout=self.timeout,
        )

        output_dir.mkdir()
        try:
            extract_archive(archive, output_dir)
        finally:
            remove_file(archive)
            self.log.debug("Clean the archive file!")

        if is_master:
            replace_symlink(
                self.info.master_symlink_path, output_dir / self.info.binary_name
            )
            self.log.debug(f"Master link: {self.info.master_symlink_path}")

        self.log.info(f"Installed {self.info.prefix} {version} at {output_dir}")
        return output_dir
