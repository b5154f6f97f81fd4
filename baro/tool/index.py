"""
Remote version index client.

Keeps ``<data>/index.json`` in sync with the remote index. Freshness is
probed with a HEAD request and the ``Last-Modified`` header, compared against
the token stored in the shared cache. The token and the index document are
always written together.
"""

import logging
from pathlib import Path
from typing import Optional

from baro.core.download import fetch_bytes, get_last_modified
from baro.core.exceptions import NotFoundError
from baro.core.filesystem import atomic_write
from baro.tool.info import ToolInfo

logger = logging.getLogger(__name__)

MAX_INDEX_SIZE = 100 * 1024 * 1024  # 100 MiB
LAST_MODIFIED_KEY = "last_modified"


class RemoteIndexClient:
    """
    Fetches the remote version index and probes its freshness.

    Example:
        >>> client = RemoteIndexClient(info, "https://ziglang.org/download/index.json")
        >>> client.check_for_update()
    """

    def __init__(
        self,
        info: ToolInfo,
        index_url: str,
        timeout: Optional[float] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.info = info
        self.index_url = index_url
        self.timeout = timeout
        self.log = log or logger

    def get_remote_last_modified(self) -> str:
        """
        Read the remote freshness token.

        Raises:
            NotFoundError: If the server sends no ``Last-Modified`` header
            FetchingFailedError: If the probe returns a non-success status
        """
        last_modified = get_last_modified(self.index_url, timeout=self.timeout)
        if last_modified is None:
            raise NotFoundError("last-modified")
        return last_modified

    def fetch_index(self) -> Path:
        """
        Download the full index and write it verbatim to the index file.

        The body is not validated here; the resolver parses it lazily.

        Returns:
            Path of the written index file

        Raises:
            FetchingFailedError: On a non-success status or an oversized body
        """
        self.log.info("Fetching new version index...")
        body = fetch_bytes(self.index_url, MAX_INDEX_SIZE, timeout=self.timeout)

        self.info.ensure_data_path()
        index_file = self.info.index_file_path
        atomic_write(index_file, body)
        self.log.debug(f"Index file path: {index_file}")
        self.log.info("Fetching successfully!")
        return index_file

    def check_for_update(self) -> bool:
        """
        Probe the remote index and refresh the local copy when needed.

        - No cached token: store the new token and fetch the index.
        - Active version is master and the token moved: log a notice. The
          master build itself is never updated here.
        - Token moved, or the index file is missing: store the token and
          fetch the index.

        Returns:
            True if the index document was (re)fetched
        """
        self.log.debug("Check new master version")
        last_modified = self.get_remote_last_modified()

        cache = self.info.cache()
        cached = cache.get(LAST_MODIFIED_KEY)
        if cached is None:
            cache.write(LAST_MODIFIED_KEY, last_modified)
            self.fetch_index()
            return True

        if cached != last_modified and self.info.active_is_master():
            self.log.warning(
                "Detect the new master version, use `baro update` command to update."
            )

        changed = cache.write(LAST_MODIFIED_KEY, last_modified)
        if changed or not self.info.index_file_path.exists():
            self.fetch_index()
            return True
        return False

    def refresh(self) -> str:
        """
        Fetch the index unconditionally and store the matching token.

        Returns:
            The new freshness token
        """
        last_modified = self.get_remote_last_modified()
        self.fetch_index()
        self.info.cache().write(LAST_MODIFIED_KEY, last_modified)
        return last_modified
