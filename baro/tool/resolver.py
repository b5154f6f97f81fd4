"""
Version resolution against the cached index document.

Maps a version token (a concrete version string, or the literal ``master``)
to the concrete version and the download URL for the local platform. Tokens
are looked up as exact, case-sensitive keys; there is no range matching.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from baro.core.exceptions import NotFoundError, UnsupportedError, VersionNotFoundError
from baro.core.platform import platform_key as detect_platform_key
from baro.tool.info import MASTER, ToolInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedVersion:
    """Result of resolving a version token."""

    version: str
    """Concrete version (the pinned version for ``master``)"""

    download_url: str
    """Archive URL for the local platform"""


class VersionResolver:
    """
    Resolves version tokens using ``<data>/index.json``.

    Example:
        >>> resolver = VersionResolver(info)
        >>> resolver.resolve("master")
        ResolvedVersion(version='0.14.0-dev.1', download_url='https://...')
    """

    def __init__(
        self,
        info: ToolInfo,
        platform_key: Optional[Callable[[], str]] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.info = info
        self._platform_key = platform_key or detect_platform_key
        self.log = log or logger

    def load_index(self) -> Dict[str, Any]:
        """
        Parse the cached index document.

        Raises:
            FileNotFoundError: If the index has never been fetched
            ValueError: If the document is not a JSON object
        """
        index_file = self.info.index_file_path
        try:
            with open(index_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            self.log.warning(
                f"Version file index not found. (path: {index_file})\n"
                "Enable `check_for_update` in the configuration to fetch it "
                "automatically."
            )
            raise
        if not isinstance(data, dict):
            raise ValueError(f"Malformed version index: {index_file}")
        return data

    def _entry(self, index: Dict[str, Any], token: str) -> Dict[str, Any]:
        entry = index.get(token)
        if not isinstance(entry, dict):
            raise VersionNotFoundError(token)
        return entry

    def _pinned_version(self, token: str, entry: Dict[str, Any]) -> str:
        if token != MASTER:
            return token
        version = entry.get("version")
        if not isinstance(version, str):
            raise NotFoundError("the pinned version of the master channel")
        return version

    def resolve(self, token: str) -> ResolvedVersion:
        """
        Resolve ``token`` to a version and a download URL.

        Raises:
            VersionNotFoundError: If ``token`` is not a key of the index
            UnsupportedError: If there is no build for the local platform
        """
        entry = self._entry(self.load_index(), token)

        key = self._platform_key()
        build = entry.get(key)
        if not isinstance(build, dict):
            raise UnsupportedError(key)

        tarball = build.get("tarball")
        if not isinstance(tarball, str):
            raise NotFoundError(f"the download link of `{token}` for {key}")

        resolved = ResolvedVersion(
            version=self._pinned_version(token, entry), download_url=tarball
        )
        self.log.debug(f"Resolved {token} -> {resolved.version} ({tarball})")
        return resolved

    def resolve_version(self, token: str) -> str:
        """
        Resolve ``token`` to a concrete version without platform lookup.

        Raises:
            VersionNotFoundError: If ``token`` is not a key of the index
        """
        return self._pinned_version(token, self._entry(self.load_index(), token))

    def available_versions(self) -> List[str]:
        """
        List every version in the index, in document order.

        The master entry is rendered as ``<pinned-version> (master)``.
        """
        versions = []
        for token, entry in self.load_index().items():
            if token == MASTER and isinstance(entry, dict):
                versions.append(f"{entry.get('version', '?')} (master)")
            else:
                versions.append(token)
        return versions
