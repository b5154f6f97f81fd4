"""
Small key/value cache shared by every managed tool.

The cache is a single JSON object with a fixed set of fields. Each field name
is ``<prefix>_<key>`` so several tools can share one file without clashing:

    {
        "zigc_last_modified": "Tue, 08 Oct 2024 12:00:00 GMT"
    }

Writes are read-modify-write under a file lock and land atomically.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from filelock import FileLock

from baro.core.exceptions import InvalidFieldError, NotFoundError
from baro.core.filesystem import atomic_write

logger = logging.getLogger(__name__)

CACHE_FIELDS = ("zigc_last_modified",)


class CacheStore:
    """
    Prefix-scoped view of the shared cache file.

    The file is created with every known field set to ``null`` the first time
    a store is opened on it; ``created`` tells whether this instance did so.

    Example:
        >>> cache = CacheStore(Path('/home/user/.cache/baro/cache.json'), 'zigc')
        >>> cache.write('last_modified', 'Tue, 08 Oct 2024 12:00:00 GMT')
        True
        >>> cache.read('last_modified')
        'Tue, 08 Oct 2024 12:00:00 GMT'
    """

    def __init__(
        self,
        path: Path,
        prefix: str,
        fields: Iterable[str] = CACHE_FIELDS,
        lock_timeout: float = 10,
    ):
        self.path = Path(path)
        self.prefix = prefix
        self.fields = tuple(fields)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.lock_timeout = lock_timeout
        self.created = self._init_file()

    def _init_file(self) -> bool:
        if self.path.exists():
            return False
        default = {name: None for name in self.fields}
        logger.info(f"Create file: {self.path}")
        with self._lock():
            if self.path.exists():
                return False
            atomic_write(self.path, json.dumps(default, indent=4))
        return True

    def _lock(self) -> FileLock:
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        return FileLock(self.lock_path, timeout=self.lock_timeout)

    def _load(self) -> dict:
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        # Only schema fields survive a rewrite.
        return {name: data.get(name) for name in self.fields}

    def field_name(self, key: str) -> str:
        """Format the on-disk field name for ``key``."""
        return f"{self.prefix}_{key}"

    def write(self, key: str, value: str) -> bool:
        """
        Store ``value`` under ``key``.

        Args:
            key: Logical key (without the tool prefix)
            value: Value to store

        Returns:
            True if the stored value changed; False if it was already equal
            or if the field is not part of the cache schema
        """
        name = self.field_name(key)
        if name not in self.fields:
            logger.warning(f"Cannot write invalid field: `{name}`")
            return False

        with self._lock():
            data = self._load()
            if data[name] == value:
                logger.debug(f"Cache field `{name}` unchanged")
                return False

            data[name] = value
            atomic_write(self.path, json.dumps(data, indent=4))

        logger.debug(f"Wrote cache field `{name}`")
        return True

    def read(self, key: str) -> str:
        """
        Read the value stored under ``key``.

        Raises:
            InvalidFieldError: If the field is not part of the cache schema
            NotFoundError: If the field has no value yet
        """
        name = self.field_name(key)
        if name not in self.fields:
            logger.warning(f"Cannot read invalid field: `{name}`")
            raise InvalidFieldError(name)

        value = self._load()[name]
        if value is None:
            raise NotFoundError(f"cache field `{name}`")
        return value

    def get(self, key: str) -> Optional[str]:
        """Like :meth:`read`, but return None when the field has no value."""
        try:
            return self.read(key)
        except NotFoundError:
            return None
