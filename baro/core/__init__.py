"""
Core functionality for baro.

This package contains the foundational modules that the tool manager depends on.
"""

from .cache import CacheStore, CACHE_FIELDS

from .directory import (
    get_default_appdata_dir,
    get_default_cache_dir,
    get_default_config_file,
    init_if_not_exists,
)

from .platform import PlatformInfo, detect_platform, platform_key

from .exceptions import (
    BaroError,
    NotFoundError,
    FetchingFailedError,
    VersionNotFoundError,
    UnsupportedError,
    NotInstalledError,
    AlreadyInstalledError,
    InvalidFieldError,
    ConfigError,
    UnknownToolError,
    ToolDisabledError,
)

__all__ = [
    "CacheStore",
    "CACHE_FIELDS",
    "get_default_appdata_dir",
    "get_default_cache_dir",
    "get_default_config_file",
    "init_if_not_exists",
    "PlatformInfo",
    "detect_platform",
    "platform_key",
    "BaroError",
    "NotFoundError",
    "FetchingFailedError",
    "VersionNotFoundError",
    "UnsupportedError",
    "NotInstalledError",
    "AlreadyInstalledError",
    "InvalidFieldError",
    "ConfigError",
    "UnknownToolError",
    "ToolDisabledError",
]
