"""
Directory layout for baro.

Default roots follow the XDG base directory conventions, mirroring the
per-user application-data / cache / config folders:

    Application data ($XDG_DATA_HOME/baro or ~/.local/share/baro):
        - bin/<binary>          : Symlink to the active toolchain binary
        - <prefix>/index.json   : Cached remote version index
        - <prefix>/<prefix>-<v> : One extracted toolchain per version
        - <prefix>/master       : Symlink to the current master build

    Cache ($XDG_CACHE_HOME/baro or ~/.cache/baro):
        - cache.json            : Freshness tokens keyed by <prefix>_<key>

    Config ($XDG_CONFIG_HOME/baro or ~/.config/baro):
        - config.yaml           : User configuration
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

APP_NAME = "baro"


def _xdg_dir(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value and Path(value).is_absolute():
        return Path(value)
    return fallback


def get_default_appdata_dir() -> Path:
    """
    Get the default application-data root.

    Returns:
        Path: ``$XDG_DATA_HOME/baro`` or ``~/.local/share/baro``

    Example:
        >>> get_default_appdata_dir()
        PosixPath('/home/user/.local/share/baro')
    """
    return _xdg_dir("XDG_DATA_HOME", Path.home() / ".local" / "share") / APP_NAME


def get_default_cache_dir() -> Path:
    """
    Get the default cache root.

    Returns:
        Path: ``$XDG_CACHE_HOME/baro`` or ``~/.cache/baro``
    """
    return _xdg_dir("XDG_CACHE_HOME", Path.home() / ".cache") / APP_NAME


def get_default_config_file() -> Path:
    """Get the default location of ``config.yaml``."""
    return _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config") / APP_NAME / "config.yaml"


def init_if_not_exists(path: Path) -> bool:
    """
    Create a directory if it does not exist yet.

    Args:
        path: Directory to create

    Returns:
        True if the directory was created by this call
    """
    path = Path(path)
    if path.is_dir():
        return False
    logger.debug(f"Create directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return True
