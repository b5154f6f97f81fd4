"""YAML configuration parser for baro.

This module loads ``config.yaml`` and turns it into a :class:`BaroConfig`.
Every key is optional; a missing file yields the defaults.

Example ``config.yaml``::

    appdata_path: ~/.local/share/baro
    cache_path: ~/.cache/baro
    log_level: INFO
    timeout: 60
    tools:
      compiler:
        enabled: true
        check_for_update: true
        index_url: https://ziglang.org/download/index.json
"""

import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from baro.core.directory import (
    get_default_appdata_dir,
    get_default_cache_dir,
    get_default_config_file,
    init_if_not_exists,
)
from baro.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ZIG_INDEX_URL = "https://ziglang.org/download/index.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
KNOWN_TOOLS = ("compiler", "linter", "lsp")


@dataclass
class ToolConfig:
    """Configuration for a single managed tool."""

    enabled: bool = True
    check_for_update: bool = True  # probe the index before reading it
    index_url: str = ZIG_INDEX_URL


@dataclass
class BaroConfig:
    """Complete baro configuration."""

    appdata_path: Path = field(default_factory=get_default_appdata_dir)
    cache_path: Path = field(default_factory=get_default_cache_dir)
    cache_file: str = "cache.json"
    log_level: str = "INFO"
    timeout: Optional[float] = None
    tools: Dict[str, ToolConfig] = field(
        default_factory=lambda: {"compiler": ToolConfig()}
    )
    source: Optional[Path] = None  # file the config was read from

    @property
    def cache_file_path(self) -> Path:
        return self.cache_path / self.cache_file

    def tool(self, name: str) -> Optional[ToolConfig]:
        """Get the configuration of ``name``, or None if it is not configured."""
        return self.tools.get(name)

    def ensure_directories(self) -> None:
        """Create the application-data and cache roots if missing."""
        init_if_not_exists(self.appdata_path)
        init_if_not_exists(self.cache_path)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view, suitable for YAML output."""
        data = asdict(self)
        data.pop("source")
        data["appdata_path"] = str(self.appdata_path)
        data["cache_path"] = str(self.cache_path)
        return data


def load_config(config_path: Optional[Path] = None) -> BaroConfig:
    """
    Load configuration, falling back to defaults.

    Args:
        config_path: Explicit config file. If None, the default location is
            used and a missing file is not an error.

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid
    """
    if config_path is not None:
        config_path = Path(config_path).expanduser()
        if not config_path.exists():
            raise ConfigError(f"configuration file not found: {config_path}")
        return parse_config(config_path)

    default_path = get_default_config_file()
    if not default_path.exists():
        logger.debug(f"Config file not found (optional): {default_path}")
        return BaroConfig()
    return parse_config(default_path)


def parse_config(config_path: Path) -> BaroConfig:
    """
    Parse a ``config.yaml`` file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    logger.debug(f"Loading configuration from {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML syntax in {config_path}: {e}")

    config = parse_config_data(data or {})
    config.source = Path(config_path)
    return config


def parse_config_data(data: Any) -> BaroConfig:
    """Validate raw YAML data and build a :class:`BaroConfig`."""
    if not isinstance(data, dict):
        raise ConfigError("top level must be a mapping")

    config = BaroConfig()

    for key in ("appdata_path", "cache_path"):
        if key in data:
            setattr(config, key, _parse_path(key, data[key]))

    if "cache_file" in data:
        cache_file = data["cache_file"]
        if not isinstance(cache_file, str) or not cache_file or "/" in cache_file:
            raise ConfigError("'cache_file' must be a plain file name")
        config.cache_file = cache_file

    if "log_level" in data:
        level = str(data["log_level"]).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"'log_level' must be one of {', '.join(LOG_LEVELS)}, got {data['log_level']!r}"
            )
        config.log_level = level

    if "timeout" in data:
        timeout = data["timeout"]
        if timeout is not None and (
            isinstance(timeout, bool)
            or not isinstance(timeout, (int, float))
            or timeout <= 0
        ):
            raise ConfigError("'timeout' must be a positive number or null")
        config.timeout = timeout

    if "tools" in data:
        config.tools = _parse_tools(data["tools"])

    return config


def _parse_path(key: str, value: Any) -> Path:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    path = Path(value).expanduser()
    if not path.is_absolute():
        raise ConfigError(f"'{key}' must be an absolute path, got {value!r}")
    return path


def _parse_tools(data: Any) -> Dict[str, ToolConfig]:
    if not isinstance(data, dict):
        raise ConfigError("'tools' must be a mapping")

    tools = {"compiler": ToolConfig()}
    for name, tool_data in data.items():
        if name not in KNOWN_TOOLS:
            raise ConfigError(
                f"unknown tool {name!r} (expected one of {', '.join(KNOWN_TOOLS)})"
            )
        tool_data = tool_data or {}
        if not isinstance(tool_data, dict):
            raise ConfigError(f"'tools.{name}' must be a mapping")

        tool = ToolConfig()
        for flag in ("enabled", "check_for_update"):
            if flag in tool_data:
                if not isinstance(tool_data[flag], bool):
                    raise ConfigError(f"'tools.{name}.{flag}' must be a boolean")
                setattr(tool, flag, tool_data[flag])
        if "index_url" in tool_data:
            url = tool_data["index_url"]
            if not isinstance(url, str) or not url.startswith(("http://", "https://")):
                raise ConfigError(f"'tools.{name}.index_url' must be an http(s) URL")
            tool.index_url = url
        tools[name] = tool

    return tools
