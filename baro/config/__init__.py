"""
Configuration for baro.

Loads the user's ``config.yaml`` into a :class:`BaroConfig`.
"""

from .parser import (
    BaroConfig,
    ToolConfig,
    load_config,
    parse_config,
    parse_config_data,
    ZIG_INDEX_URL,
)

__all__ = [
    "BaroConfig",
    "ToolConfig",
    "load_config",
    "parse_config",
    "parse_config_data",
    "ZIG_INDEX_URL",
]
