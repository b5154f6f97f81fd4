"""
Tool management for baro.

One :class:`ToolManager` subclass per managed tool. ``TOOL_MANAGERS`` maps
the CLI tool selector (``--compiler``, ``--linter``, ``--lsp``) to the
manager class that implements it.
"""

from typing import Dict, Type

from baro.config.parser import BaroConfig
from baro.core.exceptions import ToolDisabledError, UnknownToolError

from .info import ToolInfo, MasterInfo, MASTER
from .index import RemoteIndexClient, MAX_INDEX_SIZE
from .resolver import VersionResolver, ResolvedVersion
from .installer import Installer
from .activator import Activator
from .cleanup import Cleaner
from .updater import MasterUpdater
from .manager import ToolManager, InstalledVersion
from .zig import ZigCompiler

TOOL_MANAGERS: Dict[str, Type[ToolManager]] = {
    "compiler": ZigCompiler,
}


def create_tool(name: str, config: BaroConfig) -> ToolManager:
    """
    Create the manager for tool ``name``.

    Raises:
        UnknownToolError: If no manager is registered for ``name``
        ToolDisabledError: If the tool is disabled in the configuration
    """
    manager_cls = TOOL_MANAGERS.get(name)
    if manager_cls is None:
        raise UnknownToolError(name)
    tool_config = config.tool(name)
    if tool_config is not None and not tool_config.enabled:
        raise ToolDisabledError(name)
    return manager_cls.from_config(config, tool_config)


__all__ = [
    "ToolInfo",
    "MasterInfo",
    "MASTER",
    "RemoteIndexClient",
    "MAX_INDEX_SIZE",
    "VersionResolver",
    "ResolvedVersion",
    "Installer",
    "Activator",
    "Cleaner",
    "MasterUpdater",
    "ToolManager",
    "InstalledVersion",
    "ZigCompiler",
    "TOOL_MANAGERS",
    "create_tool",
    "UnknownToolError",
    "ToolDisabledError",
]
