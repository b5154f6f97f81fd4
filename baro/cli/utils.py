"""
Shared utilities for CLI commands.
"""

import logging

from baro.config.parser import BaroConfig
from baro.tool import ToolManager, create_tool

logger = logging.getLogger(__name__)


def get_tool(args, config: BaroConfig) -> ToolManager:
    """
    Create the manager the command targets.

    Commands without a tool selector act on the compiler.
    """
    config.ensure_directories()
    name = getattr(args, "tool", None) or "compiler"
    logger.debug(f"Using tool: {name}")
    return create_tool(name, config)
