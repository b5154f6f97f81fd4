"""
List command implementation.

Prints every installed version, marking the active one.
"""

import logging

from baro.cli.utils import get_tool

logger = logging.getLogger(__name__)


def run(args, config) -> int:
    tool = get_tool(args, config)
    installed = tool.list_installed()

    if not installed:
        logger.info("No versions installed. Use `baro install <version>` first.")
        return 0

    logger.info("All installed versions:")
    for item in installed:
        marker = " (active)" if item.active else ""
        print(f"- {item.version}{marker}")
    return 0
