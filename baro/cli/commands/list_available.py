"""
Lista command implementation.

Prints every version listed in the version index.
"""

import logging

from baro.cli.utils import get_tool

logger = logging.getLogger(__name__)


def run(args, config) -> int:
    tool = get_tool(args, config)
    versions = tool.list_available()

    logger.info("All available versions:")
    for version in versions:
        print(f"- {version}")
    return 0
