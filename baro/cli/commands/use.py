"""
Use command implementation.
"""

from baro.cli.utils import get_tool


def run(args, config) -> int:
    """Activate ``args.version``."""
    get_tool(args, config).use(args.version)
    return 0
