"""
Clean command implementation.
"""

from baro.cli.utils import get_tool


def run(args, config) -> int:
    """Remove the installed ``args.version``."""
    get_tool(args, config).clean(args.version)
    return 0
