"""
Install command implementation.
"""

from baro.cli.utils import get_tool


def run(args, config) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments (``version``, ``tool``)
        config: Loaded configuration

    Returns:
        Exit code (0 for success)
    """
    tool = get_tool(args, config)
    tool.install(args.version)
    return 0
