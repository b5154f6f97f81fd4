"""
Update command implementation.

Not being on the master channel is a warning, not an error: the command still
exits successfully.
"""

from baro.cli.utils import get_tool


def run(args, config) -> int:
    get_tool(args, config).update()
    return 0
