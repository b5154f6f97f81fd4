"""
Config command implementation.

Shows where the configuration was read from and the effective settings.
"""

import yaml

from baro.core.directory import get_default_config_file


def run(args, config) -> int:
    source = config.source or get_default_config_file()
    status = "" if source.exists() else " (not found, using defaults)"
    print(f"# Configuration file: {source}{status}")
    print(yaml.safe_dump(config.to_dict(), sort_keys=False, default_flow_style=False), end="")
    return 0
