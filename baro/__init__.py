"""
baro - a local version manager for the Zig toolchain.

Installs, switches between, lists and removes Zig compiler versions fetched
from the upstream download index.
"""

__version__ = "0.1.0"
