"""
Entry point for running the baro CLI as a module.

Usage: python -m baro.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
