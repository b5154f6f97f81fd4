"""
Entry point for running baro as a module.

Usage: python -m baro [command] [options]
"""

from baro.cli.parser import main

if __name__ == "__main__":
    main()
