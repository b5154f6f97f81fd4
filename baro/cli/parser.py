"""
baro CLI argument parser.

This module implements the command-line interface for baro using argparse.
Every command module exposes ``run(args, config) -> int``; this module is the
single place where errors are turned into user-facing messages.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from baro import __version__
from baro.config.parser import BaroConfig, load_config
from baro.core.exceptions import BaroError

logger = logging.getLogger(__name__)

COMMAND_MODULES = {
    "install": "baro.cli.commands.install",
    "use": "baro.cli.commands.use",
    "clean": "baro.cli.commands.clean",
    "list": "baro.cli.commands.list_installed",
    "lista": "baro.cli.commands.list_available",
    "update": "baro.cli.commands.update",
    "config": "baro.cli.commands.config",
}


class CLI:
    """baro command-line interface."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="baro",
            description="baro - Zig toolchain version manager",
            epilog='Use "baro COMMAND --help" for command-specific help',
        )

        parser.add_argument(
            "--version", action="version", version=f"baro {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ~/.config/baro/config.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)

        for name, help_text in (
            ("use", "Switch the active version"),
            ("clean", "Remove an installed version"),
        ):
            sub = subparsers.add_parser(name, help=help_text, description=help_text)
            sub.add_argument("version", help='Version to act on (e.g. 0.13.0, master)')

        subparsers.add_parser(
            "list",
            help="List installed versions",
            description="List every installed version; the active one is marked",
        )
        subparsers.add_parser(
            "lista",
            help="List available versions",
            description="List every version in the remote version index",
        )
        subparsers.add_parser(
            "update",
            help="Update the master version",
            description="Replace the installed master build with the newest one",
        )
        subparsers.add_parser(
            "config",
            help="Show configuration",
            description="Show the configuration file location and effective settings",
        )

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install a version",
            description="Download and install a version from the version index",
        )
        parser.add_argument("version", help="Version to install (e.g. 0.13.0, master)")
        tool = parser.add_mutually_exclusive_group()
        for name in ("compiler", "linter", "lsp"):
            tool.add_argument(
                f"--{name}",
                dest="tool",
                action="store_const",
                const=name,
                help=f"Install the {name}",
            )
        parser.set_defaults(tool="compiler")

    def parse_args(self, args: Optional[List[str]] = None):
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Returns:
            Exit code (0 for success, 1 for any error)
        """
        parsed_args = self.parse_args(args)
        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            config = load_config(parsed_args.config)
            self._apply_config_log_level(parsed_args, config)
            return self._dispatch_command(parsed_args, config)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except BaroError as e:
            logger.error(str(e))
            logger.debug(f"Error kind: {e.kind}")
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """Configure logging based on verbose/quiet flags."""
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(level=level, format=format_str, force=True)

    def _apply_config_log_level(self, args, config: BaroConfig):
        if args.verbose or args.quiet:
            return
        logging.getLogger().setLevel(getattr(logging, config.log_level))

    def _dispatch_command(self, args, config: BaroConfig) -> int:
        module_name = COMMAND_MODULES.get(args.command)
        if not module_name:
            logger.error(f"unknown command `{args.command}`")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args, config)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
