"""hostguard CLI - Main package.

This module provides the HostguardCLI class.
Uses handler pattern for modular command handling.
"""

import argparse

from hostguard.branding import VERSION
from hostguard.cli.handlers import ComplianceHandler, add_fix_parser, add_scan_parser


class HostguardCLI:
    """Facade class for hostguard CLI - delegates to modular handlers."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._compliance_handler = ComplianceHandler(verbose=verbose)

    def scan(self, args: argparse.Namespace) -> int:
        """Handle scan command."""
        return self._compliance_handler.scan(args)

    def fix(self, args: argparse.Namespace) -> int:
        """Handle fix command."""
        return self._compliance_handler.fix(args)

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser with all subcommands."""
        parser = argparse.ArgumentParser(
            prog="hostguard",
            description="Audit and remediate ESXi host hardening settings",
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Show compliant checks too"
        )
        parser.add_argument("--version", "-V", action="version", version=f"hostguard {VERSION}")

        subparsers = parser.add_subparsers(dest="command", required=True)
        add_scan_parser(subparsers)
        add_fix_parser(subparsers)

        return parser

    def dispatch(self, args: argparse.Namespace) -> int:
        """Dispatch command to appropriate handler.

        Returns exit code (0 compliant, 1 failure, 2 non-compliant hosts found).
        """
        command_handlers = {
            "scan": self.scan,
            "fix": self.fix,
        }
        return command_handlers[args.command](args)


from hostguard.cli_main import main as main

__all__ = ["HostguardCLI", "main"]
