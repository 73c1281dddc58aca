"""Compliance command handler for hostguard CLI.

Handles the scan and fix commands.
"""

import argparse
import logging

from hostguard.branding import cx_header, cx_print
from hostguard.cli.render import render_report
from hostguard.compliance import (
    ConfigError,
    GatewayError,
    HostNotFoundError,
    Mode,
    run_compliance,
)
from hostguard.env_loader import load_env
from hostguard.vsphere import VCenterConnection, VSphereHostGateway

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NON_COMPLIANT = 2


class ComplianceHandler:
    """Handler for scan and fix commands."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def scan(self, args: argparse.Namespace) -> int:
        """Report baseline drift without changing any host."""
        return self._run(args, Mode.SCAN)

    def fix(self, args: argparse.Namespace) -> int:
        """Apply the baseline to every non-compliant host."""
        return self._run(args, Mode.FIX)

    def _run(self, args: argparse.Namespace, mode: Mode) -> int:
        try:
            settings = load_env()
            with VCenterConnection(settings) as connection:
                hosts = connection.find_hosts(args.hosts)
                cx_header(f"Host compliance {mode.value.upper()}")
                report = run_compliance(
                    hosts,
                    VSphereHostGateway(),
                    mode=mode,
                    include_witness=args.include_witness,
                    include_pending=args.include_pending,
                )
        except (ConfigError, HostNotFoundError) as e:
            cx_print(str(e), "error")
            return EXIT_ERROR
        except GatewayError as e:
            logger.debug("Gateway failure", exc_info=True)
            cx_print(str(e), "error")
            return EXIT_ERROR

        render_report(report, verbose=self.verbose)
        if report.all_compliant:
            cx_print("All processed hosts are compliant", "success")
            return EXIT_OK
        return EXIT_NON_COMPLIANT


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("hosts", nargs="+", metavar="HOST", help="Host names to process")
    parser.add_argument(
        "--include-witness", action="store_true", help="Also process witness appliances"
    )
    parser.add_argument(
        "--include-pending",
        action="store_true",
        help="Also process hosts in clusters pending configuration",
    )
    # same flag as the global one, so it works after the subcommand too
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Show compliant checks too",
    )


def add_scan_parser(subparsers) -> argparse.ArgumentParser:
    """Add scan parser to subparsers."""
    scan_parser = subparsers.add_parser("scan", help="Report hardening drift (no changes)")
    _add_common_arguments(scan_parser)
    return scan_parser


def add_fix_parser(subparsers) -> argparse.ArgumentParser:
    """Add fix parser to subparsers."""
    fix_parser = subparsers.add_parser("fix", help="Apply the hardening baseline")
    _add_common_arguments(fix_parser)
    return fix_parser
