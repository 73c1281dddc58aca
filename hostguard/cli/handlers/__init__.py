"""hostguard CLI Handlers.

Modular command handlers for hostguard CLI.
"""

from hostguard.cli.handlers.compliance import ComplianceHandler, add_fix_parser, add_scan_parser

__all__ = [
    # Compliance
    "ComplianceHandler",
    "add_scan_parser",
    "add_fix_parser",
]
