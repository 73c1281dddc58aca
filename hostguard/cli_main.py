"""hostguard CLI - Main entry point.

Uses the HostguardCLI facade from hostguard.cli which delegates to handlers.
"""

import logging
import sys


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Suppress noisy log messages
    logging.getLogger("pyVmomi").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for hostguard CLI."""
    from hostguard.cli import HostguardCLI

    parser = HostguardCLI().create_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    cli = HostguardCLI(verbose=args.verbose)

    try:
        return cli.dispatch(args)
    except KeyboardInterrupt:
        from hostguard.branding import cx_print

        cx_print("Interrupted", "warning")
        return 130


if __name__ == "__main__":
    sys.exit(main())
