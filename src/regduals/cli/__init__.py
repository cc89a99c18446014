"""
regduals CLI - Command-line interface for dual regulon diagnostics.

Commands:
    regduals plot   - Shared-target scatterplots for dual regulons
"""

import argparse
import sys
from typing import Optional, List


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI dispatcher for regduals."""
    parser = argparse.ArgumentParser(
        prog="regduals",
        description="Diagnostic plots for dual regulons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  plot          Shared-target scatterplots for dual regulons

Examples:
  regduals plot --input results/duals --output figures/
  regduals plot --config plot.yaml
        """
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version="%(prog)s 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    from regduals.cli import plot
    plot.register_parser(subparsers)

    argv = sys.argv[1:] if args is None else list(args)
    parsed_args = parser.parse_args(argv)

    if parsed_args.command is None:
        parser.print_help()
        return 0

    # Raw argv lets subcommands tell explicit flags from defaults
    return parsed_args.func(parsed_args, argv)


if __name__ == "__main__":
    sys.exit(main())
