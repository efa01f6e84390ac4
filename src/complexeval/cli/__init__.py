"""
ComplexEval CLI - Command-line interface for complex set evaluation.

Commands:
    complexeval coloc      - Colocalization score / PPV of a complex set
    complexeval correlate  - Pearson / Spearman correlation of two score columns
"""

import argparse
import sys
from typing import Optional, List


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI dispatcher for complexeval."""
    parser = argparse.ArgumentParser(
        prog="complexeval",
        description="Biological plausibility scoring for predicted protein complexes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  coloc       Colocalization score / PPV of a complex set
  correlate   Pearson / Spearman correlation of two score columns

Examples:
  complexeval coloc -i complexes.txt --loc localization.txt
  complexeval coloc -i complexes.txt --loc localization.txt --ppv --outtype 1
  complexeval correlate --input scores.tsv --x method_a --y method_b --method spearman
        """
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version="%(prog)s 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Import and register subcommands
    from complexeval.cli import coloc, correlate
    coloc.register_parser(subparsers)
    correlate.register_parser(subparsers)

    raw_args = list(args) if args is not None else sys.argv[1:]
    parsed_args = parser.parse_args(raw_args)

    if parsed_args.command is None:
        parser.print_help()
        return 0

    # Raw arguments let config merging tell explicit flags from defaults
    parsed_args.cli_args = raw_args

    # Dispatch to subcommand
    return parsed_args.func(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
