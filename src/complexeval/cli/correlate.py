"""
ComplexEval correlate command - Correlation between two score columns.

Compares two scoring methods applied to the same items, e.g. the scores
two networks assign to shared protein pairs.

Usage:
    complexeval correlate --input scores.tsv --x method_a --y method_b
    complexeval correlate --input scores.csv --sep , --x a --y b --method spearman
"""

import argparse
import logging
import warnings
from pathlib import Path

from complexeval.cli._output import open_output
from complexeval.cli.config import load_config, merge_config_with_args, validate_config
from complexeval.stats.correlation import CORRELATION_METHODS

logger = logging.getLogger(__name__)


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the correlate subcommand."""
    parser = subparsers.add_parser(
        "correlate",
        help="Pearson / Spearman correlation between two score columns",
        description="Correlation coefficient between two numeric columns of a table."
    )

    parser.add_argument("--input", "-i", type=Path,
                        help="Delimited table with a header row")
    parser.add_argument("--x", default=None, help="First column")
    parser.add_argument("--y", default=None, help="Second column")
    parser.add_argument("--method", choices=sorted(CORRELATION_METHODS), default="pearson",
                        help="Correlation method (default: pearson)")
    parser.add_argument("--sep", default="\t",
                        help="Column delimiter (default: TAB)")
    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Write to file instead of standard output")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML/JSON config file (CLI flags take precedence)")

    parser.set_defaults(func=run_correlate, gzip=False)


def run_correlate(args: argparse.Namespace) -> int:
    """Execute the correlate command."""
    from complexeval.io.loaders import read_point_table
    from complexeval.stats.correlation import get_correlation

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.config is not None:
        try:
            config = load_config(args.config)
            validate_config(config)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Invalid config: {e}")
            return 1
        args = merge_config_with_args(config, args, getattr(args, "cli_args", None))

    if args.input is None or args.x is None or args.y is None:
        logger.error("You must specify --input, --x and --y")
        return 1

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            points = read_point_table(args.input, x=args.x, y=args.y, sep=args.sep)
        for w in caught:
            logger.warning(str(w.message))
    except (OSError, ValueError) as e:
        logger.error(f"Error while reading score table: {e}")
        return 2

    coefficient = get_correlation(args.method)
    coefficient.feed(points)
    value = coefficient.compute()
    logger.info(f"{args.method} correlation over {coefficient.n} points: {value}")

    try:
        with open_output(args.output, compress=args.gzip) as out:
            out.write(f"{value}\n")
    except OSError as e:
        logger.error(f"Error while writing output: {e}")
        return 2

    return 0
