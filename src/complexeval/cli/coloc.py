"""
ComplexEval coloc command - Colocalization scores of a complex set.

Output types:
    0  average score of the complex set (size-weighted unless --nonweighted)
    1  one score per complex, in file order
    2  network of colocalized protein pairs within complexes

Usage:
    complexeval coloc -i complexes.txt --loc localization.txt
    complexeval coloc -i complexes.txt --loc localization.txt --ppv --nomiss
    complexeval coloc -i complexes.txt --loc localization.txt --outtype 2 -o pairs.tsv.gz --gzip
"""

import argparse
import logging
import math
from pathlib import Path

from complexeval.cli._output import open_output
from complexeval.cli.config import load_config, merge_config_with_args, validate_config

logger = logging.getLogger(__name__)


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the coloc subcommand."""
    parser = subparsers.add_parser(
        "coloc",
        help="Colocalization score / PPV of a complex set",
        description=(
            "Score how consistently the members of each predicted complex "
            "share a subcellular localization."
        )
    )

    # Input/output
    parser.add_argument("--input", "-i", type=Path,
                        help="Complex set file (one complex per line, TAB-separated members)")
    parser.add_argument("--loc", type=Path,
                        help="Localization file (PROTEIN loc1,loc2,...)")
    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Write to file instead of standard output")
    parser.add_argument("--gzip", action="store_true",
                        help="GZIP-compress the output file")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML/JSON config file (CLI flags take precedence)")

    # Scoring
    parser.add_argument("--outtype", type=int, choices=[0, 1, 2], default=0,
                        help="0: set average, 1: per-complex scores, "
                             "2: colocalized pairs network (default: 0)")
    parser.add_argument("--ppv", action="store_true",
                        help="Calculate PPV instead of colocalization score")
    parser.add_argument("--nomiss", action="store_true",
                        help="Ignore complexes without localization data")
    parser.add_argument("--nonweighted", action="store_true",
                        help="Non-weighted average (only relevant for --outtype 0)")
    parser.add_argument("--separator", default="\t",
                        help="Separator between complex members (default: TAB)")
    parser.add_argument("--case-sensitive", action="store_true",
                        help="Treat protein identifiers as case-sensitive")

    parser.set_defaults(func=run_coloc)


def _average_scores(complexes, scores, weighted: bool, skip_missing: bool) -> float:
    """
    Set average matching the per-complex output.

    Under ``skip_missing`` only NaN scores are left out, the same complexes
    --outtype 1 omits; a PPV of 0 still counts. Remaining NaN count as 0.
    """
    total = 0.0
    weight = 0.0
    for c, value in zip(complexes, scores):
        if math.isnan(value):
            if skip_missing:
                continue
            value = 0.0
        w = len(c) if weighted else 1
        total += value * w
        weight += w
    if weight == 0:
        return math.nan
    return total / weight


def run_coloc(args: argparse.Namespace) -> int:
    """Execute the coloc command."""
    from complexeval.io.loaders import read_complexes, read_localization_data
    from complexeval.quality.colocalization import Colocalization

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

    if args.input is None:
        logger.error("You must specify a complex set input file using --input")
        return 1
    if args.loc is None:
        logger.error("You must specify a localization data file using --loc")
        return 1

    if args.nomiss and args.outtype == 2:
        logger.warning("--nomiss has no effect for --outtype 2")
    if args.nonweighted and args.outtype != 0:
        logger.warning(f"--nonweighted has no effect for --outtype {args.outtype}")

    try:
        localization = read_localization_data(args.loc, case_sensitive=args.case_sensitive)
    except (OSError, ValueError) as e:
        logger.error(f"Error while reading localization data file: {e}")
        return 2

    try:
        complexes = read_complexes(args.input, separator=args.separator,
                                   case_sensitive=args.case_sensitive)
    except (OSError, ValueError) as e:
        logger.error(f"Error while reading complex set file: {e}")
        return 2

    coloc = Colocalization(localization)
    score = "ppv" if args.ppv else "colocalization"

    try:
        with open_output(args.output, compress=args.gzip) as out:
            if args.outtype == 0:
                avg = _average_scores(
                    complexes,
                    coloc.scores(complexes, score=score),
                    weighted=not args.nonweighted,
                    skip_missing=args.nomiss,
                )
                out.write(f"{avg}\n")
            elif args.outtype == 1:
                for value in coloc.scores(complexes, score=score):
                    if math.isnan(value):
                        if args.nomiss:
                            continue
                        value = 0.0
                    out.write(f"{value}\n")
            else:
                n_pairs = 0
                for a, b in coloc.colocalized_pairs(complexes):
                    out.write(f"{a}\t{b}\t1.0\n")
                    n_pairs += 1
                logger.info(f"Wrote {n_pairs} colocalized pairs")
    except (OSError, ValueError) as e:
        logger.error(f"Error while writing output: {e}")
        return 2

    return 0
