#!/usr/bin/env python3
import argparse
import sys

import yaml

from sortpar import __version__
from sortpar.config import SortStrategy, build_sort_config, load_config, output_path
from sortpar.orchestrator import run_once


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sortpar", description="sort lines in parallel")
    parser.add_argument("files", metavar="FILE", nargs="*", help="the list of files to sort ('-' or none for stdin)")
    parser.add_argument("--config", help="Path to YAML config with sort defaults")
    # filters, applied in this order
    parser.add_argument("-b", "--ignore-leading-blanks", dest="leading_blanks", action="store_true", help="ignore leading blanks")
    parser.add_argument("-d", "--dictionary-order", dest="dictionary_order", action="store_true", help="consider only blanks and alphanumeric characters")
    parser.add_argument("-f", "--ignore-case", dest="fold", action="store_true", help="fold casing while sorting")
    # strategies, at most one
    strategy = parser.add_mutually_exclusive_group()
    strategy.add_argument("-g", "--general-numeric-sort", dest="strategy", action="store_const", const=SortStrategy.GENERAL_NUMERIC.value, help="compare according to general numerical value")
    strategy.add_argument("-H", "--human-numeric-sort", dest="strategy", action="store_const", const=SortStrategy.NATURAL_ORDER.value, help="compare embedded numbers by value (item2 < item10)")
    strategy.add_argument("-V", "--version-sort", dest="strategy", action="store_const", const=SortStrategy.VERSION_ORDER.value, help="natural sort of version numbers within text")
    parser.add_argument("-r", "--reverse", action="store_true", help="reverse the result of comparisons")
    parser.add_argument("-s", "--stable", action="store_true", help="keep equal lines in input order")
    parser.add_argument("-u", "--unique", action="store_true", help="output only the first of an equal run of identical lines")
    parser.add_argument("-o", "--output", metavar="FILE", help="write result to FILE instead of standard output")
    parser.add_argument("--parallel", type=int, metavar="N", help="number of sort workers")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.parallel is not None and args.parallel < 1:
        parser.error("--parallel must be at least 1")

    overrides = {
        "leading_blanks": args.leading_blanks,
        "dictionary_order": args.dictionary_order,
        "fold": args.fold,
        "strategy": args.strategy,
        "reverse": args.reverse,
        "stable": args.stable,
        "unique": args.unique,
        "parallel": args.parallel,
    }

    try:
        cfg = load_config(args.config) if args.config else {}
        config = build_sort_config(cfg, overrides)
    except (OSError, ValueError, yaml.YAMLError) as e:
        parser.error(str(e))

    try:
        run_once(args.files, config=config, output=output_path(cfg, args.output))
    except OSError:
        # already reported by run_once
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
