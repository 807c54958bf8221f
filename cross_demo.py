#!/usr/bin/env python3
"""
Cross two flower genotypes and print the offspring distribution.

Usage:
    python cross_demo.py                       # parents from configs/cross_config.py
    python cross_demo.py RRYYWWSS rryywwss
    python cross_demo.py RrYyWWss RrYyWWss --exact

One line per distinct offspring genotype, in the order the cross produces
them, e.g. ``Genotype('RRYYWWss'): 0.25``.
"""

import argparse
import logging
import sys
from typing import List, Optional

from configs import cross_config as config
from flowercross import FlowerCrossError, Genotype, SEQ_SPACE

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Mendelian cross of two flower genotypes')

    parser.add_argument('lhs', nargs='?', default=config.DEFAULT_PARENTS[0],
                        help='First parent, e.g. RrYYWWss')
    parser.add_argument('rhs', nargs='?', default=config.DEFAULT_PARENTS[1],
                        help='Second parent, e.g. RrYYWWss')
    parser.add_argument('--exact', action='store_true',
                        help=f'Print probabilities as counts out of {SEQ_SPACE}')
    parser.add_argument('--lenient', action='store_true',
                        help='Read unexpected characters as recessive alleles instead of failing')
    parser.add_argument('--log-level', type=str, default=config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])

    return parser.parse_args(argv)


def format_results(results, exact: bool = False) -> List[str]:
    """Render cross results as ``Genotype('...'): p`` lines."""
    lines = []
    for genotype, value in results:
        if exact:
            lines.append(f"{genotype!r}: {value}/{SEQ_SPACE}")
        else:
            lines.append(f"{genotype!r}: {value:{config.PROBABILITY_FORMAT}}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format='%(levelname)s %(name)s: %(message)s')

    try:
        lhs = Genotype.from_str(args.lhs, strict=not args.lenient)
        rhs = Genotype.from_str(args.rhs, strict=not args.lenient)
    except FlowerCrossError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logger.info("Crossing %s x %s", lhs, rhs)
    results = lhs.cross_counts(rhs) if args.exact else lhs.cross(rhs)
    for line in format_results(results, exact=args.exact):
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
