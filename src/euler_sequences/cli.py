"""Command-line interface for euler_sequences."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from euler_sequences.errors import SequenceError


def cmd_terms(args: argparse.Namespace) -> int:
    """Print consecutive terms of a named sequence."""
    from euler_sequences.registry import get_sequence

    sequence = get_sequence(args.name)
    terms = sequence.sub_list(args.start, args.start + args.count)

    if args.one_per_line:
        for offset, value in enumerate(terms):
            print(f"{args.start + offset}: {value}")
    else:
        print(", ".join(str(value) for value in terms))
    return 0


def cmd_isprime(args: argparse.Namespace) -> int:
    """Report primality of each argument."""
    from euler_sequences.core.sieve import get_eratosthenes_sieve

    sieve = get_eratosthenes_sieve()
    all_prime = True
    for n in args.numbers:
        prime = sieve.is_prime(n)
        all_prime = all_prime and prime
        if prime:
            print(f"{n}: prime (index {sieve.index_of(n)})")
        else:
            print(f"{n}: not prime")
    return 0 if all_prime else 2


def cmd_factor(args: argparse.Namespace) -> int:
    """Print prime factorizations and arithmetic functions."""
    from euler_sequences.core import factors

    for n in args.numbers:
        print(f"{n} = {factors.format_factors(factors.factorize(n))}")
        if args.stats:
            print(f"  omega={factors.omega(n)}  Omega={factors.big_omega(n)}  "
                  f"phi={factors.totient(n)}  sigma={factors.sigma(n)}  "
                  f"aliquot={factors.aliquot_sum(n)}")
    return 0


def cmd_triple(args: argparse.Namespace) -> int:
    """Print primitive Pythagorean triples in tree order."""
    from euler_sequences.pythagoras import PythagoreanTriple

    print(f"{'index':>6} {'m':>5} {'n':>5} {'a':>8} {'b':>8} {'c':>8}")
    for index in range(args.start, args.start + args.count):
        t = PythagoreanTriple.from_index(index)
        print(f"{index:>6} {t.m:>5} {t.n:>5} {t.a:>8} {t.b:>8} {t.c:>8}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List registered sequences."""
    from euler_sequences.registry import catalog

    for name, catalog_id in catalog().items():
        print(f"{name:<12} {catalog_id or '-'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="euler-sequences",
        description="Lazy integer sequences: primes, recurrences, figurate numbers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    parser.add_argument("--log-file", default=None, help="Also write a debug log to this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    terms_parser = subparsers.add_parser("terms", help="Print terms of a sequence")
    terms_parser.add_argument("name", help="Sequence name or catalog id (see 'list')")
    terms_parser.add_argument("--count", "-n", type=int, default=10, help="Number of terms")
    terms_parser.add_argument("--start", "-s", type=int, default=0, help="Index of first term")
    terms_parser.add_argument("--one-per-line", action="store_true", help="Print index: value lines")

    isprime_parser = subparsers.add_parser("isprime", help="Test integers for primality")
    isprime_parser.add_argument("numbers", type=int, nargs="+", help="Integers to test")

    factor_parser = subparsers.add_parser("factor", help="Factorize integers")
    factor_parser.add_argument("numbers", type=int, nargs="+", help="Positive integers")
    factor_parser.add_argument("--stats", action="store_true", help="Print arithmetic functions")

    triple_parser = subparsers.add_parser("triple", help="Print primitive Pythagorean triples")
    triple_parser.add_argument("--count", "-n", type=int, default=10, help="Number of triples")
    triple_parser.add_argument("--start", "-s", type=int, default=0, help="Index of first triple")

    subparsers.add_parser("list", help="List available sequences")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    from euler_sequences.utils import setup_logger

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logger = setup_logger(
        verbose=args.verbose,
        log_path=Path(args.log_file) if args.log_file else None,
    )

    commands = {
        "terms": cmd_terms,
        "isprime": cmd_isprime,
        "factor": cmd_factor,
        "triple": cmd_triple,
        "list": cmd_list,
    }

    try:
        return commands[args.command](args)
    except SequenceError as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
