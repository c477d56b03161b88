# scripts/list_cursor.py
from __future__ import annotations

import argparse
import pathlib
import sys

# 允许用 “python scripts/list_cursor.py” 直接运行
PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bounded_primes.cursors import FixedArityCursor, SmoothNumberCursor, SubsetCursor
from bounded_primes.sieve import build_prime_pool


def positive_int(val: str) -> int:
    iv = int(val)
    if iv <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return iv


def non_negative_int(val: str) -> int:
    iv = int(val)
    if iv < 0:
        raise argparse.ArgumentTypeError("must be a non-negative integer")
    return iv


def list_sets(limit: int) -> None:
    cursor = SubsetCursor(limit, build_prime_pool(limit))
    while not cursor.is_end:
        print(f"{cursor.snapshot()}, mu({cursor.n}) = {cursor.moebius()}")
        cursor.advance()


def list_tuples(limit: int, size: int) -> None:
    for prime_set in FixedArityCursor(limit, size, build_prime_pool(limit)):
        print(prime_set)


def list_factorizations(limit: int) -> None:
    cursor = SmoothNumberCursor(limit, build_prime_pool(limit))
    while not cursor.is_end:
        print(cursor.snapshot())
        cursor.advance()


def main() -> int:
    parser = argparse.ArgumentParser(
        description="List bounded prime sets, prime tuples or factorizations"
    )
    parser.add_argument(
        "kind",
        choices=["sets", "tuples", "factorizations"],
        help="What to enumerate",
    )
    parser.add_argument("--limit", type=positive_int, required=True, help="Exclusive upper bound")
    parser.add_argument(
        "--size", type=non_negative_int, default=2, help="Tuple size (kind=tuples only)"
    )
    args = parser.parse_args()

    try:
        if args.kind == "sets":
            list_sets(args.limit)
        elif args.kind == "tuples":
            list_tuples(args.limit, args.size)
        else:
            list_factorizations(args.limit)
    except ValueError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
