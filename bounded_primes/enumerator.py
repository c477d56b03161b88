# bounded_primes/enumerator.py
from __future__ import annotations
from typing import Iterable, Iterator, Optional

from .cursors import ExponentCursor, FixedArityCursor, SmoothNumberCursor, SubsetCursor
from .model import Factorization, PrimePool, PrimeSet
from .sieve import build_prime_pool


def prime_sets(bound: int, pool: Optional[PrimePool] = None) -> Iterator[PrimeSet]:
    """素数集（含空集 n=1），乘积 < bound，按字典序。"""
    return iter(SubsetCursor(bound, pool))


def prime_tuples(bound: int, k: int, pool: Optional[PrimePool] = None) -> Iterator[PrimeSet]:
    """恰含 k 个不同素数的集合，乘积 < bound。k=0 或素数不足时立即报错。"""
    return iter(FixedArityCursor(bound, k, pool))


def exponent_tuples(primes: Iterable[int], bound: int) -> Iterator[Factorization]:
    return iter(ExponentCursor(primes, bound))


def smooth_numbers(bound: int, pool: Optional[PrimePool] = None) -> Iterator[Factorization]:
    """所有 < bound 且素因子全在 pool 中的整数（含 1），附带分解。"""
    return iter(SmoothNumberCursor(bound, pool))


def smooth_numbers_over(bound: int, y: int) -> Iterator[Factorization]:
    """y-smooth integers below bound: the pool is cut down to primes <= y."""
    pool = build_prime_pool(min(bound, y + 1)).restricted(y)
    return iter(SmoothNumberCursor(bound, pool))


def _count(cursor) -> int:
    total = 0
    if cursor.n and not cursor.in_bounds:
        cursor.advance()
    while not cursor.is_end:
        total += 1
        cursor.advance()
    return total


def count_prime_sets(bound: int, pool: Optional[PrimePool] = None) -> int:
    """返回素数集个数（即 < bound 的无平方因子数个数）。"""
    return _count(SubsetCursor(bound, pool))


def count_prime_tuples(bound: int, k: int, pool: Optional[PrimePool] = None) -> int:
    return _count(FixedArityCursor(bound, k, pool))


def count_smooth(bound: int, pool: Optional[PrimePool] = None) -> int:
    return _count(SmoothNumberCursor(bound, pool))
