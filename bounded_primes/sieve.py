# bounded_primes/sieve.py
from __future__ import annotations
from typing import Iterable

from sympy import isprime, nextprime, primerange

from .errors import InvalidPool
from .model import PrimePool

__all__ = ["build_prime_pool", "pool_from_primes"]


def build_prime_pool(limit: int, verbose: bool = False) -> PrimePool:
    """
    All primes < limit, followed by exactly one prime >= limit.
    The trailing prime is the sentinel: pool.covers(b) holds for every b <= limit.
    """
    if not isinstance(limit, int):
        raise TypeError(f"build_prime_pool expects int limit, got {type(limit).__name__}")
    primes = list(primerange(2, limit)) if limit > 2 else []
    # 哨兵：第一个 >= limit 的素数
    primes.append(int(nextprime(limit - 1)) if limit > 2 else 2)
    if verbose:
        print(f"[sieve] limit={limit}  primes={len(primes) - 1}  sentinel={primes[-1]}", flush=True)
    return PrimePool(tuple(int(p) for p in primes))


def pool_from_primes(primes: Iterable[int], check_primes: bool = False) -> PrimePool:
    """Wrap a caller-supplied increasing prime list; optionally verify primality."""
    pool = PrimePool(tuple(primes))
    if check_primes:
        for p in pool:
            if not isprime(p):
                raise InvalidPool(f"pool entry {p} is not prime")
    return pool
