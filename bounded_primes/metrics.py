# bounded_primes/metrics.py
"""
Sieve-style sums driven by the cursors:
  • mertens / moebius_sum: Möbius sums over squarefree n < bound
  • size_profile         : number of prime sets per set size
  • psi                  : count of y-smooth integers below x
  • mertens_series       : Mertens values over several bounds, with progress
  • legendre_count / li_count: analytic estimates of the prime count below n
"""

from math import log
from typing import Callable, Dict, Iterable, List, Optional

from sympy import li
from tqdm import tqdm

from .cursors import SubsetCursor
from .enumerator import smooth_numbers_over
from .model import PrimePool
from .sieve import build_prime_pool


def moebius_sum(f: Callable[[int], int], bound: int, pool: Optional[PrimePool] = None) -> int:
    """Sum of mu(n) * f(n) over 1 <= n < bound. Non-squarefree n contribute 0, so only prime sets are visited."""
    cursor = SubsetCursor(bound, pool)
    total = 0
    while not cursor.is_end:
        total += cursor.moebius() * f(cursor.n)
        cursor.advance()
    return total


def mertens(bound: int, pool: Optional[PrimePool] = None) -> int:
    """M(bound - 1) = sum of mu(n) for 1 <= n < bound."""
    return moebius_sum(lambda n: 1, bound, pool)


def size_profile(bound: int, pool: Optional[PrimePool] = None) -> Dict[int, int]:
    """{set size: number of prime sets of that size with product < bound}"""
    cursor = SubsetCursor(bound, pool)
    profile: Dict[int, int] = {}
    while not cursor.is_end:
        size = len(cursor.indices)
        profile[size] = profile.get(size, 0) + 1
        cursor.advance()
    return profile


def psi(x: int, y: int) -> int:
    """Number of integers 1 <= n < x whose prime factors are all <= y."""
    return sum(1 for _ in smooth_numbers_over(x, y))


def mertens_series(bounds: Iterable[int], verbose: bool = False) -> List[int]:
    # 共用一个覆盖最大 bound 的素数池
    bounds = list(bounds)
    if not bounds:
        return []
    pool = build_prime_pool(max(bounds), verbose=verbose)
    return [mertens(b, pool) for b in tqdm(bounds, desc="mertens", disable=not verbose)]


def legendre_count(n: int) -> int:
    """Legendre's estimate n / (log n - 1) of the number of primes below n."""
    if n < 3:
        raise ValueError(f"legendre_count needs n >= 3, got {n}")
    return int(n / (log(n) - 1))


def li_count(n: int) -> int:
    """Logarithmic-integral estimate li(n) of the number of primes below n."""
    if n < 2:
        raise ValueError(f"li_count needs n >= 2, got {n}")
    return int(li(n).evalf(30))
