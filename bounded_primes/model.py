from __future__ import annotations
from bisect import bisect_left
from dataclasses import dataclass
from functools import reduce
from math import lcm, prod
from typing import Iterator, Optional, Tuple

from .errors import InvalidPool

# 累乘器宽度：运行中的乘积必须小于 2**WORD_BITS
WORD_BITS = 64
WORD_LIMIT = 1 << WORD_BITS


@dataclass(frozen=True)
class PrimePool:
    """Ordered, deduplicated primes shared read-only by every cursor built on it."""
    primes: Tuple[int, ...]

    def __post_init__(self):
        prev = 1
        for p in self.primes:
            if not isinstance(p, int) or isinstance(p, bool):
                raise InvalidPool(f"pool entries must be int, got {type(p).__name__}")
            if p <= prev:
                raise InvalidPool(f"pool must be strictly increasing primes >= 2, saw {p} after {prev}")
            prev = p

    # ---------- sequence view ----------
    def __len__(self) -> int:
        return len(self.primes)

    def __getitem__(self, index: int) -> int:
        return self.primes[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.primes)

    # ---------- bounded access ----------
    def next_prime(self, index: int) -> Optional[int]:
        """Entry after position `index`, or None past the end of the pool."""
        j = index + 1
        if j < len(self.primes):
            return self.primes[j]
        return None

    def count_below(self, bound: int) -> int:
        return bisect_left(self.primes, bound)

    def primes_below(self, bound: int) -> Tuple[int, ...]:
        return self.primes[:self.count_below(bound)]

    def covers(self, bound: int) -> bool:
        """True when the trailing entry is >= bound (the sentinel invariant)."""
        return bool(self.primes) and self.primes[-1] >= bound

    def restricted(self, y: int) -> "PrimePool":
        """Sub-pool of the primes <= y."""
        return PrimePool(self.primes[:bisect_left(self.primes, y + 1)])


@dataclass(frozen=True)
class PrimePower:
    prime: int
    power: int

    @property
    def value(self) -> int:
        return self.prime ** self.power

    def __str__(self) -> str:
        return f"{self.prime}^{self.power}" if self.power > 1 else f"{self.prime}"


@dataclass(frozen=True)
class PrimeSet:
    """A squarefree element: the product n of a set of distinct primes."""
    n: int
    primes: Tuple[int, ...]

    @property
    def mu(self) -> int:
        return -1 if len(self.primes) & 1 else 1

    def as_factorization(self) -> "Factorization":
        return Factorization(self.n, tuple(PrimePower(p, 1) for p in self.primes))

    def __str__(self) -> str:
        if not self.primes:
            return f"{self.n} = (empty product)"
        return f"{self.n} = " + " * ".join(str(p) for p in self.primes)


@dataclass(frozen=True)
class Factorization:
    """
    n together with its prime factorization, primes increasing.
    Arithmetic functions are read straight off the prime powers.
    """
    n: int
    powers: Tuple[PrimePower, ...]

    @property
    def primes(self) -> Tuple[int, ...]:
        return tuple(pp.prime for pp in self.powers)

    @property
    def exponents(self) -> Tuple[int, ...]:
        return tuple(pp.power for pp in self.powers)

    # ---------- counting functions ----------
    @property
    def omega(self) -> int:
        return len(self.powers)

    @property
    def big_omega(self) -> int:
        return sum(pp.power for pp in self.powers)

    @property
    def tau(self) -> int:
        return prod(pp.power + 1 for pp in self.powers)

    def valuation(self, prime: int) -> int:
        for pp in self.powers:
            if pp.prime == prime:
                return pp.power
        return 0

    # ---------- multiplicative functions ----------
    def sigma(self, k: int = 1) -> int:
        if k == 0:
            return self.tau
        return prod((pp.prime ** (k * (pp.power + 1)) - 1) // (pp.prime ** k - 1) for pp in self.powers)

    @property
    def euler_phi(self) -> int:
        return prod(pp.prime ** (pp.power - 1) * (pp.prime - 1) for pp in self.powers)

    @property
    def radical(self) -> int:
        return prod(pp.prime for pp in self.powers)

    @property
    def is_squarefree(self) -> bool:
        return all(pp.power == 1 for pp in self.powers)

    @property
    def mu(self) -> int:
        if not self.is_squarefree:
            return 0
        return -1 if len(self.powers) & 1 else 1

    @property
    def liouville(self) -> int:
        return -1 if self.big_omega & 1 else 1

    @property
    def carmichael(self) -> int:
        def lam(pp: PrimePower) -> int:
            if pp.prime == 2 and pp.power >= 3:
                return 1 << (pp.power - 2)
            return pp.prime ** (pp.power - 1) * (pp.prime - 1)
        return reduce(lcm, (lam(pp) for pp in self.powers), 1)

    # ---------- divisors ----------
    @property
    def divisors(self) -> Tuple[int, ...]:
        """All divisors of n, increasing."""
        # 指数里程表：address[j] 在 0..power 之间循环进位
        address = [0] * len(self.powers)
        out = []
        for _ in range(self.tau):
            out.append(prod(pp.prime ** a for pp, a in zip(self.powers, address)))
            for j, pp in enumerate(self.powers):
                address[j] = (address[j] + 1) % (pp.power + 1)
                if address[j]:
                    break
        return tuple(sorted(out))

    @property
    def sum_proper_divisors(self) -> int:
        return self.sigma() - self.n

    # ---------- aliquot classification ----------
    @property
    def is_perfect(self) -> bool:
        return self.sum_proper_divisors == self.n

    @property
    def is_abundant(self) -> bool:
        return self.sum_proper_divisors > self.n

    @property
    def is_deficient(self) -> bool:
        return self.sum_proper_divisors < self.n

    def __str__(self) -> str:
        if not self.powers:
            return f"{self.n} = (empty product)"
        return f"{self.n} = " + " * ".join(str(pp) for pp in self.powers)
