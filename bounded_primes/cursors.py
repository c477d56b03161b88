# bounded_primes/cursors.py
"""
Bounded lexicographic cursors over a prime pool:
  • SubsetCursor       : sets of distinct primes with product < bound
  • FixedArityCursor   : sets of exactly k distinct primes with product < bound
  • ExponentCursor     : exponent tuples over one fixed prime set with value < bound
  • SmoothNumberCursor : every pool-smooth integer < bound with its factorization

Each cursor walks an implicit search tree one node per advance(), keeping the
running product n up to date instead of recomputing it. n == 0 marks End.
"""
from __future__ import annotations

from dataclasses import dataclass
from math import prod
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .errors import CursorExhausted, InsufficientPool, UnsupportedZeroArity
from .model import WORD_LIMIT, Factorization, PrimePool, PrimePower, PrimeSet
from .sieve import build_prime_pool

__all__ = [
    "BoundedCursor",
    "SubsetCursor",
    "FixedArityCursor",
    "ExponentCursor",
    "SmoothNumberCursor",
    "WalkingExponents",
    "DONE",
]

Snapshot = Union[PrimeSet, Factorization]


def _check_bound(bound) -> int:
    if not isinstance(bound, int) or isinstance(bound, bool):
        raise TypeError(f"bound must be int, got {type(bound).__name__}")
    if bound > WORD_LIMIT:
        raise ValueError(f"bound {bound} exceeds the 2**64 accumulator")
    return bound


class BoundedCursor:
    """
    Forward-only cursor with a single mutator, advance().

    End is absorbing: advance() on an End cursor does nothing. Reading the
    current element of an End cursor raises CursorExhausted. Iterating a cursor
    consumes it and yields immutable snapshots.
    """

    def __init__(self, bound: int, pool: PrimePool):
        self._bound = _check_bound(bound)
        self._pool = pool
        self._n = 1

    @property
    def bound(self) -> int:
        return self._bound

    @property
    def pool(self) -> PrimePool:
        return self._pool

    @property
    def n(self) -> int:
        return self._n

    @property
    def is_end(self) -> bool:
        return self._n == 0

    @property
    def in_bounds(self) -> bool:
        return 0 < self._n < self._bound

    def advance(self) -> None:
        if self._n == 0:
            return
        self._step()

    def moebius(self) -> int:
        self._require_active()
        return self._moebius()

    def snapshot(self) -> Snapshot:
        self._require_active()
        return self._snapshot()

    def __iter__(self) -> Iterator[Snapshot]:
        if self._n and not self.in_bounds:
            self.advance()
        while self._n:
            yield self._snapshot()
            self.advance()

    # ---------- subclass hooks ----------
    def _step(self) -> None:
        raise NotImplementedError

    def _moebius(self) -> int:
        raise NotImplementedError

    def _snapshot(self) -> Snapshot:
        raise NotImplementedError

    def _require_active(self) -> None:
        if self._n == 0:
            raise CursorExhausted(f"{type(self).__name__} is past the end")


# ---------------------------------------------------------------------------
class SubsetCursor(BoundedCursor):
    """
    Sets of distinct pool primes with product < bound, in lex order of the
    index sequence. Begins at the empty set (n = 1), which is itself valid.
    """

    def __init__(self, bound: int, pool: Optional[PrimePool] = None):
        if pool is None:
            pool = build_prime_pool(_check_bound(bound))
        super().__init__(bound, pool)
        self._indices: List[int] = []
        self._primes: List[int] = []
        if self._bound <= 1:
            self._n = 0

    @property
    def indices(self) -> Tuple[int, ...]:
        self._require_active()
        return tuple(self._indices)

    @property
    def primes(self) -> Tuple[int, ...]:
        self._require_active()
        return tuple(self._primes)

    def _step(self) -> None:
        pool, bound = self._pool, self._bound
        indices, primes = self._indices, self._primes

        if not indices:
            # 空集之后是 {pool[0]}
            if len(pool) and pool[0] < bound:
                indices.append(0)
                primes.append(pool[0])
                self._n = pool[0]
            else:
                self._n = 0
            return

        nxt = pool.next_prime(indices[-1])
        if nxt is not None:
            # extend
            if self._n * nxt < bound:
                indices.append(indices[-1] + 1)
                primes.append(nxt)
                self._n *= nxt
                return
            # sibling-replace
            cand = self._n // primes[-1] * nxt
            if cand < bound:
                indices[-1] += 1
                primes[-1] = nxt
                self._n = cand
                return

        # backtrack
        while True:
            self._n //= primes.pop()
            indices.pop()
            if not indices:
                self._n = 0
                return
            # indices[-1] + 1 <= the index just popped, so it is inside the pool
            nxt = pool[indices[-1] + 1]
            cand = self._n // primes[-1] * nxt
            if cand < bound:
                indices[-1] += 1
                primes[-1] = nxt
                self._n = cand
                return

    def _moebius(self) -> int:
        return -1 if len(self._primes) & 1 else 1

    def _snapshot(self) -> PrimeSet:
        return PrimeSet(self._n, tuple(self._primes))


# ---------------------------------------------------------------------------
class FixedArityCursor(BoundedCursor):
    """
    Sets of exactly k distinct pool primes with product < bound, in lex order.

    Begins at the k smallest primes; if their product already reaches the
    bound no k-set qualifies and the cursor starts at End.
    """

    def __init__(self, bound: int, k: int, pool: Optional[PrimePool] = None):
        if not isinstance(k, int) or isinstance(k, bool):
            raise TypeError(f"arity must be int, got {type(k).__name__}")
        if k < 0:
            raise ValueError(f"arity must be non-negative, got {k}")
        if k == 0:
            raise UnsupportedZeroArity()
        bound = _check_bound(bound)
        if pool is None:
            pool = build_prime_pool(bound)
        available = pool.count_below(bound)
        if k > available:
            raise InsufficientPool(k, available, bound)
        super().__init__(bound, pool)

        self._k = k
        self._indices: List[int] = list(range(k))
        self._primes: List[int] = list(pool.primes[:k])
        # prefix[i] = primes[0] * ... * primes[i]
        self._prefix: List[int] = []
        n = 1
        for p in self._primes:
            n *= p
            self._prefix.append(n)
        self._n = n if n < self._bound else 0

    @property
    def k(self) -> int:
        return self._k

    @property
    def indices(self) -> Tuple[int, ...]:
        self._require_active()
        return tuple(self._indices)

    @property
    def primes(self) -> Tuple[int, ...]:
        self._require_active()
        return tuple(self._primes)

    def _step(self) -> None:
        pool, bound, k = self._pool, self._bound, self._k
        indices, primes, prefix = self._indices, self._primes, self._prefix

        for t in range(k - 1, -1, -1):
            j = indices[t] + 1
            if j + (k - 1 - t) >= len(pool):
                continue
            # 把 indices[t:] 重置为从 j 开始的连续位置，乘积超界即剪枝
            n = prefix[t - 1] if t else 1
            for i in range(t, k):
                p = pool[j]
                n *= p
                if n >= bound:
                    break
                indices[i] = j
                primes[i] = p
                prefix[i] = n
                j += 1
            else:
                self._n = n
                return
        self._n = 0

    def _moebius(self) -> int:
        return -1 if self._k & 1 else 1

    def _snapshot(self) -> PrimeSet:
        return PrimeSet(self._n, tuple(self._primes))


# ---------------------------------------------------------------------------
class ExponentCursor(BoundedCursor):
    """
    Exponent tuples (all >= 1) over one fixed increasing prime set, value < bound,
    in lex order of the exponents (rightmost position varies fastest).

    Begins at all exponents equal to 1. That state is reported as-is even when
    its product is >= bound (in_bounds is then False and the first advance()
    reaches End); iteration skips it.
    """

    def __init__(self, primes: Union[Iterable[int], PrimeSet, PrimePool], bound: int):
        pool = PrimePool(tuple(getattr(primes, "primes", primes)))
        super().__init__(bound, pool)
        self._set: Tuple[int, ...] = pool.primes
        self._exponents: List[int] = [1] * len(self._set)
        self._n = prod(self._set)

    @property
    def primes(self) -> Tuple[int, ...]:
        self._require_active()
        return self._set

    @property
    def exponents(self) -> Tuple[int, ...]:
        self._require_active()
        return tuple(self._exponents)

    @property
    def factorization(self) -> Tuple[PrimePower, ...]:
        self._require_active()
        return tuple(PrimePower(p, e) for p, e in zip(self._set, self._exponents))

    def _step(self) -> None:
        ps, ex, bound = self._set, self._exponents, self._bound
        i = len(ex) - 1
        while i >= 0 and self._n * ps[i] >= bound:
            self._n //= ps[i] ** (ex[i] - 1)
            ex[i] = 1
            i -= 1
        if i < 0:
            self._n = 0
            return
        self._n *= ps[i]
        ex[i] += 1

    def _moebius(self) -> int:
        if any(e > 1 for e in self._exponents):
            return 0
        return -1 if len(self._set) & 1 else 1

    def _snapshot(self) -> Factorization:
        return Factorization(self._n, tuple(PrimePower(p, e) for p, e in zip(self._set, self._exponents)))


# ---------------------------------------------------------------------------
@dataclass
class WalkingExponents:
    """Outer walk over prime sets driving an inner walk over their exponents."""
    outer: SubsetCursor
    inner: ExponentCursor


class _Done:
    __slots__ = ()

    def __repr__(self) -> str:
        return "DONE"


DONE = _Done()


class SmoothNumberCursor(BoundedCursor):
    """
    Every integer in [1, bound) whose prime factors lie in the pool, ordered by
    the lex order of its distinct-prime set, then by its exponent tuple.
    Begins at n = 1 with the empty factorization.
    """

    def __init__(self, bound: int, pool: Optional[PrimePool] = None):
        if pool is None:
            pool = build_prime_pool(_check_bound(bound))
        super().__init__(bound, pool)
        outer = SubsetCursor(self._bound, pool)
        if outer.is_end:
            self.state: Union[WalkingExponents, _Done] = DONE
            self._n = 0
        else:
            self.state = WalkingExponents(outer, ExponentCursor((), self._bound))
            self._n = 1

    @property
    def factorization(self) -> Tuple[PrimePower, ...]:
        self._require_active()
        return self.state.inner.factorization

    @property
    def primes(self) -> Tuple[int, ...]:
        self._require_active()
        return self.state.inner.primes

    @property
    def exponents(self) -> Tuple[int, ...]:
        self._require_active()
        return self.state.inner.exponents

    def _step(self) -> None:
        state = self.state
        state.inner.advance()
        if state.inner.is_end:
            # 指数耗尽：外层前进一个素数集，指数全部复位为 1
            state.outer.advance()
            if state.outer.is_end:
                self.state = DONE
                self._n = 0
                return
            state.inner = ExponentCursor(state.outer.primes, self._bound)
        self._n = state.inner.n

    def _moebius(self) -> int:
        return self.state.inner.moebius()

    def _snapshot(self) -> Factorization:
        return self.state.inner.snapshot()
