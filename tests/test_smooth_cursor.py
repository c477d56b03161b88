from math import prod

import pytest

from bounded_primes.cursors import DONE, SmoothNumberCursor, WalkingExponents
from bounded_primes.errors import CursorExhausted
from bounded_primes.model import PrimePool
from bounded_primes.sieve import build_prime_pool
from reference import brute_smooth


def test_below_10():
    facts = list(SmoothNumberCursor(10, PrimePool((2, 3, 5, 7))))
    assert [f.n for f in facts] == [1, 2, 4, 8, 6, 3, 9, 5, 7]
    assert sorted(f.n for f in facts) == list(range(1, 10))
    by_n = {f.n: f for f in facts}
    assert str(by_n[8]) == "8 = 2^3"
    assert by_n[9].exponents == (2,) and by_n[9].primes == (3,)
    assert str(by_n[1]) == "1 = (empty product)"


@pytest.mark.parametrize("bound", [2, 3, 50, 360, 1001])
def test_every_integer_once(bound):
    pool = build_prime_pool(bound)
    expected = brute_smooth(bound, pool.primes)
    cur = SmoothNumberCursor(bound, pool)
    seen = {}
    while not cur.is_end:
        n = cur.n
        assert n not in seen
        f = cur.snapshot()
        assert prod(pp.value for pp in cur.factorization) == n
        assert cur.moebius() == f.mu
        seen[n] = dict(zip(f.primes, f.exponents))
        cur.advance()
    assert seen == expected


def test_restricted_pool_is_smooth_only():
    pool = PrimePool((2, 3))
    got = sorted(f.n for f in SmoothNumberCursor(50, pool))
    assert got == [1, 2, 3, 4, 6, 8, 9, 12, 16, 18, 24, 27, 32, 36, 48]


def test_order_is_by_prime_set_then_exponents():
    pool = build_prime_pool(100)
    keys = [(f.primes, f.exponents) for f in SmoothNumberCursor(100, pool)]
    where = {p: i for i, p in enumerate(pool.primes)}
    # 外层按素数集的下标序，内层按指数元组字典序
    idx = [(tuple(where[p] for p in ps), e) for ps, e in keys]
    assert idx == sorted(idx)


def test_tagged_state_transitions():
    cur = SmoothNumberCursor(4, PrimePool((2, 3)))
    assert isinstance(cur.state, WalkingExponents)
    assert cur.state.outer.primes == ()
    ns = []
    while not cur.is_end:
        ns.append(cur.n)
        cur.advance()
    assert ns == [1, 2, 3]
    assert cur.state is DONE
    cur.advance()
    assert cur.state is DONE
    with pytest.raises(CursorExhausted):
        cur.factorization


def test_bound_one_is_done():
    cur = SmoothNumberCursor(1, PrimePool((2,)))
    assert cur.state is DONE
    assert list(cur) == []
