from math import prod

import pytest

from bounded_primes.cursors import ExponentCursor, SubsetCursor
from bounded_primes.errors import InvalidPool
from bounded_primes.model import PrimePool
from bounded_primes.sieve import build_prime_pool


def walk(cursor):
    out = []
    while not cursor.is_end:
        out.append((cursor.exponents, cursor.n, cursor.moebius()))
        cursor.advance()
    return out


def test_two_three_below_20():
    rows = walk(ExponentCursor((2, 3), 20))
    # 最右位置变化最快：(1,1) < (1,2) < (2,1)
    assert rows == [((1, 1), 6, 1), ((1, 2), 18, 0), ((2, 1), 12, 0)]


def test_single_prime_powers():
    assert [f.n for f in ExponentCursor((2,), 100)] == [2, 4, 8, 16, 32, 64]
    assert [f.exponents for f in ExponentCursor((3,), 10)] == [(1,), (2,)]


def test_begin_out_of_bounds():
    cur = ExponentCursor((5, 7), 30)
    assert cur.n == 35
    assert not cur.in_bounds
    assert not cur.is_end
    cur.advance()
    assert cur.is_end
    assert list(ExponentCursor((5, 7), 30)) == []


def test_empty_prime_set():
    cur = ExponentCursor((), 10)
    assert cur.n == 1
    assert cur.factorization == ()
    assert cur.moebius() == 1
    cur.advance()
    assert cur.is_end


def test_lex_order_and_values():
    primes = (2, 3, 5)
    bound = 2000
    rows = walk(ExponentCursor(primes, bound))
    exps = [e for e, _, _ in rows]
    assert exps == sorted(exps)
    assert len(set(exps)) == len(exps)
    for e, n, mu in rows:
        assert n == prod(p ** k for p, k in zip(primes, e)) < bound
        assert mu == (0 if max(e) > 1 else -1)
    # 完整性：与暴力枚举比较
    expected = {
        (a, b, c)
        for a in range(1, 11) for b in range(1, 8) for c in range(1, 5)
        if 2 ** a * 3 ** b * 5 ** c < bound
    }
    assert set(exps) == expected


def test_accepts_prime_set_snapshot():
    sub = SubsetCursor(100, PrimePool((2, 3, 5, 7)))
    sub.advance()
    sub.advance()
    assert sub.primes == (2, 3)
    assert [f.n for f in ExponentCursor(sub.snapshot(), 100)] == [6, 18, 54, 12, 36, 24, 72, 48, 96]


def test_rejects_unsorted_primes():
    with pytest.raises(InvalidPool):
        ExponentCursor((3, 2), 100)


def test_large_prime_set_is_out_of_bounds_not_an_error():
    primes = tuple(build_prime_pool(60).primes_below(60))
    cur = ExponentCursor(primes, 100)
    assert cur.n == prod(primes)
    assert not cur.in_bounds
    cur.advance()
    assert cur.is_end
