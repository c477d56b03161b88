import pytest

from bounded_primes.errors import InvalidPool
from bounded_primes.model import PrimePool
from bounded_primes.sieve import build_prime_pool, pool_from_primes


def test_build_pool_has_sentinel():
    pool = build_prime_pool(10)
    assert pool.primes == (2, 3, 5, 7, 11)
    assert pool.covers(10)
    assert pool.count_below(10) == 4


def test_build_pool_limit_is_prime():
    # 11 itself is the first prime >= 11
    assert build_prime_pool(11).primes == (2, 3, 5, 7, 11)
    assert build_prime_pool(12).primes == (2, 3, 5, 7, 11, 13)


def test_build_pool_tiny_limits():
    for limit in (-3, 0, 1, 2):
        assert build_prime_pool(limit).primes == (2,)
    assert build_prime_pool(3).primes == (2, 3)


def test_next_prime_past_end_is_none():
    pool = PrimePool((2, 3, 5))
    assert pool.next_prime(0) == 3
    assert pool.next_prime(2) is None


def test_pool_rejects_unsorted_and_duplicates():
    with pytest.raises(InvalidPool):
        PrimePool((3, 2))
    with pytest.raises(InvalidPool):
        PrimePool((2, 2, 3))
    with pytest.raises(InvalidPool):
        PrimePool((1, 2))


def test_pool_from_primes_checks_primality():
    assert pool_from_primes([2, 3, 5], check_primes=True).primes == (2, 3, 5)
    with pytest.raises(InvalidPool):
        pool_from_primes([2, 3, 9], check_primes=True)


def test_restricted_pool():
    pool = build_prime_pool(30)
    assert pool.restricted(7).primes == (2, 3, 5, 7)
    assert pool.restricted(1).primes == ()
    assert pool.primes_below(12) == (2, 3, 5, 7, 11)
