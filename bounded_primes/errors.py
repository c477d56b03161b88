# bounded_primes/errors.py
"""Exception kinds raised when a cursor or pool cannot be built."""

__all__ = ["InvalidPool", "InsufficientPool", "UnsupportedZeroArity", "CursorExhausted"]


class InvalidPool(ValueError):
    """The prime pool is not a strictly increasing sequence of primes."""


class InsufficientPool(ValueError):
    """Fewer usable primes below the bound than the requested arity."""

    def __init__(self, arity: int, available: int, bound: int):
        self.arity = arity
        self.available = available
        self.bound = bound
        super().__init__(
            f"arity {arity} requested but only {available} pool primes lie below {bound}"
        )


class UnsupportedZeroArity(ValueError):
    """Arity 0 is not modelled as a one-element stream."""

    def __init__(self):
        super().__init__("empty tuples are not enumerated; the only one is 1 = (empty product)")


class CursorExhausted(LookupError):
    """The cursor is at its End state and has no current element."""
