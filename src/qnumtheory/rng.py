"""Uniform random-integer source used by the primality tester and randprime.

Every sampling function in the kernel takes an optional `rng` argument.
When it is None the context-local current source is used; set_seed(n)
makes that source reproducible, use(source) swaps it for a block.
"""

from __future__ import annotations

import random as _random
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Protocol, runtime_checkable

from qnumtheory.errors import OutOfRange, _where


@runtime_checkable
class RandomSource(Protocol):
    def rand(self, lo: int, hi: int) -> int:
        """Uniform integer on the closed interval [lo, hi]."""
        ...


class DefaultRandom:
    """Seeded PRNG wrapper. When seed is None, uses the OS entropy pool."""

    def __init__(self, seed: int | None = None):
        self._seed = seed
        if seed is not None:
            self._rng = _random.Random(seed)
        else:
            self._rng = _random.SystemRandom()

    @property
    def seed(self) -> int | None:
        return self._seed

    def rand(self, lo: int, hi: int) -> int:
        if lo > hi:
            raise OutOfRange(_where("rand"))
        return self._rng.randint(lo, hi)

    def __repr__(self) -> str:
        return f"DefaultRandom(seed={self._seed!r})"


_current_rng: ContextVar[RandomSource | None] = ContextVar("qnumtheory_rng", default=None)


def current() -> RandomSource:
    src = _current_rng.get()
    if src is None:
        src = DefaultRandom()
        _current_rng.set(src)
    return src


def set_seed(seed: int | None) -> None:
    """Replace the current source. None = OS randomness."""
    _current_rng.set(DefaultRandom(seed))


@contextmanager
def use(source: RandomSource) -> Iterator[RandomSource]:
    token = _current_rng.set(source)
    try:
        yield source
    finally:
        _current_rng.reset(token)


def resolve(rng: RandomSource | None) -> RandomSource:
    return current() if rng is None else rng


def reset() -> None:
    """Forget the current source; the next current() draws from the OS again."""
    _current_rng.set(None)
