# -----------------------------------------------------------------------------
#  Probabilistic primality (Fermat + Miller-Rabin) and random primes
# -----------------------------------------------------------------------------

from __future__ import annotations

from qnumtheory.errors import OutOfRange, SearchExhausted, _where
from qnumtheory.modular import modpow, mulmod
from qnumtheory.rng import RandomSource, resolve
from qnumtheory.runtime import cfg_int, trace

DEFAULT_ROUNDS = 80
DEFAULT_ATTEMPTS = 1000


def decompose(n: int) -> tuple[int, int]:
    """
    Write n - 1 = 2^u * r with r odd; returns (u, r).
    u is the number of trailing zero bits of n - 1.
    """
    if n < 3:
        raise OutOfRange(_where("decompose"))
    m = n - 1
    u = (m & -m).bit_length() - 1
    return u, m >> u


def fermat_check(n: int, rng: RandomSource | None = None) -> bool:
    """One Fermat round with a random base x in [2, n-1]: x^(n-1) = 1 (mod n)."""
    if n < 3:
        raise OutOfRange(_where("fermat_check"))
    x = resolve(rng).rand(2, n - 1)
    return modpow(x, n - 1, n) == 1


def _witness_passes(a: int, n: int, u: int, r: int) -> bool:
    z = modpow(a, r, n)
    if z == 1 or z == n - 1:
        return True

    # square up to u - 1 more times
    for _ in range(u - 1):
        z = mulmod(z, z, n)
        if z == 1:
            return False  # nontrivial square root of 1
        if z == n - 1:
            return True

    return False


def isprime(n: int, k: int | None = None, rng: RandomSource | None = None) -> bool:
    """
    Primality test: a Fermat pre-check followed by k Miller-Rabin rounds.

    True means n is prime with false-positive probability at most 2^-k;
    False is always correct. The sign of n is ignored.
    """
    n = abs(n)

    if n < 2:
        raise OutOfRange(_where("isprime"))

    if k is None:
        k = cfg_int("PRIMALITY.ROUNDS", DEFAULT_ROUNDS)
    if k < 0:
        raise OutOfRange(_where("isprime"), f"number of rounds must be non-negative, got {k}")

    if n == 2 or n == 3:
        return True

    src = resolve(rng)

    if not fermat_check(n, src):
        trace("composite", f"{n}: Fermat pre-check failed")
        return False

    u, r = decompose(n)
    trace("isprime", f"{n} - 1 = 2^{u} * {r}")

    for i in range(k):
        a = src.rand(2, n - 2)
        if not _witness_passes(a, n, u, r):
            trace("composite", f"{n}: witness {a} (round {i + 1}/{k})")
            return False

    return True


def randprime(a: int, b: int, N: int | None = None, rng: RandomSource | None = None) -> int:
    """
    Random prime drawn uniformly from [a, b], trying at most N candidates.

    Each candidate gets a cheap Fermat test before the full isprime().
    Raises SearchExhausted when no candidate is accepted.
    """
    if a > b:
        raise OutOfRange(_where("randprime"))

    if N is None:
        N = cfg_int("RANDPRIME.ATTEMPTS", DEFAULT_ATTEMPTS)
    if N < 0:
        raise OutOfRange(_where("randprime"), f"candidate budget must be non-negative, got {N}")
    src = resolve(rng)

    for i in range(N):
        candidate = src.rand(a, b)
        mag = abs(candidate)
        if mag < 2:
            continue
        if mag == 2:
            trace("accept", f"{candidate} after {i + 1} candidate(s)")
            return candidate

        if not fermat_check(mag, src):
            trace("reject", f"{candidate}: Fermat")
            continue

        if isprime(mag, rng=src):
            trace("accept", f"{candidate} after {i + 1} candidate(s)")
            return candidate
        trace("reject", f"{candidate}: Miller-Rabin")

    raise SearchExhausted(_where("randprime"), f"Prime not found in [{a}, {b}] after {N} candidates!")
