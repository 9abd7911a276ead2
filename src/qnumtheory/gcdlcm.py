# -----------------------------------------------------------------------------
#  Greatest common divisor / least common multiple
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Sequence

from qnumtheory.errors import OutOfRange, ZeroSize, _where


def gcd(m: int, n: int) -> int:
    """
    Greatest common divisor of two integers (Euclid).
    Convention gcd(0, n) = |n|; gcd(0, 0) is rejected.
    """
    if m == 0 and n == 0:
        raise OutOfRange(_where("gcd"))

    if m == 0 or n == 0:
        return max(abs(m), abs(n))

    result = 1
    while n:
        result = n
        n = m % result
        m = result

    return abs(result)


def gcd_list(ns: Sequence[int]) -> int:
    """
    Greatest common divisor of a list of integers, folded left to right.
    The result is always non-negative. This includes a singleton: gcd_list([-6])
    is 6, not -6, although the fold starts from ns[0] as given.
    """
    if len(ns) == 0:
        raise ZeroSize(_where("gcd"))

    result = ns[0]  # convention: gcd({n}) = n
    for x in ns[1:]:
        result = gcd(result, x)

    return abs(result)


def lcm(m: int, n: int) -> int:
    """Least common multiple |m*n| / gcd(m, n)."""
    if m == 0 and n == 0:
        raise OutOfRange(_where("lcm"))

    return abs(m * n) // gcd(m, n)


def lcm_list(ns: Sequence[int]) -> int:
    """
    Least common multiple of a list of integers.

    The singleton case returns ns[0] as given (sign included, zero allowed),
    unlike the pairwise form which always returns a non-negative value.
    """
    if len(ns) == 0:
        raise ZeroSize(_where("lcm"))

    if len(ns) == 1:  # convention: lcm({n}) = n
        return ns[0]

    if any(x == 0 for x in ns):
        raise OutOfRange(_where("lcm"))

    result = ns[0]
    for x in ns[1:]:
        result = lcm(result, x)

    return abs(result)
