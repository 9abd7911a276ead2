# -----------------------------------------------------------------------------
#  Prime factor decomposition by trial division
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections import Counter

from qnumtheory.errors import OutOfRange, _where


def factors(n: int) -> list[int]:
    """
    Prime factors of n in ascending order, with multiplicity.

    The sign of n is ignored; 0, 1 and -1 have no factorization.
    Runs in O(sqrt(n)): once d*d exceeds the remaining cofactor, the
    cofactor itself is prime.
    """
    n = abs(n)

    if n in (0, 1):
        raise OutOfRange(_where("factors"))

    result: list[int] = []
    d = 2

    while n > 1:
        while n % d == 0:
            result.append(d)
            n //= d
        d += 1
        if d * d > n:
            if n > 1:
                result.append(n)
            break

    return result


def factor_multiplicities(n: int) -> dict[int, int]:
    """{p: e} form of factors(n), ordered by p."""
    return dict(sorted(Counter(factors(n)).items()))
