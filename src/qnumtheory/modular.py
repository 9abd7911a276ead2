# -----------------------------------------------------------------------------
#  Modular arithmetic: mulmod, modpow, egcd, modinv
# -----------------------------------------------------------------------------

from __future__ import annotations

from qnumtheory.errors import OutOfRange, _where

BIGINT_BITS = 64
BIGINT_MIN = -(1 << (BIGINT_BITS - 1))
BIGINT_MAX = (1 << (BIGINT_BITS - 1)) - 1

# Below this modulus the product of two reduced operands fits in 62 bits.
_DIRECT_LIMIT = 1 << 31


def mulmod(a: int, b: int, m: int) -> int:
    """
    (a * b) mod m without forming a*b.

    Walks the bits of b, doubling a and accumulating into r. Both r and a
    stay in [0, m), and every sum is reduced by one conditional subtraction,
    so no intermediate exceeds 2*m.
    """
    if m < 1:
        raise OutOfRange(_where("mulmod"))

    a %= m
    b %= m

    if m <= _DIRECT_LIMIT:
        return (a * b) % m

    r = 0
    while b > 0:
        if b & 1:  # last bit is one
            r = r + a if (m - r) > a else r + a - m  # r = (r + a) % m
        b >>= 1
        if b:
            a = a + a if (m - a) > a else a + a - m  # a = (a + a) % m
    return r


def modpow(a: int, n: int, p: int) -> int:
    """
    a^n mod p by square-and-multiply.

    a and n must be non-negative, p strictly positive; 0^0 is rejected.
    """
    if a < 0 or n < 0 or p < 1:
        raise OutOfRange(_where("modpow"))

    if a == 0 and n == 0:
        raise OutOfRange(_where("modpow"))

    if a == 0 and n > 0:
        return 0

    if p == 1:
        return 0

    result = 1
    a %= p

    while n > 0:
        if n & 1:
            result = mulmod(result, a, p)  # MULTIPLY
        a = mulmod(a, a, p)  # SQUARE
        n >>= 1

    return result


def _tdiv(m: int, n: int) -> int:
    """Integer quotient truncated toward zero."""
    q = abs(m) // abs(n)
    return q if (m < 0) == (n < 0) else -q


def egcd(m: int, n: int) -> tuple[int, int, int]:
    """
    Extended Euclid: (a, b, g) with a*m + b*n = g = gcd(m, n) >= 0.
    """
    if m == 0 and n == 0:
        raise OutOfRange(_where("egcd"))

    a1, a2 = 0, 1
    b1, b2 = 1, 0

    while n:
        q = _tdiv(m, n)
        r = m - q * n
        a, b = a2 - q * a1, b2 - q * b1
        m, n = n, r
        a2, a1 = a1, a
        b2, b1 = b1, b

    a, b, c = a2, b2, m

    # correct the signs
    if c < 0:
        a, b, c = -a, -b, -c

    return a, b, c


def modinv(a: int, p: int) -> int:
    """Inverse of a modulo p, in [0, p). a and p must be positive and co-prime."""
    if a <= 0 or p <= 0:
        raise OutOfRange(_where("modinv"))

    _, y, gcd_ap = egcd(p, a)

    if gcd_ap != 1:
        raise OutOfRange(_where("modinv"), f"{a} is not invertible modulo {p}")

    return y % p
