# -----------------------------------------------------------------------------
#  Simple continued fractions and rational reconstruction
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from collections.abc import Sequence
from fractions import Fraction

from qnumtheory.errors import OutOfRange, ZeroSize, _where
from qnumtheory.runtime import cfg_float, cfg_int

DEFAULT_CUT = 1e5
DEFAULT_TERMS = 64


def _recip(v: float) -> float:
    # IEEE semantics: 1/±0 is ±inf, 1/±inf is ±0
    if v == 0:
        return math.copysign(math.inf, v)
    return 1.0 / v


def x2contfrac(x: float, n: int, cut: float | None = None) -> list[int]:
    """
    Simple continued fraction expansion of x, at most n terms.

    Positive values step with floor(), negative ones with ceil(). The
    expansion stops early (shorter list) as soon as the next value is not
    finite or exceeds `cut` in magnitude; past that point the terms only
    describe floating-point noise.
    """
    if n <= 0:
        raise OutOfRange(_where("x2contfrac"))
    if not math.isfinite(x):
        raise OutOfRange(_where("x2contfrac"), "x must be a finite real number")
    if cut is None:
        cut = cfg_float("CONTFRAC.CUT", DEFAULT_CUT)

    result: list[int] = []

    for _ in range(n):
        if x > 0:
            a = math.floor(x)
        else:
            a = math.ceil(x)
        result.append(int(a))
        x = _recip(x - a)
        if not math.isfinite(x) or abs(x) > cut:
            return result

    return result


def contfrac2x(cf: Sequence[int], n: int | None = None) -> float:
    """
    Real value of the first n terms of a simple continued fraction
    (all terms when n is None or larger than len(cf)).

    Folds from the innermost term outward:
        cf[0] + 1/(cf[1] + 1/(cf[2] + ... + 1/cf[n-1]))
    """
    if len(cf) == 0:
        raise ZeroSize(_where("contfrac2x"))
    if n is None or n > len(cf):
        n = len(cf)
    if n <= 0:
        raise OutOfRange(_where("contfrac2x"))

    if n == 1:  # degenerate case, integer
        return float(cf[0])

    tmp = _recip(float(cf[n - 1]))
    for i in range(n - 2, 0, -1):
        tmp = _recip(tmp + cf[i])

    return cf[0] + tmp


def convergents(cf: Sequence[int]) -> list[Fraction]:
    """
    Successive convergents h_i/k_i of a continued fraction:
        h_i = a_i*h_{i-1} + h_{i-2},  k_i = a_i*k_{i-1} + k_{i-2}
    """
    if len(cf) == 0:
        raise ZeroSize(_where("convergents"))

    result: list[Fraction] = []
    h_prev, h_curr = 0, 1
    k_prev, k_curr = 1, 0

    for term in cf:
        h_next = term * h_curr + h_prev
        k_next = term * k_curr + k_prev
        if k_next == 0:
            raise OutOfRange(_where("convergents"), f"convergent {len(result)} has a zero denominator")
        result.append(Fraction(h_next, k_next))
        h_prev, h_curr = h_curr, h_next
        k_prev, k_curr = k_curr, k_next

    return result


def reconstruct(x: float, max_denominator: int, n: int | None = None, cut: float | None = None) -> Fraction:
    """
    Rational reconstruction of a measured value: the last convergent of
    x2contfrac(x) whose denominator does not exceed max_denominator.

    With x = y / 2**t the phase read from a t-qubit register, the returned
    denominator is the candidate order r of an order-finding run.
    """
    if max_denominator < 1:
        raise OutOfRange(_where("reconstruct"))
    if n is None:
        n = cfg_int("CONTFRAC.TERMS", DEFAULT_TERMS)

    best: Fraction | None = None
    for conv in convergents(x2contfrac(x, n, cut)):
        if conv.denominator > max_denominator:
            break
        best = conv

    # the first convergent is an integer, so best is always set
    return best
