# src/qnumtheory/fmt.py
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from fractions import Fraction

from colorama import Fore, Style

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str) -> str:
    return ANSI_RE.sub("", s)


def format_factorization(fac: Mapping[int, int]) -> str:
    """
    Turn {p: e, ...} into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in sorted(fac.items()):
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"


def format_contfrac(cf: Sequence[int]) -> str:
    """[a0; a1, a2, ...] notation."""
    if not cf:
        return "[]"
    head, tail = cf[0], cf[1:]
    if not tail:
        return f"[{head}]"
    return f"[{head}; " + ", ".join(str(t) for t in tail) + "]"


def format_fraction(q: Fraction) -> str:
    return str(q.numerator) if q.denominator == 1 else f"{q.numerator}/{q.denominator}"


def format_bezout(m: int, n: int, a: int, b: int, g: int) -> str:
    """Render the identity a·m + b·n = g with parenthesized negatives."""
    def par(x: int) -> str:
        return f"({x})" if x < 0 else str(x)
    return f"{par(a)}·{par(m)} + {par(b)}·{par(n)} = {g}"


def format_perm(perm: Sequence[int]) -> str:
    return "[" + " ".join(str(p) for p in perm) + "]"


def verdict(ok: bool, yes: str = "yes", no: str = "no") -> str:
    color = Fore.GREEN if ok else Fore.RED
    return f"{color}{yes if ok else no}{Style.RESET_ALL}"


def label(text: str) -> str:
    return f"{Fore.CYAN}{text}{Style.RESET_ALL}"
