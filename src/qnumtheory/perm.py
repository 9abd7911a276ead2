# src/qnumtheory/perm.py
from __future__ import annotations

from collections.abc import Sequence

from qnumtheory.errors import PermInvalid, _where


def check_perm(perm: Sequence[int]) -> bool:
    """True iff perm is a bijection of {0, ..., len(perm)-1}."""
    k = len(perm)
    seen = bytearray(k)
    for v in perm:
        if isinstance(v, bool) or not isinstance(v, int):
            return False
        if v < 0 or v >= k or seen[v]:
            return False
        seen[v] = 1
    return True


def invperm(perm: Sequence[int]) -> list[int]:
    """Inverse permutation: result[perm[i]] = i."""
    if not check_perm(perm):
        raise PermInvalid(_where("invperm"))

    result = [0] * len(perm)
    for i, p in enumerate(perm):
        result[p] = i
    return result


def compperm(perm: Sequence[int], sigma: Sequence[int]) -> list[int]:
    """Composition perm ∘ sigma, i.e. result[i] = perm[sigma[i]] (sigma applied first)."""
    if not check_perm(perm):
        raise PermInvalid(_where("compperm"))
    if not check_perm(sigma):
        raise PermInvalid(_where("compperm"))
    if len(perm) != len(sigma):
        raise PermInvalid(_where("compperm"))

    return [perm[s] for s in sigma]


def identity(k: int) -> list[int]:
    return list(range(k))
