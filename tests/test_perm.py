# tests/test_perm.py
from __future__ import annotations

import random

import pytest

from qnumtheory.errors import PermInvalid
from qnumtheory.perm import check_perm, compperm, identity, invperm


@pytest.mark.parametrize("perm", [[], [0], [1, 0], [2, 0, 1], [3, 1, 0, 2]])
def test_check_perm_accepts_bijections(perm):
    assert check_perm(perm)


@pytest.mark.parametrize(
    "perm",
    [[1], [0, 0], [1, 2], [-1, 0], [0, 2, 2], [0, 1.0], [True, 0]],
    ids=["out-of-range", "duplicate", "shifted", "negative", "dup-high", "float", "bool"],
)
def test_check_perm_rejects(perm):
    assert not check_perm(perm)


def test_invperm():
    assert invperm([2, 0, 1]) == [1, 2, 0]
    assert invperm([0, 1, 2]) == [0, 1, 2]
    assert invperm([]) == []


def test_compperm_applies_sigma_first():
    perm = [1, 2, 0]
    sigma = [0, 2, 1]
    # result[i] = perm[sigma[i]]
    assert compperm(perm, sigma) == [1, 0, 2]


def test_inverse_composes_to_identity():
    r = random.Random(7)
    for k in range(1, 40):
        p = list(range(k))
        r.shuffle(p)
        inv = invperm(p)
        assert compperm(p, inv) == identity(k)
        assert compperm(inv, p) == identity(k)


def test_invalid_permutations_raise():
    with pytest.raises(PermInvalid):
        invperm([0, 0])
    with pytest.raises(PermInvalid):
        compperm([0, 0], [0, 1])
    with pytest.raises(PermInvalid):
        compperm([0, 1], [1, 1])
    with pytest.raises(PermInvalid):
        compperm([0, 1], [0, 1, 2])
