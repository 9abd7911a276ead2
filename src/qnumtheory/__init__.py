from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("qnumtheory")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .contfrac import contfrac2x, convergents, reconstruct, x2contfrac
from .errors import (
    ErrorKind,
    NumTheoryError,
    OutOfRange,
    PermInvalid,
    SearchExhausted,
    UserInputError,
    ZeroSize,
)
from .factor import factor_multiplicities, factors
from .gcdlcm import gcd, gcd_list, lcm, lcm_list
from .modular import BIGINT_MAX, BIGINT_MIN, egcd, modinv, modpow, mulmod
from .outcome import Outcome, attempt
from .perm import check_perm, compperm, identity, invperm
from .primality import decompose, fermat_check, isprime, randprime
from .rng import DefaultRandom, RandomSource
from .runtime import APPLY, CFG

__all__ = [
    "APPLY",
    "BIGINT_MAX",
    "BIGINT_MIN",
    "CFG",
    "DefaultRandom",
    "ErrorKind",
    "NumTheoryError",
    "Outcome",
    "OutOfRange",
    "PermInvalid",
    "RandomSource",
    "SearchExhausted",
    "UserInputError",
    "ZeroSize",
    "__version__",
    "attempt",
    "check_perm",
    "compperm",
    "contfrac2x",
    "convergents",
    "decompose",
    "egcd",
    "factor_multiplicities",
    "factors",
    "fermat_check",
    "gcd",
    "gcd_list",
    "identity",
    "invperm",
    "isprime",
    "lcm",
    "lcm_list",
    "modinv",
    "modpow",
    "mulmod",
    "randprime",
    "reconstruct",
    "x2contfrac",
]
