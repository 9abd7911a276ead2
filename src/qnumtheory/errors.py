# -----------------------------------------------------------------------------
#  Error kinds raised by the number-theory kernel
# -----------------------------------------------------------------------------

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    OUT_OF_RANGE = "Argument out of range!"
    ZERO_SIZE = "Object has zero size!"
    PERM_INVALID = "Invalid permutation!"
    SEARCH_EXHAUSTED = "Search budget exhausted!"


class UserInputError(Exception):
    pass


class NumTheoryError(Exception):
    """
    Base class of all kernel failures.

    `where` names the public function that rejected its arguments, e.g.
    "qnumtheory.gcd()". `detail` replaces the default message of the kind.
    """
    kind: ErrorKind = ErrorKind.OUT_OF_RANGE

    def __init__(self, where: str, detail: str | None = None):
        self.where = where
        self.detail = detail
        super().__init__(f"In {where}: {detail or self.kind.value}")


class OutOfRange(NumTheoryError, ValueError):
    kind = ErrorKind.OUT_OF_RANGE


class ZeroSize(NumTheoryError, ValueError):
    kind = ErrorKind.ZERO_SIZE


class PermInvalid(NumTheoryError, ValueError):
    kind = ErrorKind.PERM_INVALID


class SearchExhausted(NumTheoryError, RuntimeError):
    kind = ErrorKind.SEARCH_EXHAUSTED


def _where(fn: str) -> str:
    return f"qnumtheory.{fn}()"
