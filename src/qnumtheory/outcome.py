# src/qnumtheory/outcome.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from qnumtheory.errors import ErrorKind, NumTheoryError


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    Tagged result of a kernel call.

      ok=True  -> value holds the result, kind/message are None
      ok=False -> value is None, kind/message describe the failure
    """
    ok: bool
    value: Any = None
    kind: ErrorKind | None = None
    message: str | None = None
    _error: NumTheoryError | None = None

    def unwrap(self) -> Any:
        if self.ok:
            return self.value
        raise self._error if self._error is not None else NumTheoryError("qnumtheory.Outcome.unwrap()", self.message)


def attempt(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Outcome:
    """Run fn(*args, **kwargs); kernel failures become a failed Outcome."""
    try:
        value = fn(*args, **kwargs)
    except NumTheoryError as e:
        return Outcome(ok=False, kind=e.kind, message=str(e), _error=e)
    return Outcome(ok=True, value=value)
