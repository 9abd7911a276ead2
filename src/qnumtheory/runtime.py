# runtime.py
from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import asdict as _asdict
from dataclasses import dataclass, field
from typing import Any

from colorama import Fore, Style

_TAG_COLORS = {
    "ok": Fore.GREEN,
    "accept": Fore.GREEN,
    "reject": Fore.YELLOW,
    "composite": Fore.YELLOW,
    "error": Fore.RED,
}


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # enables trace() lines on stderr

    def apply(self, settings: Any) -> None:
        self.profile_name = (
            getattr(settings, "name", None)
            or getattr(settings, "_source", None)
            or "default"
        )

        if hasattr(settings, "as_dict") and callable(settings.as_dict):
            cfg = settings.as_dict()
        elif isinstance(settings, dict):
            cfg = settings
        else:
            # grab UPPERCASE attributes from simple objects / modules
            cfg = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}

        try:
            self.settings = dict(cfg)
        except (TypeError, ValueError):
            self.settings = _asdict(cfg) if hasattr(cfg, "__dataclass_fields__") else {}

        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'PRIMALITY.ROUNDS'."""
        if not key:
            return default
        cur = self.settings
        if isinstance(key, str) and "." in key:
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    return default
            return cur
        return cur.get(key, default)


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("qnumtheory_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> None:
    """Drop the context-local runtime; the next current() starts from defaults."""
    _current_runtime.set(None)


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def cfg_int(key: str, default: int) -> int:
    """CFG() for integer settings; a malformed profile value falls back to default."""
    val = CFG(key, default)
    if isinstance(val, bool) or not isinstance(val, int | float):
        return default
    return int(val)


def cfg_float(key: str, default: float) -> float:
    val = CFG(key, default)
    if isinstance(val, bool) or not isinstance(val, int | float):
        return default
    return float(val)


# ---- Debug trace -------------------------------------------------------------

def trace(tag: str, message: str) -> None:
    """Emit a single '[tag] message' line to STDERR when debug is on."""
    if not current().debug:
        return
    color = _TAG_COLORS.get(tag, Fore.CYAN)
    sys.stderr.write(f"{color}[{tag}]{Style.RESET_ALL} {message}\n")
    sys.stderr.flush()
