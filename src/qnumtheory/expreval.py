# src/qnumtheory/expreval.py
"""
Parsing of command-line numbers.

Integers accept plain literals (42, -7, 1_000_003, 0xFF, 0b1010, grouped
digits like 1 000 003) and safe integer expressions (2**61-1, 10**18, 1e18,
(1<<40)+15). Every integer must fit in the signed 64-bit range.
Reals accept decimals, scientific notation and fractions such as 5/16.
"""

from __future__ import annotations

import ast
import operator as op
import re
from fractions import Fraction

from qnumtheory.errors import UserInputError
from qnumtheory.modular import BIGINT_MAX, BIGINT_MIN

# ---- simple number parsing helpers ----
_THIN_SPACES = ("\u2009", "\u202F", "\u00A0")  # thin, narrow no-break, no-break
_SEP_CLASS = r"[ ,._\u00A0\u2009\u202F]"      # spaces/commas/dots/underscores & NBSP variants
_GROUPED_RE = re.compile(rf"^[+-]?\d{{1,3}}(?:{_SEP_CLASS}\d{{3}})+$")

# ---- allowed operators (safe subset) ----
_ALLOWED_BINOPS = {
    ast.Add:      op.add,
    ast.Sub:      op.sub,
    ast.Mult:     op.mul,
    ast.FloorDiv: op.floordiv,
    ast.Mod:      op.mod,
    ast.Pow:      op.pow,
    ast.LShift:   op.lshift,
    ast.RShift:   op.rshift,
    ast.BitAnd:   op.and_,
    ast.BitXor:   op.xor,
    ast.BitOr:    op.or_,
}
_ALLOWED_UNARYOPS = {
    ast.UAdd: op.pos,
    ast.USub: op.neg,
}

_MAX_NODES = 256  # sanity guard
# Intermediate values may exceed 64 bits (e.g. 2**64 - 1 >> 1); cap them well above.
_MAX_BITS = 4096

_SCI_NOTATION_TOKEN = re.compile(
    r"""
    (?<![\w.])          # not immediately after a word char or dot
    ([+\-]?)            # optional sign
    (\d+)               # mantissa (digits)
    [eE]
    ([+\-]?\d+)         # exponent (optional sign + digits)
    (?![\w.])           # not immediately before a word char or dot
    """,
    re.VERBOSE,
)


class _IntExprError(Exception):
    pass


def _rewrite_scientific_notation(expr: str) -> str:
    """
    Rewrite base-10 scientific notation tokens into exact integer expressions:

        1e3   -> 10**3
        2e5   -> 2*10**5
        -3e4  -> (-3)*10**4

    Negative exponents are rejected as "not integer".
    """

    def repl(m: re.Match) -> str:
        sign, mant, exp_str = m.group(1), m.group(2), m.group(3)
        exp = int(exp_str)
        if exp < 0:
            raise _IntExprError("scientific notation with negative exponent is not an integer")

        if int(mant) == 0:
            return "0"

        full_mant = (sign or "") + mant
        if full_mant == "1":
            return f"10**({exp})"
        return f"({full_mant})*10**({exp})"

    return _SCI_NOTATION_TOKEN.sub(repl, expr)


def _check_bits(v: int) -> int:
    if v.bit_length() > _MAX_BITS:
        raise _IntExprError("intermediate value too large")
    return v


def _eval_int_expr(expr: str) -> int:
    """
    Evaluate a *safe* integer expression.

    Allowed: integers (incl. underscores), parentheses,
             + - * // % **, << >>, & ^ |, unary +/-.
    Disallowed: names, calls, attributes, subscripts, floats.
    """
    expr = _rewrite_scientific_notation(expr)

    try:
        tree = ast.parse(expr, mode="eval")
    except SyntaxError as e:
        raise _IntExprError("invalid integer expression") from e

    if sum(1 for _ in ast.walk(tree)) > _MAX_NODES:
        raise _IntExprError("expression too large")

    def _eval(node) -> int:
        if isinstance(node, ast.Expression):
            return _eval(node.body)

        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, int):
                raise _IntExprError("non-integer values are not allowed in integer expressions")
            return _check_bits(node.value)

        if isinstance(node, ast.UnaryOp) and type(node.op) in _ALLOWED_UNARYOPS:
            return _ALLOWED_UNARYOPS[type(node.op)](_eval(node.operand))

        if isinstance(node, ast.BinOp) and type(node.op) in _ALLOWED_BINOPS:
            left = _eval(node.left)
            right = _eval(node.right)
            op_type = type(node.op)

            if op_type is ast.Pow:
                if right < 0:
                    raise _IntExprError("negative exponents are not allowed")
                # |left| >= 2 gives at least `right` bits
                if abs(left) > 1 and right > _MAX_BITS:
                    raise _IntExprError("intermediate value too large")
            elif op_type is ast.LShift and right > _MAX_BITS:
                raise _IntExprError("intermediate value too large")
            elif op_type in (ast.FloorDiv, ast.Mod) and right == 0:
                raise _IntExprError("division by zero")

            try:
                return _check_bits(_ALLOWED_BINOPS[op_type](left, right))
            except ValueError as e:  # negative shift count
                raise _IntExprError(str(e)) from None

        raise _IntExprError(f"unsupported syntax: {type(node).__name__}")

    return _eval(tree)


def _parse_int_literal(text: str) -> int | None:
    """Accepts: 42  -7  1_000_000  0xFF  0b1010  123.456.789  123 456 789
       Rejects: 3.14  1,23  12.34.56  0xG1"""

    if text is None:
        return None

    s = text.strip()

    if not s:
        return None

    for ch in _THIN_SPACES:
        s = s.replace(ch, " ")

    sign = ""
    if s[0] in "+-":
        sign, s = s[0], s[1:]

    if s.lower().startswith(("0x", "0b", "0o")):
        try:
            return int(sign + s.replace("_", ""), 0)
        except ValueError:
            return None

    s = sign + s

    if re.fullmatch(r"[+-]?\d[\d_]*", s):
        try:
            return int(s.replace("_", ""))
        except ValueError:
            return None

    if _GROUPED_RE.match(s):
        compact = re.sub(_SEP_CLASS, "", s)
        try:
            return int(compact)
        except ValueError:
            return None

    return None


def parse_int(s: str) -> int | None:
    """Literal first (keeps grouped digits/bases), then the expression evaluator."""
    n = _parse_int_literal(s)
    if n is not None:
        return n
    try:
        return _eval_int_expr(s.strip())
    except _IntExprError:
        return None


def parse_bigint(s: str, name: str = "argument") -> int:
    """parse_int() restricted to the signed 64-bit range; raises UserInputError."""
    n = parse_int(s)
    if n is None:
        raise UserInputError(f"Invalid input: {name} {s!r} is not an integer or integer expression.")
    if n < BIGINT_MIN or n > BIGINT_MAX:
        raise UserInputError(f"{name} {s!r} does not fit in a signed 64-bit integer.")
    return n


def parse_index(s: str, name: str = "index") -> int:
    n = parse_bigint(s, name)
    if n < 0:
        raise UserInputError(f"{name} must be non-negative, got {n}.")
    return n


def parse_real(s: str, name: str = "value") -> float:
    """Decimal, scientific or p/q fraction notation."""
    try:
        return float(Fraction(s.strip().replace("_", "")))
    except (ValueError, ZeroDivisionError, OverflowError):
        raise UserInputError(f"Invalid input: {name} {s!r} is not a real number.") from None
