# src/qnumtheory/cli.py

"""
qnumtheory - number-theory kernel for order-finding / factoring simulations

Command-line front end to the kernel: gcd/lcm, factorization, modular
arithmetic, primality, random primes, continued fractions and permutations.

usage: see qnumtheory -h
"""

from __future__ import annotations

import argparse
import faulthandler
import sys
import textwrap
import traceback
from collections.abc import Callable

from colorama import Fore, Style
from colorama import init as colorama_init

from qnumtheory import config as CONFIG
from qnumtheory import rng
from qnumtheory.contfrac import contfrac2x, convergents, reconstruct, x2contfrac
from qnumtheory.errors import NumTheoryError, UserInputError
from qnumtheory.expreval import parse_bigint, parse_index, parse_real
from qnumtheory.factor import factor_multiplicities, factors
from qnumtheory.fmt import (
    format_bezout,
    format_contfrac,
    format_factorization,
    format_fraction,
    format_perm,
    label,
    verdict,
)
from qnumtheory.gcdlcm import gcd, gcd_list, lcm, lcm_list
from qnumtheory.modular import egcd, modinv, modpow, mulmod
from qnumtheory.perm import compperm, invperm
from qnumtheory.primality import isprime, randprime
from qnumtheory.runtime import APPLY, cfg_int
from qnumtheory.runtime import current as _rt_current
from qnumtheory.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

_WORKSPACE_COMMANDS = ("init", "where", "profiles")
_PAIRWISE = 2


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    # Always show full Python tracebacks
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _print_kernel_error(e: NumTheoryError) -> None:
    print(f"{Fore.RED}{e.kind.name}:{Style.RESET_ALL} {e}", file=sys.stderr)


# ---- command handlers ----

def _cmd_gcd(args) -> None:
    ns = [parse_bigint(s, "integer") for s in args.numbers]
    g = gcd(*ns) if len(ns) == _PAIRWISE else gcd_list(ns)
    print(f"{label('gcd')} = {g}")


def _cmd_lcm(args) -> None:
    ns = [parse_bigint(s, "integer") for s in args.numbers]
    m = lcm(*ns) if len(ns) == _PAIRWISE else lcm_list(ns)
    print(f"{label('lcm')} = {m}")


def _cmd_egcd(args) -> None:
    m, n = parse_bigint(args.m, "m"), parse_bigint(args.n, "n")
    a, b, g = egcd(m, n)
    print(f"{label('egcd')} = ({a}, {b}, {g})")
    print(f"  {format_bezout(m, n, a, b, g)}")


def _cmd_factors(args) -> None:
    n = parse_bigint(args.n, "n")
    fs = factors(n)
    print(f"{label('factors')} = {fs}")
    print(f"  {abs(n)} = {format_factorization(factor_multiplicities(n))}")


def _cmd_modpow(args) -> None:
    a, n, p = parse_bigint(args.a, "a"), parse_bigint(args.n, "n"), parse_bigint(args.p, "p")
    print(f"{label('modpow')} = {modpow(a, n, p)}")


def _cmd_modinv(args) -> None:
    a, p = parse_bigint(args.a, "a"), parse_bigint(args.p, "p")
    print(f"{label('modinv')} = {modinv(a, p)}")


def _cmd_mulmod(args) -> None:
    a, b, m = parse_bigint(args.a, "a"), parse_bigint(args.b, "b"), parse_bigint(args.m, "m")
    print(f"{label('mulmod')} = {mulmod(a, b, m)}")


def _cmd_isprime(args) -> None:
    n = parse_bigint(args.n, "n")
    k = parse_index(args.rounds, "rounds") if args.rounds is not None else None
    ok = isprime(n, k)
    print(f"{label('isprime')}({n}) = {verdict(ok, 'probably prime', 'composite')}")


def _cmd_randprime(args) -> None:
    a, b = parse_bigint(args.a, "a"), parse_bigint(args.b, "b")
    attempts = parse_index(args.attempts, "attempts") if args.attempts is not None else None
    print(f"{label('randprime')} = {randprime(a, b, attempts)}")


def _cmd_contfrac(args) -> None:
    x = parse_real(args.x, "x")
    n = parse_index(args.terms, "terms") if args.terms is not None else cfg_int("CONTFRAC.TERMS", 64)
    cut = parse_real(args.cut, "cut") if args.cut is not None else None
    cf = x2contfrac(x, n, cut)
    print(f"{label('contfrac')} = {format_contfrac(cf)}")
    print(f"{label('convergents')} = " + ", ".join(format_fraction(q) for q in convergents(cf)))
    print(f"{label('value')} = {contfrac2x(cf)!r}")
    if args.max_den is not None:
        q = reconstruct(x, parse_index(args.max_den, "max-den"), n, cut)
        print(f"{label('reconstruct')} = {format_fraction(q)}")


def _cmd_contfrac2x(args) -> None:
    cf = [parse_bigint(s, "term") for s in args.terms]
    n = parse_index(args.n, "n") if args.n is not None else None
    print(f"{label('contfrac2x')} = {contfrac2x(cf, n)!r}")


def _cmd_invperm(args) -> None:
    perm = [parse_index(s, "entry") for s in args.perm]
    print(f"{label('invperm')} = {format_perm(invperm(perm))}")


def _cmd_compperm(args) -> None:
    perm = [parse_index(s, "entry") for s in args.perm]
    sigma = [parse_index(s, "entry") for s in args.sigma]
    print(f"{label('compperm')} = {format_perm(compperm(perm, sigma))}")


_HANDLERS: dict[str, Callable[[argparse.Namespace], None]] = {
    "gcd": _cmd_gcd,
    "lcm": _cmd_lcm,
    "egcd": _cmd_egcd,
    "factors": _cmd_factors,
    "modpow": _cmd_modpow,
    "modinv": _cmd_modinv,
    "mulmod": _cmd_mulmod,
    "isprime": _cmd_isprime,
    "randprime": _cmd_randprime,
    "contfrac": _cmd_contfrac,
    "contfrac2x": _cmd_contfrac2x,
    "invperm": _cmd_invperm,
    "compperm": _cmd_compperm,
}


# ---- workspace commands ----

def _cmd_workspace(args) -> int:
    if args.command == "init":
        ws, copied = seed_workspace(overwrite=args.overwrite)
        print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}")
        return 0
    if args.command == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Profiles:  {workspace_dir() / 'profiles'}")
        print(f"Active:    {CONFIG.read_current_profile() or 'default'}")
        return 0
    # profiles
    ensure_workspace_seeded()
    items = CONFIG.list_profiles_with_descriptions()
    if not items:
        print("No profiles found. Run 'qnumtheory init'.")
        return 0
    width = max(len(nm) for nm, _ in items)
    for nm, desc in items:
        print(f"  {Fore.YELLOW}{nm:<{width}}{Style.RESET_ALL}  {desc}")
    return 0


def _select_profile_name(args) -> str:
    """
    Precedence:
      1) explicit --profile
      2) last used (from workspace)
      3) 'default'
    """
    name = getattr(args, "profile", None)
    if name:
        return name
    return CONFIG.read_current_profile() or "default"


def _apply_profile(args) -> None:
    ensure_workspace_seeded()
    name = _select_profile_name(args)
    settings = None
    if CONFIG.has_profile(name):
        settings = CONFIG.load_settings(name)
        APPLY(settings)
        if args.profile:
            CONFIG.write_current_profile(name)
    elif args.profile:
        raise UserInputError(f"profile '{name}' not found in {workspace_dir() / 'profiles'}")

    seed = args.seed
    if seed is None and settings is not None:
        seed = settings.seed()
    if seed is not None:
        rng.set_seed(seed)


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    integers:
      Arguments accept literals (42, -7, 0xFF, 1_000_003) and integer
      expressions (2**61-1, 10**18, 1e9+7). Values must fit in 64 bits.

    workspace:
      init [--overwrite]   copy packaged profiles into the workspace
      where                show workspace paths and the active profile
      profiles             list profiles with descriptions
    """)

    p = argparse.ArgumentParser(
        prog="qnumtheory",
        description="Number-theory kernel: gcd, modular arithmetic, primality, continued fractions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--profile", default=None, help="Profile name from the workspace (remembered)")
    p.add_argument("--seed", type=int, default=None, help="Seed the random source for reproducible runs")
    p.add_argument("--debug", action="store_true", help="Trace kernel decisions on stderr, show tracebacks")

    sub = p.add_subparsers(dest="command", required=True, metavar="command")

    s = sub.add_parser("gcd", help="greatest common divisor of two or more integers")
    s.add_argument("numbers", nargs="+")
    s = sub.add_parser("lcm", help="least common multiple of two or more integers")
    s.add_argument("numbers", nargs="+")
    s = sub.add_parser("egcd", help="Bezout coefficients (a, b, g) with a*m + b*n = g")
    s.add_argument("m")
    s.add_argument("n")
    s = sub.add_parser("factors", help="prime factors by trial division")
    s.add_argument("n")
    s = sub.add_parser("modpow", help="a^n mod p")
    s.add_argument("a")
    s.add_argument("n")
    s.add_argument("p")
    s = sub.add_parser("modinv", help="inverse of a modulo p")
    s.add_argument("a")
    s.add_argument("p")
    s = sub.add_parser("mulmod", help="a*b mod m without overflow")
    s.add_argument("a")
    s.add_argument("b")
    s.add_argument("m")
    s = sub.add_parser("isprime", help="Fermat + Miller-Rabin primality test")
    s.add_argument("n")
    s.add_argument("-k", "--rounds", default=None, help="Miller-Rabin rounds (profile PRIMALITY.ROUNDS)")
    s = sub.add_parser("randprime", help="random prime in [a, b]")
    s.add_argument("a")
    s.add_argument("b")
    s.add_argument("-N", "--attempts", default=None, help="candidate budget (profile RANDPRIME.ATTEMPTS)")
    s = sub.add_parser("contfrac", help="continued fraction expansion of a real number")
    s.add_argument("x")
    s.add_argument("-n", "--terms", default=None, help="maximum number of terms (profile CONTFRAC.TERMS)")
    s.add_argument("--cut", default=None, help="stop once a term exceeds this (profile CONTFRAC.CUT)")
    s.add_argument("--max-den", dest="max_den", default=None, help="also reconstruct with denominator <= MAX_DEN")
    s = sub.add_parser("contfrac2x", help="real value of a continued fraction a0 a1 a2 ...")
    s.add_argument("terms", nargs="+")
    s.add_argument("-n", default=None, help="use only the first n terms")
    s = sub.add_parser("invperm", help="inverse of a permutation of 0..k-1")
    s.add_argument("perm", nargs="+")
    s = sub.add_parser("compperm", help="composition perm(sigma)")
    s.add_argument("--perm", nargs="+", required=True)
    s.add_argument("--sigma", nargs="+", required=True)

    s = sub.add_parser("init", help="seed the workspace with packaged profiles")
    s.add_argument("--overwrite", action="store_true", help="replace existing profiles")
    sub.add_parser("where", help="show workspace paths")
    sub.add_parser("profiles", help="list available profiles")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except NumTheoryError as e:
        _print_kernel_error(e)
        return 1
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()

    if args.command in _WORKSPACE_COMMANDS:
        return _cmd_workspace(args)

    _apply_profile(args)
    if args.debug:
        rt.debug = True
    _install_loud_error_handlers(rt.debug)

    _HANDLERS[args.command](args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
