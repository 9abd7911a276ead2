# tests/test_cli.py
"""End-to-end runs of the qnumtheory command line (workspace in a temp dir)."""

from __future__ import annotations

import pytest

from qnumtheory import cli, config
from qnumtheory.fmt import strip_ansi


@pytest.fixture(autouse=True)
def _isolated_workspace(workspace):
    return workspace


def run(capsys, *argv: str) -> tuple[int, str, str]:
    rc = cli.main(list(argv))
    captured = capsys.readouterr()
    return rc, strip_ansi(captured.out), strip_ansi(captured.err)


def test_gcd_and_lcm(capsys):
    assert run(capsys, "gcd", "48", "18")[1].strip() == "gcd = 6"
    assert run(capsys, "gcd", "48", "18", "12")[1].strip() == "gcd = 6"
    assert run(capsys, "gcd", "-48", "18")[1].strip() == "gcd = 6"
    assert run(capsys, "lcm", "4", "6")[1].strip() == "lcm = 12"
    assert run(capsys, "lcm", "4", "6", "10")[1].strip() == "lcm = 60"


def test_factors(capsys):
    rc, out, _ = run(capsys, "factors", "360")
    assert rc == 0
    assert "factors = [2, 2, 2, 3, 3, 5]" in out
    assert "360 = 2^3 × 3^2 × 5" in out


def test_egcd(capsys):
    rc, out, _ = run(capsys, "egcd", "240", "46")
    assert rc == 0
    assert "egcd = (-9, 47, 2)" in out
    assert "(-9)·240 + 47·46 = 2" in out


def test_modular_commands(capsys):
    assert "modpow = 24" in run(capsys, "modpow", "2", "10", "1000")[1]
    assert "modinv = 4" in run(capsys, "modinv", "3", "11")[1]
    assert "mulmod = 1" in run(capsys, "mulmod", "2**63-2", "2**63-2", "2**63-1")[1]


def test_isprime(capsys):
    rc, out, _ = run(capsys, "--seed", "1", "isprime", "2**61-1", "-k", "10")
    assert rc == 0
    assert f"isprime({2**61 - 1}) = probably prime" in out
    assert "= composite" in run(capsys, "--seed", "1", "isprime", "561")[1]


def test_randprime_is_reproducible_with_seed(capsys):
    _, first, _ = run(capsys, "--seed", "5", "randprime", "1000", "2000")
    _, second, _ = run(capsys, "--seed", "5", "randprime", "1000", "2000")
    assert first == second
    p = int(first.split("=")[1])
    assert 1000 <= p <= 2000


def test_randprime_exhausted(capsys):
    rc, _, err = run(capsys, "randprime", "24", "28", "-N", "10")
    assert rc == 1
    assert "SEARCH_EXHAUSTED:" in err
    assert "after 10 candidates" in err


def test_contfrac(capsys):
    rc, out, _ = run(capsys, "contfrac", "0.75", "--max-den", "4")
    assert rc == 0
    assert "contfrac = [0; 1, 3]" in out
    assert "convergents = 0, 1, 3/4" in out
    assert "reconstruct = 3/4" in out


def test_contfrac2x(capsys):
    rc, out, _ = run(capsys, "contfrac2x", "0", "1", "3")
    assert rc == 0
    assert "contfrac2x = 0.75" in out


def test_permutations(capsys):
    assert "invperm = [1 2 0]" in run(capsys, "invperm", "2", "0", "1")[1]
    assert "compperm = [0 1 2]" in run(capsys, "compperm", "--perm", "2", "0", "1", "--sigma", "1", "2", "0")[1]


@pytest.mark.parametrize(
    "argv,kind",
    [
        (("gcd", "0", "0"), "OUT_OF_RANGE"),
        (("egcd", "0", "0"), "OUT_OF_RANGE"),
        (("invperm", "0", "0"), "PERM_INVALID"),
        (("modinv", "6", "9"), "OUT_OF_RANGE"),
    ],
)
def test_kernel_errors_exit_1(capsys, argv, kind):
    rc, out, err = run(capsys, *argv)
    assert rc == 1
    assert out == ""
    assert f"{kind}:" in err


@pytest.mark.parametrize("argv", [("factors", "2**64"), ("gcd", "abc", "4"), ("invperm", "-1", "0")])
def test_bad_input_exit_2(capsys, argv):
    rc, _, err = run(capsys, *argv)
    assert rc == 2
    assert err.strip()


def test_init_and_profiles(capsys, workspace):
    rc, out, _ = run(capsys, "init")
    assert rc == 0
    assert "Workspace ready at:" in out
    assert (workspace / "profiles" / "default.toml").is_file()

    rc, out, _ = run(capsys, "profiles")
    assert rc == 0
    assert "default" in out and "fast" in out


def test_where(capsys, workspace):
    rc, out, _ = run(capsys, "where")
    assert rc == 0
    assert str(workspace.resolve()) in out
    assert "Active:    default" in out


def test_profile_is_remembered(capsys):
    rc, _, _ = run(capsys, "--profile", "fast", "gcd", "4", "6")
    assert rc == 0
    assert config.read_current_profile() == "fast"


def test_missing_profile_exit_2(capsys):
    rc, _, err = run(capsys, "--profile", "nope", "gcd", "4", "6")
    assert rc == 2
    assert "nope" in err


def test_debug_traces_to_stderr(capsys, monkeypatch):
    import sys

    monkeypatch.setattr(cli.faulthandler, "enable", lambda: None)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    rc, out, err = run(capsys, "--debug", "randprime", "2", "2")
    assert rc == 0
    assert "randprime = 2" in out
    assert "[accept]" in err
