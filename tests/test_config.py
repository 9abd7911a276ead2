# tests/test_config.py
from __future__ import annotations

import pytest

from qnumtheory import config, runtime
from qnumtheory.errors import UserInputError
from qnumtheory.runtime import APPLY, CFG, cfg_float, cfg_int
from qnumtheory.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir


def test_workspace_dir_follows_env(workspace):
    assert workspace_dir() == workspace.resolve()


def test_seeding_copies_packaged_profiles(workspace):
    root, seeded_any, copied = ensure_workspace_seeded()
    assert seeded_any
    assert copied["profiles"] >= 2
    assert (root / "profiles" / "default.toml").is_file()
    assert (root / "profiles" / "fast.toml").is_file()

    # second run copies nothing
    _, seeded_again, _ = ensure_workspace_seeded()
    assert not seeded_again


def test_seeding_keeps_user_edits_unless_overwrite(workspace):
    seed_workspace()
    path = workspace / "profiles" / "default.toml"
    path.write_text("[PRIMALITY]\nROUNDS = 7\n", encoding="utf-8")

    seed_workspace()
    assert "ROUNDS = 7" in path.read_text(encoding="utf-8")

    seed_workspace(overwrite=True)
    assert "ROUNDS = 7" not in path.read_text(encoding="utf-8")


def test_overwrite_restores_only_packaged_profiles(workspace):
    seed_workspace()
    own = workspace / "profiles" / "mine.toml"
    own.write_text("[PRIMALITY]\nROUNDS = 9\n", encoding="utf-8")

    _, copied = seed_workspace(overwrite=True)
    assert copied == {"profiles": 2}
    assert own.read_text(encoding="utf-8") == "[PRIMALITY]\nROUNDS = 9\n"
    assert sorted(p.name for p in (workspace / "profiles").glob("*.toml")) == ["default.toml", "fast.toml", "mine.toml"]


def test_load_fast_profile(workspace):
    seed_workspace()
    s = config.load_settings("fast")
    assert s.name == "fast"
    assert s.description != "(no description)"
    assert "PROFILE" not in s.as_dict()

    APPLY(s)
    assert CFG("PRIMALITY.ROUNDS") == 20
    assert CFG("RANDPRIME.ATTEMPTS") == 200
    assert runtime.current().profile_name == "fast"


def test_default_profile_values(workspace):
    seed_workspace()
    APPLY(config.load_settings(None))
    assert cfg_int("PRIMALITY.ROUNDS", 0) == 80
    assert cfg_int("RANDPRIME.ATTEMPTS", 0) == 1000
    assert cfg_float("CONTFRAC.CUT", 0.0) == 1e5
    assert cfg_int("CONTFRAC.TERMS", 0) == 64


def test_missing_profile(workspace):
    seed_workspace()
    assert not config.has_profile("nope")
    with pytest.raises(UserInputError, match="not found"):
        config.load_settings("nope")


def test_broken_toml_reports_position(workspace):
    seed_workspace()
    (workspace / "profiles" / "broken.toml").write_text("[PRIMALITY\nROUNDS = 3\n", encoding="utf-8")
    with pytest.raises(UserInputError, match="broken.toml"):
        config.load_settings("broken")

    listed = dict(config.list_profiles_with_descriptions())
    assert listed["broken"] == "(unreadable)"


def test_listing_is_sorted(workspace):
    seed_workspace()
    (workspace / "profiles" / "Zeta.toml").write_text("[PRIMALITY]\nROUNDS = 5\n", encoding="utf-8")
    names = [n for n, _ in config.list_profiles_with_descriptions()]
    assert names == sorted(names, key=str.lower)
    assert dict(config.list_profiles_with_descriptions())["Zeta"] == "(no description)"


def test_current_profile_round_trip(workspace):
    assert config.read_current_profile() is None
    config.write_current_profile("fast.toml")
    assert config.read_current_profile() == "fast"


def test_seed_setting(workspace):
    seed_workspace()
    (workspace / "profiles" / "seeded.toml").write_text("[RANDOM]\nSEED = 1234\n", encoding="utf-8")
    assert config.load_settings("seeded").seed() == 1234
    assert config.load_settings("default").seed() is None


# ---------- runtime lookups ----------------------------------------------------


def test_cfg_falls_back_on_missing_or_malformed_values():
    assert CFG("PRIMALITY.ROUNDS", 80) == 80
    APPLY({"PRIMALITY": {"ROUNDS": "many"}, "CONTFRAC": {"CUT": True}})
    assert cfg_int("PRIMALITY.ROUNDS", 80) == 80
    assert cfg_float("CONTFRAC.CUT", 1e5) == 1e5
    assert CFG("PRIMALITY") == {"ROUNDS": "many"}


def test_debug_flag_from_settings():
    APPLY({"BEHAVIOUR": {"DEBUG": True}})
    assert runtime.current().debug is True
    APPLY({"BEHAVIOUR": {"DEBUG": "yes"}})
    assert runtime.current().debug is True  # non-bool values are ignored


def test_reset_restores_defaults():
    APPLY({"PRIMALITY": {"ROUNDS": 3}})
    runtime.reset()
    assert CFG("PRIMALITY.ROUNDS") is None
