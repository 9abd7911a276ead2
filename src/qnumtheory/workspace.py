from __future__ import annotations

import os
import shutil
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

PROFILES = "profiles"


def workspace_dir() -> Path:
    env = os.environ.get("QNUMTHEORY_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / "Documents" / "QNumTheory").resolve()


def _copy_profiles(src: Path, dst: Path, *, overwrite: bool) -> int:
    """Copy the packaged *.toml profiles (flat directory, no hidden files)."""
    count = 0
    for p in sorted(src.glob("*.toml")):
        if p.name.startswith("."):
            continue
        target = dst / p.name
        if overwrite or not target.exists():
            shutil.copy2(p, target)
            count += 1
    return count


def seed_workspace(*, overwrite: bool = False) -> tuple[Path, dict[str, int]]:
    """
    Create the workspace and copy the packaged profiles into it.

    overwrite=False keeps profiles the user already has (or edited);
    overwrite=True restores the packaged versions.

    Returns: (workspace_path, {"profiles": files_copied})
    """
    root = workspace_dir()
    dst = root / PROFILES
    dst.mkdir(parents=True, exist_ok=True)

    with as_file(pkg_files("qnumtheory") / PROFILES) as real:
        copied = _copy_profiles(Path(real), dst, overwrite=overwrite)

    return root, {PROFILES: copied}


def ensure_workspace_seeded() -> tuple[Path, bool, dict[str, int]]:
    root, copied = seed_workspace(overwrite=False)
    return root, any(copied.values()), copied
