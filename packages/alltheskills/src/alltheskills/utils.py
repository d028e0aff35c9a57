"""Filesystem helpers for installing and recognising skill directories."""
from __future__ import annotations

import re
import shutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

# Every manifest filename any provider recognises.
MANIFEST_FILES: tuple[str, ...] = (
    "claude.json",
    "cline.json",
    "cursor.json",
    "roo.json",
    ".roomodes",
    "manifest.json",
    "skill.json",
    "ai.config.json",
    "codex.json",
    "kilo.yaml",
    "kilo.yml",
    "wrangler.toml",
    ".cursorrules",
    "SKILL.md",
    "skill.md",
    "custom-instructions.md",
    "instructions.md",
)

_UNSAFE_CHARS = re.compile(r'[/\\:*?"<>|]')


def copy_dir_recursive(src: Path, dst: Path) -> None:
    """Copy the contents of *src* into *dst*, creating *dst* as needed.

    Existing files in *dst* are overwritten.

    Raises:
        OSError: If a directory cannot be created or a file copied.
    """
    dst.mkdir(parents=True, exist_ok=True)
    shutil.copytree(src, dst, dirs_exist_ok=True)


def is_skill_dir(path: Path) -> bool:
    """True if *path* is a directory holding a known manifest or a README."""
    if not path.is_dir():
        return False
    if any((path / name).exists() for name in MANIFEST_FILES):
        return True
    return (path / "README.md").exists()


def sanitize_filename(name: str) -> str:
    """Replace characters unsafe in file names and strip leading dots."""
    return _UNSAFE_CHARS.sub("-", name).lstrip(".")


def remove_path(path: Path) -> None:
    """Delete a skill directory tree, or a single rules file.

    Raises:
        OSError: If *path* cannot be removed.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
