from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from alltheskills.detect import KnownSources
from alltheskills.types import (
    LocalSource,
    Skill,
    SkillDependency,
    SkillFormat,
    SkillMetadata,
    SourceType,
)

# ── Filesystem helpers ───────────────────────────────────────────────


def write_file(path: Path, content: str = "") -> Path:
    """Write *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_json(path: Path, data: Any) -> Path:
    return write_file(path, json.dumps(data))


# ── Entity helpers ───────────────────────────────────────────────────


def make_skill(
    name: str,
    version: str | None = None,
    dependencies: list[SkillDependency] | None = None,
    source_type: SourceType = SourceType.LOCAL,
    path: Path | None = None,
    tags: list[str] | None = None,
    description: str = "",
) -> Skill:
    """Build a Skill record directly, without touching the filesystem."""
    skill_path = path or Path("/skills") / name
    return Skill(
        id=name.lower().replace(" ", "-"),
        name=name,
        description=description,
        source=LocalSource(path=skill_path),
        source_type=source_type,
        path=skill_path,
        format=SkillFormat.GENERIC_JSON,
        version=version,
        metadata=SkillMetadata(
            tags=list(tags or []),
            dependencies=list(dependencies or []),
        ),
    )


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def empty_sources(tmp_path: Path) -> KnownSources:
    """Detection against an empty fake home: nothing is ever found."""
    home = tmp_path / "home"
    home.mkdir()
    return KnownSources(env={"HOME": str(home)})


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME, XDG_CONFIG_HOME and the working directory at tmp_path.

    Clears every platform override variable so the real machine's skill
    directories never leak into a test.
    """
    from alltheskills.detect import PLATFORM_DIRS

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("USERPROFILE", raising=False)
    monkeypatch.delenv("APPDATA", raising=False)
    for env_keys, _fallbacks in PLATFORM_DIRS.values():
        for key in env_keys:
            monkeypatch.delenv(key, raising=False)

    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return home
