"""Tests for platform directory detection."""
from __future__ import annotations

from pathlib import Path

import pytest
from alltheskills.detect import (
    PLATFORM_DIRS,
    KnownSources,
    detect_path,
    expand_home,
    home_dir,
)


def probe(*existing: Path):
    """Existence probe that only knows about *existing*."""
    known = set(existing)
    return lambda path: path in known


class TestDetectPath:
    def test_env_override_wins_even_if_missing(self) -> None:
        env = {"HOME": "/home/u", "X_DIR": "/custom"}
        found = detect_path(("X_DIR",), ("~/.x",), env, probe(Path("/home/u/.x")))
        assert found == Path("/custom")

    def test_empty_override_is_ignored(self) -> None:
        env = {"HOME": "/home/u", "X_DIR": ""}
        found = detect_path(("X_DIR",), ("~/.x",), env, probe(Path("/home/u/.x")))
        assert found == Path("/home/u/.x")

    def test_first_existing_fallback(self) -> None:
        env = {"HOME": "/h"}
        found = detect_path(
            (), ("~/.a", "~/.b", "~/.c"), env, probe(Path("/h/.b"), Path("/h/.c")),
        )
        assert found == Path("/h/.b")

    def test_nothing_found(self) -> None:
        assert detect_path(("X",), ("~/.x",), {"HOME": "/h"}, probe()) is None

    def test_no_home_skips_relative_fallbacks(self) -> None:
        assert detect_path((), ("~/.x",), {}, lambda _p: True) is None


class TestHome:
    def test_userprofile_when_no_home(self) -> None:
        assert home_dir({"USERPROFILE": "C:/Users/u"}) == Path("C:/Users/u")
        assert home_dir({}) is None

    def test_expand_home(self) -> None:
        assert expand_home("~/.claude", {"HOME": "/h"}) == Path("/h/.claude")
        assert expand_home("/abs/path", {}) == Path("/abs/path")
        assert expand_home("~/.claude", {}) is None


class TestKnownSources:
    def test_moltbot_honours_legacy_variable(self) -> None:
        sources = KnownSources(env={"CLAWDBOT_SKILLS_DIR": "/legacy"}, exists=probe())
        assert sources.moltbot_skills_dir() == Path("/legacy")

    def test_moltbot_variable_beats_legacy_variable(self) -> None:
        sources = KnownSources(
            env={"MOLTBOT_SKILLS_DIR": "/new", "CLAWDBOT_SKILLS_DIR": "/old"},
            exists=probe(),
        )
        assert sources.moltbot_skills_dir() == Path("/new")

    def test_claude_plugins_fallback(self) -> None:
        sources = KnownSources(
            env={"HOME": "/h"}, exists=probe(Path("/h/.claude/plugins/skills")),
        )
        assert sources.claude_skills_dir() == Path("/h/.claude/plugins/skills")

    def test_cursor_falls_back_to_dot_cursor(self) -> None:
        sources = KnownSources(env={"HOME": "/h"}, exists=probe(Path("/h/.cursor")))
        assert sources.cursor_rules_dir() == Path("/h/.cursor")

    def test_clawdbot_legacy_dir(self) -> None:
        legacy = Path("/h/.clawdbot/skills")
        found = KnownSources(env={"HOME": "/h"}, exists=probe(legacy))
        missing = KnownSources(env={"HOME": "/h"}, exists=probe())
        assert found.clawdbot_legacy_dir() == legacy
        assert missing.clawdbot_legacy_dir() is None

    def test_every_platform_has_a_lookup(self) -> None:
        sources = KnownSources(env={}, exists=probe())
        lookups = {
            "claude": sources.claude_skills_dir,
            "cline": sources.cline_skills_dir,
            "cursor": sources.cursor_rules_dir,
            "openclaw": sources.openclaw_skills_dir,
            "roo": sources.roo_skills_dir,
            "kilo": sources.kilo_skills_dir,
            "codex": sources.codex_skills_dir,
            "moltbot": sources.moltbot_skills_dir,
            "vercel": sources.vercel_skills_dir,
            "cloudflare": sources.cloudflare_skills_dir,
        }
        assert set(lookups) == set(PLATFORM_DIRS)
        assert all(lookup() is None for lookup in lookups.values())

    def test_known_directories(self) -> None:
        sources = KnownSources(
            env={"HOME": "/h", "KILO_SKILLS_DIR": "/kilo"},
            exists=probe(Path("/h/.cline/skills")),
        )
        assert sources.known_directories() == [
            ("Cline", Path("/h/.cline/skills")),
            ("Kilo Code", Path("/kilo")),
        ]

    def test_defaults_to_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODEX_SKILLS_DIR", "/from/env")
        assert KnownSources().codex_skills_dir() == Path("/from/env")
