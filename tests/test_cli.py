"""End-to-end tests for the alltheskills command line."""
from __future__ import annotations

import json
import logging
import textwrap
from typing import TYPE_CHECKING

import pytest
from alltheskills_cli.main import app
from typer.testing import CliRunner

from conftest import write_file, write_json

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

runner = CliRunner()


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers the CLI attaches, so later tests never log to a closed stream."""
    yield
    logger = logging.getLogger("alltheskills")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def claude_dir(isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A Claude skills directory with two skills, exposed via CLAUDE_SKILLS_DIR."""
    root = isolated_env / "claude-skills"
    write_json(root / "base" / "claude.json", {
        "name": "base",
        "description": "Shared helpers",
        "version": "1.2.0",
    })
    write_json(root / "app" / "claude.json", {
        "name": "app",
        "description": "Builds apps",
        "version": "0.1.0",
        "tags": ["builder"],
        "dependencies": [{"name": "base", "version": "^1.0.0"}],
    })
    write_file(root / "app" / "SKILL.md", "Always write tests.\n")
    monkeypatch.setenv("CLAUDE_SKILLS_DIR", str(root))
    return root


# ── Listing ──────────────────────────────────────────────────────────


class TestList:
    def test_nothing_installed(self, isolated_env: Path) -> None:
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No skills found" in result.output

    def test_table(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0, result.output
        assert "app" in result.output
        assert "base" in result.output
        assert "2 skill(s) found" in result.output

    def test_json(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["list", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert sorted(item["id"] for item in data) == ["app", "base"]
        assert {item["source_type"] for item in data} == {"claude"}

    def test_source_filter(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["list", "--source", "cline"])
        assert "No skills found" in result.output

    def test_verbose_flag(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["-v", "list", "--json"])
        assert result.exit_code == 0

    def test_bad_config_exits(self, isolated_env: Path) -> None:
        write_file(isolated_env.parent / "work" / "alltheskills.toml", "[general\n")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestSearchAndInfo:
    def test_search_by_tag(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["search", "builder"])
        assert result.exit_code == 0
        assert "app" in result.output

    def test_search_no_match(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["search", "zzz"])
        assert result.exit_code == 0
        assert "No skills match" in result.output

    def test_info(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["info", "app"])
        assert result.exit_code == 0, result.output
        assert "Builds apps" in result.output
        assert "base@^1.0.0" in result.output

    def test_info_unknown(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["info", "ghost"])
        assert result.exit_code == 1
        assert "Skill not found" in result.output

    def test_show_raw(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["show", "app", "--raw"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Always write tests."


# ── Dependencies and validation ──────────────────────────────────────


class TestDeps:
    def test_satisfied(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["deps", "app"])
        assert result.exit_code == 0, result.output
        assert "satisfied" in result.output

    def test_missing(self, claude_dir: Path) -> None:
        write_json(claude_dir / "needy" / "claude.json", {
            "name": "needy",
            "dependencies": [{"name": "absent", "source": "https://github.com/acme/absent"}],
        })
        result = runner.invoke(app, ["deps", "needy"])
        assert result.exit_code == 1
        assert "To install" in result.output
        assert "absent" in result.output

    def test_no_dependencies(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["deps", "base"])
        assert result.exit_code == 0
        assert "declares no dependencies" in result.output


class TestValidate:
    def test_valid_directory(self, isolated_env: Path) -> None:
        skill = isolated_env / "s"
        write_json(skill / "skill.json", {"name": "s"})
        write_file(skill / "README.md", "x")

        result = runner.invoke(app, ["validate", str(skill)])

        assert result.exit_code == 0, result.output
        assert "skill.json" in result.output
        assert "valid" in result.output

    def test_invalid_directory(self, isolated_env: Path) -> None:
        skill = isolated_env / "broken"
        write_file(skill / "skill.json", "{nope")

        result = runner.invoke(app, ["validate", str(skill)])

        assert result.exit_code == 1

    def test_installed_skills(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["validate"])
        assert result.exit_code == 0, result.output
        assert "2 valid, 0 invalid" in result.output


# ── Install ──────────────────────────────────────────────────────────


class TestInstall:
    def test_local_directory(self, isolated_env: Path) -> None:
        src = isolated_env / "src" / "my-skill"
        write_json(src / "skill.json", {"name": "My Skill", "version": "2.0.0"})

        result = runner.invoke(app, ["install", str(src)])

        assert result.exit_code == 0, result.output
        installed = isolated_env.parent / "work" / ".alltheskills" / "my-skill"
        assert (installed / "skill.json").is_file()

        listed = runner.invoke(app, ["list", "--json"])
        assert [item["id"] for item in json.loads(listed.stdout)] == ["my-skill"]

    def test_explicit_target(self, isolated_env: Path) -> None:
        src = isolated_env / "src"
        write_file(src / "README.md", "x")
        target = isolated_env / "elsewhere"

        result = runner.invoke(app, ["install", str(src), "--target", str(target)])

        assert result.exit_code == 0, result.output
        assert (target / "README.md").is_file()

    def test_missing_directory(self, isolated_env: Path) -> None:
        result = runner.invoke(app, ["install", str(isolated_env / "nope")])
        assert result.exit_code == 1
        assert "not a directory" in result.output

    def test_remote_url_rejected(self, isolated_env: Path) -> None:
        result = runner.invoke(app, ["install", "https://example.com/skill.zip"])
        assert result.exit_code == 1

    def test_bad_github_url(self, isolated_env: Path) -> None:
        result = runner.invoke(app, ["install", "https://github.com/only-owner"])
        assert result.exit_code == 1
        assert "Invalid GitHub URL" in result.output

    def test_unknown_provider(self, isolated_env: Path) -> None:
        src = isolated_env / "src"
        write_file(src / "README.md", "x")
        result = runner.invoke(app, ["install", str(src), "--provider", "nonexistent"])
        assert result.exit_code == 1
        assert "Unknown provider" in result.output

    def test_provider_that_cannot_install(self, isolated_env: Path) -> None:
        src = isolated_env / "src"
        write_file(src / "README.md", "x")
        result = runner.invoke(app, ["install", str(src), "--provider", "roo"])
        assert result.exit_code == 1
        assert "not supported" in result.output


# ── Config and version ───────────────────────────────────────────────


class TestConfig:
    def test_paths(self, isolated_env: Path) -> None:
        result = runner.invoke(app, ["config", "--path"])
        assert result.exit_code == 0
        assert "alltheskills.toml" in result.output

    def test_summary(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        write_file(isolated_env.parent / "work" / "alltheskills.toml", textwrap.dedent("""\
            [general]
            install_dir = "vendor/skills"

            [[sources]]
            name = "team"
            source_type = "claude"
            path = "/srv/skills"
        """))
        monkeypatch.setenv("CODEX_SKILLS_DIR", "/opt/codex")

        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0, result.output
        assert "vendor/skills" in result.output
        assert "team" in result.output
        assert "/opt/codex" in result.output

    def test_nothing_detected(self, isolated_env: Path) -> None:
        result = runner.invoke(app, ["config"])
        assert "No platform skill directories detected" in result.output


class TestVersion:
    def test_version(self, isolated_env: Path) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "alltheskills 0.1.0" in result.output


# ── Init and remove ──────────────────────────────────────────────────


class TestInit:
    def test_creates_skill(self, isolated_env: Path) -> None:
        result = runner.invoke(
            app, ["init", "helper", "--type", "cline", "--path", str(isolated_env)],
        )
        assert result.exit_code == 0, result.output
        assert (isolated_env / "helper" / "cline.json").is_file()
        assert (isolated_env / "helper" / "custom-instructions.md").is_file()

    def test_refuses_existing_directory(self, isolated_env: Path) -> None:
        (isolated_env / "helper").mkdir()
        result = runner.invoke(app, ["init", "helper", "--path", str(isolated_env)])
        assert result.exit_code == 1
        assert "already exists" in result.output


class TestRemove:
    def test_force(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["remove", "base", "--force"])
        assert result.exit_code == 0, result.output
        assert not (claude_dir / "base").exists()
        assert (claude_dir / "app").exists()

    def test_declined_confirmation(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["remove", "base"], input="n\n")
        assert result.exit_code == 0
        assert "cancelled" in result.output
        assert (claude_dir / "base").exists()

    def test_unknown_skill(self, claude_dir: Path) -> None:
        result = runner.invoke(app, ["remove", "ghost", "--force"])
        assert result.exit_code == 1
