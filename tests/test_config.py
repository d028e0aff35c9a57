"""Tests for alltheskills.toml loading and layering."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from alltheskills_core.config import (
    AllSkillsConfig,
    LoggingConfig,
    SourceSettings,
    config_dir,
    config_path,
)
from alltheskills_core.errors import ConfigError

from conftest import write_file


class TestConfigDir:
    def test_linux_prefers_xdg(self) -> None:
        env = {"XDG_CONFIG_HOME": "/xdg", "HOME": "/h"}
        assert config_dir(env, "linux") == Path("/xdg")

    def test_linux_home_config(self) -> None:
        assert config_dir({"HOME": "/h"}, "linux") == Path("/h/.config")

    def test_macos(self) -> None:
        assert config_dir({"HOME": "/Users/u"}, "darwin") == Path(
            "/Users/u/Library/Application Support",
        )

    def test_windows(self) -> None:
        assert config_dir({"APPDATA": "C:/AppData"}, "win32") == Path("C:/AppData")

    def test_config_path(self) -> None:
        assert config_path({"XDG_CONFIG_HOME": "/xdg"}, "linux") == Path(
            "/xdg/alltheskills/alltheskills.toml",
        )


class TestFromToml:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = AllSkillsConfig.from_toml(tmp_path / "absent.toml")
        assert config == AllSkillsConfig()
        assert config.install_dir == ".alltheskills"
        assert config.max_concurrency == 10
        assert config.logging == LoggingConfig()

    def test_full_file(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "alltheskills.toml", textwrap.dedent("""\
            [general]
            install_dir = "/opt/skills"
            max_concurrency = 4
            unknown_key = "ignored"

            [logging]
            level = "DEBUG"
            json = true

            [[sources]]
            name = "claude"
            source_type = "claude"
            path = "/data/claude"
            priority = 10

            [[sources]]
            name = "scratch"
            enabled = false
        """))

        config = AllSkillsConfig.from_toml(path)

        assert config.install_dir == "/opt/skills"
        assert config.max_concurrency == 4
        assert config.logging == LoggingConfig(level="DEBUG", json=True)
        assert config.sources == [
            SourceSettings(
                name="claude", source_type="claude", path="/data/claude", priority=10,
            ),
            SourceSettings(name="scratch", source_type="local", enabled=False),
        ]

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "alltheskills.toml", "[general\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            AllSkillsConfig.from_toml(path)

    def test_source_without_name(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "alltheskills.toml", '[[sources]]\npath = "/x"\n')
        with pytest.raises(ConfigError, match="name"):
            AllSkillsConfig.from_toml(path)

    def test_sources_must_be_array(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "alltheskills.toml", '[sources]\nname = "x"\n')
        with pytest.raises(ConfigError, match="array of tables"):
            AllSkillsConfig.from_toml(path)


class TestLoad:
    def test_project_overrides_global(self, tmp_path: Path) -> None:
        env = {"XDG_CONFIG_HOME": str(tmp_path / "xdg")}
        write_file(tmp_path / "xdg" / "alltheskills" / "alltheskills.toml", textwrap.dedent("""\
            [general]
            install_dir = "/global/skills"
            max_concurrency = 2

            [logging]
            level = "INFO"
        """))
        project = tmp_path / "project"
        write_file(project / "alltheskills.toml", textwrap.dedent("""\
            [general]
            install_dir = "local-skills"
        """))

        config = AllSkillsConfig.load(project_dir=project, env=env)

        assert config.install_dir == "local-skills"
        assert config.max_concurrency == 2
        assert config.logging.level == "INFO"

    def test_nothing_on_disk(self, tmp_path: Path) -> None:
        env = {"XDG_CONFIG_HOME": str(tmp_path / "xdg")}
        assert AllSkillsConfig.load(project_dir=tmp_path, env=env) == AllSkillsConfig()


class TestEnabledSources:
    def test_priority_order_and_filtering(self) -> None:
        config = AllSkillsConfig(sources=[
            SourceSettings(name="low", source_type="local", priority=1),
            SourceSettings(name="off", source_type="local", priority=99, enabled=False),
            SourceSettings(name="high", source_type="local", priority=5),
            SourceSettings(name="tie", source_type="local", priority=1),
        ])
        assert [s.name for s in config.enabled_sources()] == ["high", "low", "tie"]
