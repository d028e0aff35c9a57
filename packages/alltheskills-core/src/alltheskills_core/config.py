from __future__ import annotations

import os
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from alltheskills_core.errors import ConfigError

CONFIG_FILENAME = "alltheskills.toml"


def _load_toml(path: Path) -> dict:
    """Load a TOML file, returning empty dict if missing.

    A file that exists but is not valid TOML is a configuration error,
    not something to paper over with defaults.
    """
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    except OSError as exc:
        msg = f"Cannot read config file {path}: {exc}"
        raise ConfigError(msg) from exc


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base (1 level deep for TOML sections)."""
    merged = dict(base)
    for key, val in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(val, dict)
        ):
            merged[key] = {**merged[key], **val}
        else:
            merged[key] = val
    return merged


def config_dir(
    env: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> Path:
    """Platform-appropriate base directory for configuration files."""
    env = os.environ if env is None else env
    platform = sys.platform if platform is None else platform

    if platform == "darwin":
        home = env.get("HOME")
        if home:
            return Path(home) / "Library" / "Application Support"
        return Path("/Library/Application Support")
    if platform.startswith("win"):
        appdata = env.get("APPDATA")
        return Path(appdata) if appdata else Path(env.get("TEMP", "."))
    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    home = env.get("HOME")
    return Path(home) / ".config" if home else Path(".config")


def config_path(
    env: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> Path:
    """Location of the global alltheskills.toml."""
    return config_dir(env, platform) / "alltheskills" / CONFIG_FILENAME


@dataclass(frozen=True, slots=True)
class SourceSettings:
    """One ``[[sources]]`` entry as written in alltheskills.toml."""
    name: str
    source_type: str
    path: str | None = None
    enabled: bool = True
    scope: str = "user"
    priority: int = 0


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = "WARNING"
    json: bool = False


@dataclass(frozen=True, slots=True)
class AllSkillsConfig:
    """Top-level configuration, parsed from alltheskills.toml."""
    version: int = 1
    default_scope: str = "user"
    install_dir: str = ".alltheskills"
    cache_dir: str = ".alltheskills/cache"
    max_concurrency: int = 10
    sources: list[SourceSettings] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_toml(
        cls, path: Path | str = CONFIG_FILENAME
    ) -> AllSkillsConfig:
        path = Path(path)
        raw = _load_toml(path)
        return cls._from_raw(raw)

    @classmethod
    def load(
        cls,
        project_dir: Path | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> AllSkillsConfig:
        """Load config with global → project layering.

        Resolution order (later wins):
        1. Built-in defaults
        2. <config dir>/alltheskills/alltheskills.toml (global)
        3. ./alltheskills.toml (project)
        """
        global_path = config_path(env)

        project_dir = (
            Path.cwd() if project_dir is None else Path(project_dir)
        )
        project_path = project_dir / CONFIG_FILENAME

        global_raw = _load_toml(global_path)
        project_raw = _load_toml(project_path)
        merged = _deep_merge(global_raw, project_raw)

        return cls._from_raw(merged)

    @classmethod
    def _from_raw(cls, raw: dict) -> AllSkillsConfig:
        """Build AllSkillsConfig from a raw TOML dict."""
        general = raw.get("general", {})
        logging_raw = raw.get("logging", {})
        sources_raw = raw.get("sources", [])

        def _pick(section: dict, dc: type) -> dict:
            fields = dc.__dataclass_fields__
            return {
                k: v for k, v in section.items() if k in fields
            }

        if not isinstance(sources_raw, list):
            msg = "'sources' must be an array of tables ([[sources]])"
            raise ConfigError(msg)

        sources: list[SourceSettings] = []
        for entry in sources_raw:
            if not isinstance(entry, dict) or "name" not in entry:
                msg = f"Source entry needs at least a 'name': {entry!r}"
                raise ConfigError(msg)
            picked = _pick(entry, SourceSettings)
            picked.setdefault("source_type", "local")
            sources.append(SourceSettings(**picked))

        top = _pick(general, cls)
        top.pop("sources", None)
        top.pop("logging", None)

        return cls(
            **top,
            sources=sources,
            logging=LoggingConfig(**_pick(logging_raw, LoggingConfig)),
        )

    def enabled_sources(self) -> list[SourceSettings]:
        """Enabled sources, highest priority first (stable for ties)."""
        enabled = [s for s in self.sources if s.enabled]
        return sorted(enabled, key=lambda s: -s.priority)
