"""Moltbot (formerly ClawdBot) skills.

Skills live in ``~/.moltbot/skills``; installs that predate the rename
keep theirs in ``~/.clawdbot/skills``, which is scanned as well.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from alltheskills.detect import KnownSources
from alltheskills.manifest import load_json
from alltheskills.providers._common import (
    described_by,
    install_local_copy,
    manifest_skill,
    markdown_skill,
    read_first_existing,
    resolve_root,
    scan_skill_dirs,
)
from alltheskills.types import LocalSource, SkillFormat, SourceType

if TYPE_CHECKING:
    from pathlib import Path

    from alltheskills.types import Skill, SkillSource, SourceConfig

_READ_CANDIDATES = ("SKILL.md", "README.md", "manifest.json")


def _command_tags(data: dict[str, Any]) -> list[str]:
    commands = data.get("commands")
    if not isinstance(commands, list):
        return []
    return [
        f"cmd:{cmd['name']}"
        for cmd in commands
        if isinstance(cmd, dict) and isinstance(cmd.get("name"), str)
    ]


class MoltbotProvider:
    name = "Moltbot Skills"
    source_type = SourceType.MOLTBOT

    def __init__(
        self,
        root: Path | None = None,
        sources: KnownSources | None = None,
        include_legacy: bool = True,
    ) -> None:
        self._root = root
        self._sources = sources
        self._include_legacy = include_legacy

    def can_handle(self, source: SkillSource) -> bool:
        if not isinstance(source, LocalSource):
            return False
        text = str(source.path)
        return "moltbot" in text or "clawdbot" in text

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.moltbot_skills_dir)
        skills = await scan_skill_dirs(root, self.parse_skill_dir, self.name)

        if self._include_legacy:
            legacy = sources.clawdbot_legacy_dir()
            if legacy is not None and legacy != root:
                skills.extend(
                    await scan_skill_dirs(legacy, self.parse_skill_dir, self.name)
                )
        return skills

    async def read_skill(self, skill: Skill) -> str:
        return await read_first_existing(skill.path, _READ_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        return await install_local_copy(
            self.name, source, target, self.parse_skill_dir,
        )

    def parse_skill_dir(self, path: Path) -> Skill | None:
        manifest = path / "manifest.json"
        if manifest.is_file():
            data = load_json(manifest)
            return manifest_skill(
                self.source_type,
                path,
                data,
                SkillFormat.MOLTBOT_SKILL,
                extra_tags=_command_tags(data),
            )

        skill_md = path / "SKILL.md"
        if skill_md.is_file():
            return markdown_skill(
                self.source_type,
                path,
                described_by(skill_md, "Moltbot skill"),
                tags=["skill-md"],
                fmt=SkillFormat.MOLTBOT_SKILL,
            )

        if (path / "README.md").is_file():
            return markdown_skill(
                self.source_type, path, "Moltbot skill (markdown format)",
            )

        return None
