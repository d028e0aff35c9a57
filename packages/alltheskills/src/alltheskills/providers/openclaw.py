"""OpenClaw skills: ``~/.openclaw/skills/<skill>/skill.json``."""
from __future__ import annotations

from typing import TYPE_CHECKING

from alltheskills.detect import KnownSources
from alltheskills.manifest import load_json
from alltheskills.providers._common import (
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

_READ_CANDIDATES = ("README.md", "skill.json")


class OpenClawProvider:
    name = "OpenClaw Skills"
    source_type = SourceType.OPENCLAW

    def __init__(
        self,
        root: Path | None = None,
        sources: KnownSources | None = None,
    ) -> None:
        self._root = root
        self._sources = sources

    def can_handle(self, source: SkillSource) -> bool:
        return isinstance(source, LocalSource) and "openclaw" in str(source.path)

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.openclaw_skills_dir)
        return await scan_skill_dirs(root, self.parse_skill_dir, self.name)

    async def read_skill(self, skill: Skill) -> str:
        return await read_first_existing(skill.path, _READ_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        return await install_local_copy(
            self.name, source, target, self.parse_skill_dir,
        )

    def parse_skill_dir(self, path: Path) -> Skill | None:
        json_path = path / "skill.json"
        if json_path.is_file():
            return manifest_skill(
                self.source_type,
                path,
                load_json(json_path),
                SkillFormat.OPENCLAW_SKILL,
            )
        if (path / "README.md").is_file():
            return markdown_skill(self.source_type, path, "OpenClaw skill")
        return None
