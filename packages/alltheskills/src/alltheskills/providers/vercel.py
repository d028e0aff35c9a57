"""Vercel AI SDK skills.

Vercel is not one of the built-in source types; its skills are tagged
``CustomSource("vercel")``.  A skill directory carries either a
``skill.json`` manifest or an ``ai.config.json`` SDK configuration.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from alltheskills.detect import KnownSources
from alltheskills.manifest import load_json, opt_str
from alltheskills.providers._common import (
    install_local_copy,
    make_skill,
    manifest_skill,
    read_first_existing,
    readme_of,
    resolve_root,
    scan_skill_dirs,
)
from alltheskills.types import (
    CustomSource,
    LocalSource,
    SkillFormat,
    SkillMetadata,
)

if TYPE_CHECKING:
    from pathlib import Path

    from alltheskills.types import Skill, SkillSource, SourceConfig

VERCEL = CustomSource("vercel")

_READ_CANDIDATES = ("README.md", "skill.json", "ai.config.json")


class VercelProvider:
    name = "Vercel AI Skills"
    source_type = VERCEL

    def __init__(
        self,
        root: Path | None = None,
        sources: KnownSources | None = None,
    ) -> None:
        self._root = root
        self._sources = sources

    def can_handle(self, source: SkillSource) -> bool:
        if not isinstance(source, LocalSource):
            return False
        text = str(source.path)
        return "vercel" in text or ".ai" in text

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.vercel_skills_dir)
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
                self.source_type, path, load_json(json_path), SkillFormat.GENERIC_JSON,
            )

        config_path = path / "ai.config.json"
        if config_path.is_file():
            data = load_json(config_path)
            return make_skill(
                self.source_type,
                path,
                SkillFormat.GENERIC_JSON,
                name=opt_str(data, "name") or path.name,
                description=opt_str(data, "description") or "Vercel AI skill",
                version=opt_str(data, "version"),
                skill_id=path.name.lower().replace(" ", "-"),
                metadata=SkillMetadata(readme=readme_of(path)),
            )

        return None
