"""Roo Code skills: ``~/.roo/skills/<skill>/``.

``.roomodes`` is Roo's JSON file of custom modes; a directory that only
has one is listed under its directory name with a ``roo-mode`` tag.
Installing is not supported: Roo loads modes from its own settings.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from alltheskills_core.errors import InstallError

from alltheskills.detect import KnownSources
from alltheskills.manifest import load_json, opt_str
from alltheskills.providers._common import (
    make_skill,
    manifest_skill,
    markdown_skill,
    read_first_existing,
    readme_of,
    resolve_root,
    scan_skill_dirs,
)
from alltheskills.types import LocalSource, SkillFormat, SkillMetadata, SourceType

if TYPE_CHECKING:
    from pathlib import Path

    from alltheskills.types import Skill, SkillSource, SourceConfig

_READ_CANDIDATES = ("README.md", ".roomodes", "roo.json")


class RooProvider:
    name = "Roo Code Skills"
    source_type = SourceType.ROO_CODE

    def __init__(
        self,
        root: Path | None = None,
        sources: KnownSources | None = None,
    ) -> None:
        self._root = root
        self._sources = sources

    def can_handle(self, source: SkillSource) -> bool:
        return isinstance(source, LocalSource) and "roo" in str(source.path)

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.roo_skills_dir)
        return await scan_skill_dirs(root, self.parse_skill_dir, self.name)

    async def read_skill(self, skill: Skill) -> str:
        return await read_first_existing(skill.path, _READ_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        msg = "Install not supported for Roo Code skills; add the mode in Roo's settings"
        raise InstallError(msg)

    def parse_skill_dir(self, path: Path) -> Skill | None:
        json_path = path / "roo.json"
        if json_path.is_file():
            return manifest_skill(
                self.source_type, path, load_json(json_path), SkillFormat.ROO_SKILL,
            )

        modes_path = path / ".roomodes"
        if modes_path.is_file():
            data = load_json(modes_path)
            return make_skill(
                self.source_type,
                path,
                SkillFormat.ROO_SKILL,
                name=path.name,
                description=opt_str(data, "description") or "Roo Code custom mode",
                metadata=SkillMetadata(
                    author=opt_str(data, "author"),
                    tags=["roo-mode"],
                    readme=readme_of(path),
                ),
            )

        if (path / "README.md").is_file():
            return markdown_skill(
                self.source_type, path, "Roo Code skill (markdown format)",
            )

        return None
