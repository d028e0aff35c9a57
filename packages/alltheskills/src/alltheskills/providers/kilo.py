"""Kilo Code skills: ``~/.kilo/skills/<skill>/``, described in YAML."""
from __future__ import annotations

from typing import TYPE_CHECKING

from alltheskills.detect import KnownSources
from alltheskills.manifest import load_yaml, opt_str
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

_MANIFESTS = ("kilo.yaml", "kilo.yml")
_READ_CANDIDATES = ("instructions.md", "README.md", *_MANIFESTS)


class KiloProvider:
    """Chain: ``kilo.yaml`` -> ``kilo.yml`` -> ``instructions.md`` -> ``README.md``.

    A ``language`` key in the manifest becomes a ``lang:<language>`` tag.
    """

    name = "Kilo Code Skills"
    source_type = SourceType.KILO_CODE

    def __init__(
        self,
        root: Path | None = None,
        sources: KnownSources | None = None,
    ) -> None:
        self._root = root
        self._sources = sources

    def can_handle(self, source: SkillSource) -> bool:
        return isinstance(source, LocalSource) and "kilo" in str(source.path)

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.kilo_skills_dir)
        return await scan_skill_dirs(root, self.parse_skill_dir, self.name)

    async def read_skill(self, skill: Skill) -> str:
        return await read_first_existing(skill.path, _READ_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        return await install_local_copy(
            self.name, source, target, self.parse_skill_dir,
        )

    def parse_skill_dir(self, path: Path) -> Skill | None:
        for filename in _MANIFESTS:
            manifest = path / filename
            if manifest.is_file():
                data = load_yaml(manifest)
                language = opt_str(data, "language")
                return manifest_skill(
                    self.source_type,
                    path,
                    data,
                    SkillFormat.KILO_SKILL,
                    extra_tags=[f"lang:{language}"] if language else None,
                )

        instructions = path / "instructions.md"
        if instructions.is_file():
            return markdown_skill(
                self.source_type,
                path,
                described_by(instructions, "Kilo Code skill"),
                tags=["instructions"],
                fmt=SkillFormat.KILO_SKILL,
            )

        if (path / "README.md").is_file():
            return markdown_skill(
                self.source_type, path, "Kilo Code skill (markdown format)",
            )

        return None
