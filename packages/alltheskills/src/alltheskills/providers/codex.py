"""OpenAI Codex skills: ``~/.codex/skills/<skill>/``.

``codex.json`` may name a preferred ``model`` and a list of ``tools``;
both are surfaced as ``model:<name>`` / ``tool:<name>`` tags.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from alltheskills.detect import KnownSources
from alltheskills.manifest import as_str_list, load_json, opt_str
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

_READ_CANDIDATES = ("instructions.md", "README.md", "codex.json")


def _codex_tags(data: dict[str, Any]) -> list[str]:
    tags: list[str] = []
    model = opt_str(data, "model")
    if model:
        tags.append(f"model:{model}")
    tags.extend(f"tool:{tool}" for tool in as_str_list(data.get("tools")))
    return tags


class CodexProvider:
    name = "OpenAI Codex Skills"
    source_type = SourceType.OPENAI_CODEX

    def __init__(
        self,
        root: Path | None = None,
        sources: KnownSources | None = None,
    ) -> None:
        self._root = root
        self._sources = sources

    def can_handle(self, source: SkillSource) -> bool:
        return isinstance(source, LocalSource) and "codex" in str(source.path)

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.codex_skills_dir)
        return await scan_skill_dirs(root, self.parse_skill_dir, self.name)

    async def read_skill(self, skill: Skill) -> str:
        return await read_first_existing(skill.path, _READ_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        return await install_local_copy(
            self.name, source, target, self.parse_skill_dir,
        )

    def parse_skill_dir(self, path: Path) -> Skill | None:
        json_path = path / "codex.json"
        if json_path.is_file():
            data = load_json(json_path)
            return manifest_skill(
                self.source_type,
                path,
                data,
                SkillFormat.CODEX_SKILL,
                extra_tags=_codex_tags(data),
            )

        instructions = path / "instructions.md"
        if instructions.is_file():
            return markdown_skill(
                self.source_type,
                path,
                described_by(instructions, "OpenAI Codex skill"),
                tags=["instructions"],
                fmt=SkillFormat.CODEX_SKILL,
            )

        if (path / "README.md").is_file():
            return markdown_skill(
                self.source_type, path, "OpenAI Codex skill (markdown format)",
            )

        return None
