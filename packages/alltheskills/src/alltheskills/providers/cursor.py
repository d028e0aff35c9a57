"""Cursor rules.

Cursor keeps instructions as plain rules files rather than skill
directories:

* ``~/.cursor/rules/``: global rules.  Each file is one skill; a
  sub-directory is a skill if it holds ``.cursorrules``, ``cursor.json``
  or ``README.md``.
* ``<project>/.cursorrules`` and ``<project>/.cursor/rules/*``:
  project-level rules, tagged ``project-level``.

A skill built from a rules file points ``path`` at the file itself.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from alltheskills_core.logging import get_logger

from alltheskills.detect import KnownSources
from alltheskills.manifest import (
    DESCRIPTION_LIMIT,
    first_content_line,
    load_json,
    read_text,
)
from alltheskills.providers._common import (
    install_local_copy,
    make_skill,
    manifest_skill,
    markdown_skill,
    parse_or_skip,
    read_first_existing,
    resolve_root,
    scan_skill_dirs,
)
from alltheskills.types import (
    LocalSource,
    SkillFormat,
    SkillMetadata,
    SourceType,
    make_skill_id,
)

if TYPE_CHECKING:
    from alltheskills.types import Skill, SkillSource, SourceConfig

logger = get_logger("skills.cursor")

_DIR_CANDIDATES = (".cursorrules", "cursor.json", "README.md")


class CursorProvider:
    name = "Cursor Rules"
    source_type = SourceType.CURSOR

    def __init__(
        self,
        root: Path | None = None,
        sources: KnownSources | None = None,
        project_dir: Path | None = None,
        include_project: bool = True,
    ) -> None:
        self._root = root
        self._sources = sources
        self._project_dir = project_dir
        self._include_project = include_project

    def can_handle(self, source: SkillSource) -> bool:
        if not isinstance(source, LocalSource):
            return False
        return "cursor" in str(source.path) or source.path.name.endswith(".cursorrules")

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.cursor_rules_dir)
        skills = await scan_skill_dirs(
            root, self.parse_skill_dir, self.name, parse_file=self._parse_global_rules,
        )
        if self._include_project:
            project_dir = self._project_dir or Path.cwd()
            skills.extend(await asyncio.to_thread(self._project_rules, project_dir))
        return skills

    async def read_skill(self, skill: Skill) -> str:
        if skill.path.is_file():
            return await asyncio.to_thread(read_text, skill.path)
        return await read_first_existing(skill.path, _DIR_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        return await install_local_copy(
            self.name, source, target, self.parse_skill_dir,
        )

    def parse_skill_dir(self, path: Path) -> Skill | None:
        rules = path / ".cursorrules"
        if rules.is_file():
            return self.parse_rules_file(rules, name=path.name)

        json_path = path / "cursor.json"
        if json_path.is_file():
            return manifest_skill(
                self.source_type,
                path,
                load_json(json_path),
                SkillFormat.CURSOR_RULES,
                description="Cursor configuration",
                extra_tags=["cursor", "json-config"],
            )

        if (path / "README.md").is_file():
            return markdown_skill(
                self.source_type, path, "Cursor skill (markdown format)", tags=["cursor"],
            )

        return None

    def parse_rules_file(
        self, path: Path, project_level: bool = False, name: str | None = None,
    ) -> Skill:
        """One rules file as a skill named after its stem (or *name*)."""
        description = first_content_line(
            read_text(path), skip_headings=False, limit=DESCRIPTION_LIMIT,
        )
        name = name or path.stem or "cursor-rules"
        return make_skill(
            self.source_type,
            path,
            SkillFormat.CURSOR_RULES,
            name=name,
            description=description or "Cursor custom rules",
            skill_id=make_skill_id(name).replace(".", "-").strip("-"),
            metadata=SkillMetadata(
                tags=["cursor", "project-level" if project_level else "global"],
            ),
        )

    def _parse_global_rules(self, path: Path) -> Skill:
        return self.parse_rules_file(path)

    def _parse_project_rules(self, path: Path) -> Skill:
        return self.parse_rules_file(path, project_level=True)

    def _project_rules(self, project_dir: Path) -> list[Skill]:
        candidates: list[Path] = []
        dotfile = project_dir / ".cursorrules"
        if dotfile.is_file():
            candidates.append(dotfile)
        rules_dir = project_dir / ".cursor" / "rules"
        if rules_dir.is_dir():
            try:
                candidates.extend(p for p in sorted(rules_dir.iterdir()) if p.is_file())
            except OSError as exc:
                logger.warning("%s: cannot read %s: %s", self.name, rules_dir, exc)

        skills: list[Skill] = []
        for candidate in candidates:
            skill = parse_or_skip(self._parse_project_rules, candidate, self.name)
            if skill is not None:
                skills.append(skill)
        return skills
