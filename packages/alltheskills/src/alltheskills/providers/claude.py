"""Claude skills: ``~/.claude/skills/<skill>/``.

A skill directory is recognised by, in order of preference:

1. ``claude.json``: structured manifest.
2. ``SKILL.md``: Markdown with optional YAML frontmatter
   (``name``, ``description``, ``version``, ``tags``...).
3. ``skill.md``: older lowercase instructions file.
4. ``README.md``: bare Markdown.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from alltheskills.detect import KnownSources
from alltheskills.manifest import (
    DESCRIPTION_LIMIT,
    first_content_line,
    load_json,
    load_markdown,
    metadata_from,
    opt_str,
)
from alltheskills.providers._common import (
    install_local_copy,
    make_skill,
    manifest_skill,
    markdown_skill,
    read_first_existing,
    readme_of,
    resolve_root,
    scan_skill_dirs,
)
from alltheskills.types import LocalSource, SkillFormat, SourceType

if TYPE_CHECKING:
    from pathlib import Path

    from alltheskills.types import Skill, SkillSource, SourceConfig

_READ_CANDIDATES = ("SKILL.md", "skill.md", "README.md", "claude.json")
_MARKDOWN_DESCRIPTION = "Claude skill (markdown format)"


class ClaudeProvider:
    """Provider for Claude skill directories."""

    name = "Claude Skills"
    source_type = SourceType.CLAUDE

    def __init__(
        self,
        root: Path | None = None,
        sources: KnownSources | None = None,
    ) -> None:
        self._root = root
        self._sources = sources

    def can_handle(self, source: SkillSource) -> bool:
        return isinstance(source, LocalSource) and "claude" in str(source.path)

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.claude_skills_dir)
        return await scan_skill_dirs(root, self.parse_skill_dir, self.name)

    async def read_skill(self, skill: Skill) -> str:
        return await read_first_existing(skill.path, _READ_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        return await install_local_copy(
            self.name, source, target, self.parse_skill_dir,
        )

    def parse_skill_dir(self, path: Path) -> Skill | None:
        json_path = path / "claude.json"
        if json_path.is_file():
            return manifest_skill(
                self.source_type, path, load_json(json_path), SkillFormat.CLAUDE_SKILL,
            )

        skill_md = path / "SKILL.md"
        if skill_md.is_file():
            return self._parse_skill_md(path, skill_md)

        if (path / "skill.md").is_file():
            return markdown_skill(self.source_type, path, _MARKDOWN_DESCRIPTION)

        if (path / "README.md").is_file():
            return markdown_skill(self.source_type, path, _MARKDOWN_DESCRIPTION)

        return None

    def _parse_skill_md(self, path: Path, skill_md: Path) -> Skill:
        meta, body = load_markdown(skill_md)
        if not meta:
            description = first_content_line(body, limit=DESCRIPTION_LIMIT)
            return markdown_skill(
                self.source_type, path, description or _MARKDOWN_DESCRIPTION,
            )

        description = (
            opt_str(meta, "description")
            or first_content_line(body, limit=DESCRIPTION_LIMIT)
            or ""
        )
        return make_skill(
            self.source_type,
            path,
            SkillFormat.CLAUDE_SKILL,
            name=opt_str(meta, "name") or path.name,
            description=description,
            version=opt_str(meta, "version"),
            metadata=metadata_from(meta, readme=readme_of(path)),
        )
