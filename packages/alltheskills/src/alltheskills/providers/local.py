"""Skills kept in an arbitrary local directory (default: the working directory)."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from alltheskills.manifest import load_json, load_markdown, metadata_from, opt_str
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
    from alltheskills.types import Skill, SkillSource, SourceConfig

_MANIFESTS = ("claude.json", "skill.json")
_READ_CANDIDATES = ("README.md", "SKILL.md", "skill.json", "claude.json")


class LocalProvider:
    """Generic provider for hand-managed skill folders.

    Understands the most common dialects without committing to a
    platform: ``claude.json``/``skill.json``, then ``SKILL.md``, then a
    bare ``README.md``.  It is also the installer used for plain local
    paths.
    """

    name = "Local Skills"
    source_type = SourceType.LOCAL

    def __init__(self, root: Path | None = None) -> None:
        self._root = root

    def can_handle(self, source: SkillSource) -> bool:
        return isinstance(source, LocalSource)

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        root = resolve_root(config, self._root, Path.cwd)
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
                return manifest_skill(
                    self.source_type, path, load_json(manifest), SkillFormat.GENERIC_JSON,
                )

        skill_md = path / "SKILL.md"
        if skill_md.is_file():
            meta, _body = load_markdown(skill_md)
            return make_skill(
                self.source_type,
                path,
                SkillFormat.GENERIC_MARKDOWN,
                name=opt_str(meta, "name") or path.name,
                description=opt_str(meta, "description") or "Local skill",
                version=opt_str(meta, "version"),
                metadata=metadata_from(meta, readme=readme_of(path)),
            )

        if (path / "README.md").is_file():
            return markdown_skill(self.source_type, path, "Local skill")

        return None
