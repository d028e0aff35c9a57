"""Cloudflare Workers AI skills, tagged ``CustomSource("cloudflare")``.

A worker directory is recognised by ``worker.js``/``worker.ts`` or by a
``wrangler.toml``.  Display names turn ``-`` and ``_`` into spaces.
Workers are deployed with wrangler, so :meth:`install` always fails.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from alltheskills_core.errors import InstallError

from alltheskills.detect import KnownSources
from alltheskills.manifest import load_toml, opt_str
from alltheskills.providers._common import (
    make_skill,
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
    make_skill_id,
)

if TYPE_CHECKING:
    from pathlib import Path

    from alltheskills.types import Skill, SkillSource, SourceConfig

CLOUDFLARE = CustomSource("cloudflare")

WORKERS_DOCS = "https://developers.cloudflare.com/workers/"
_DEFAULT_DESCRIPTION = "Cloudflare Workers AI skill"
_WORKER_FILES = ("worker.js", "worker.ts")
_READ_CANDIDATES = ("README.md", *_WORKER_FILES, "wrangler.toml")


class CloudflareProvider:
    name = "Cloudflare Workers AI"
    source_type = CLOUDFLARE

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
        return "cloudflare" in text or "workers" in text

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        if config.source_type != self.source_type:
            return []
        sources = self._sources or KnownSources()
        root = resolve_root(config, self._root, sources.cloudflare_skills_dir)
        return await scan_skill_dirs(root, self.parse_skill_dir, self.name)

    async def read_skill(self, skill: Skill) -> str:
        return await read_first_existing(skill.path, _READ_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        msg = "Install via wrangler CLI: npx wrangler deploy"
        raise InstallError(msg)

    def parse_skill_dir(self, path: Path) -> Skill | None:
        has_worker = any((path / name).is_file() for name in _WORKER_FILES)
        wrangler = path / "wrangler.toml"
        has_wrangler = wrangler.is_file()
        if not (has_worker or has_wrangler):
            return None

        config: dict[str, Any] = load_toml(wrangler) if has_wrangler else {}
        # A bare worker is named after its directory, not wrangler's name.
        raw_name = (None if has_worker else opt_str(config, "name")) or path.name

        return make_skill(
            self.source_type,
            path,
            SkillFormat.UNKNOWN,
            name=raw_name.replace("-", " ").replace("_", " "),
            description=opt_str(config, "description") or _DEFAULT_DESCRIPTION,
            skill_id=make_skill_id(raw_name),
            metadata=SkillMetadata(homepage=WORKERS_DOCS, readme=readme_of(path)),
        )
