"""Skills fetched from GitHub repositories.

Nothing is listed locally: a GitHub skill exists for this provider only
while it is being installed.  :meth:`GitHubProvider.install` shells out
to ``git clone`` and parses the checkout (or its ``subdir``) with the
same chain the local provider uses.
"""
from __future__ import annotations

import asyncio
import dataclasses
import re
from typing import TYPE_CHECKING

from alltheskills_core.errors import InstallError
from alltheskills_core.logging import get_logger

from alltheskills.manifest import load_json, load_markdown, metadata_from, opt_str
from alltheskills.providers._common import (
    make_skill,
    manifest_skill,
    markdown_skill,
    read_first_existing,
    readme_of,
)
from alltheskills.types import GitHubSource, SkillFormat, SourceType

if TYPE_CHECKING:
    from pathlib import Path

    from alltheskills.types import Skill, SkillSource, SourceConfig

logger = get_logger("skills.github")

_READ_CANDIDATES = ("README.md", "SKILL.md", "skill.json", "claude.json")
_MANIFESTS = ("skill.json", "claude.json")

# Branch names handed to git; rejects anything that could pass as a flag.
_SAFE_REF = re.compile(r"^[a-zA-Z0-9_./@^~:][a-zA-Z0-9_./@^~:\-]{0,254}$")


def _validate_branch(branch: str) -> str:
    if branch.startswith("-") or not _SAFE_REF.match(branch):
        msg = f"Invalid git branch: {branch!r}"
        raise InstallError(msg)
    return branch


async def _git(args: list[str], cwd: Path | None = None) -> str:
    """Run a git command and return stdout; failures become InstallError."""
    try:
        proc = await asyncio.create_subprocess_exec(
            "git", *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    except FileNotFoundError as exc:
        msg = "git is not installed or not on PATH"
        raise InstallError(msg) from exc

    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        msg = f"git {' '.join(args)} failed: {stderr.decode(errors='replace').strip()}"
        raise InstallError(msg)
    return stdout.decode("utf-8", errors="replace")


class GitHubProvider:
    name = "GitHub"
    source_type = SourceType.GITHUB

    def can_handle(self, source: SkillSource) -> bool:
        return isinstance(source, GitHubSource)

    async def list_skills(self, config: SourceConfig) -> list[Skill]:
        return []

    async def read_skill(self, skill: Skill) -> str:
        return await read_first_existing(skill.path, _READ_CANDIDATES)

    async def install(self, source: SkillSource, target: Path) -> Skill:
        """Clone ``source`` into *target* and parse the resulting skill.

        Raises:
            InstallError: For non-GitHub sources, a failed clone, or a
                checkout without a recognisable skill.
        """
        if not isinstance(source, GitHubSource):
            msg = "GitHub provider only supports GitHub sources"
            raise InstallError(msg)

        args = ["clone", "--depth", "1"]
        if source.branch:
            args += ["--branch", _validate_branch(source.branch)]
        args += ["--", source.url, str(target)]

        logger.info("Cloning %s into %s", source.url, target)
        await _git(args)

        skill_dir = target / source.subdir if source.subdir else target
        skill = await asyncio.to_thread(self.parse_skill_dir, skill_dir, source)
        if skill is None:
            msg = f"No skill manifest or README found in {source.url}"
            raise InstallError(msg)
        return skill

    def parse_skill_dir(self, path: Path, source: GitHubSource) -> Skill | None:
        skill = self._parse(path)
        if skill is None:
            return None
        metadata = skill.metadata
        if metadata.repository is None:
            metadata = dataclasses.replace(metadata, repository=source.url)
        return dataclasses.replace(skill, source=source, metadata=metadata)

    def _parse(self, path: Path) -> Skill | None:
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
                description=opt_str(meta, "description") or "GitHub skill",
                version=opt_str(meta, "version"),
                metadata=metadata_from(meta, readme=readme_of(path)),
            )

        if (path / "README.md").is_file():
            return markdown_skill(self.source_type, path, "GitHub skill")

        return None
