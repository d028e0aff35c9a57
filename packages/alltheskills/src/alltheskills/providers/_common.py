"""Scaffolding shared by the per-platform providers.

Providers differ only in where they look and which manifest dialects
they understand.  Directory scanning, the log-and-skip policy for bad
skills, content lookup, local-copy installation and entity construction
live here so that each provider module is just its manifest chain.
"""
from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path  # noqa: TC003 - Path is used at runtime for path operations
from typing import TYPE_CHECKING, Any

from alltheskills_core.errors import (
    AllSkillsError,
    InstallError,
    SkillIoError,
    SkillNotFoundError,
)
from alltheskills_core.logging import get_logger

from alltheskills.manifest import (
    DESCRIPTION_LIMIT,
    first_content_line,
    metadata_from,
    opt_str,
    read_text,
)
from alltheskills.types import (
    LocalSource,
    Skill,
    SkillFormat,
    SkillMetadata,
    make_skill_id,
)
from alltheskills.utils import copy_dir_recursive

if TYPE_CHECKING:
    from alltheskills.types import SkillSource, SkillSourceType, SourceConfig

logger = get_logger("skills.providers")

SkillParser = Callable[[Path], "Skill | None"]


# ── Roots ────────────────────────────────────────────────────────────

def resolve_root(
    config: SourceConfig,
    root: Path | None,
    detect: Callable[[], Path | None],
) -> Path | None:
    """Pick the directory to scan: config override, explicit root, detection."""
    if config.path is not None:
        return config.path
    if root is not None:
        return root
    return detect()


def list_entries(root: Path) -> list[Path]:
    """Entries of *root* in name order; empty when *root* does not exist.

    Raises:
        SkillIoError: If *root* exists but cannot be listed.
    """
    if not root.exists():
        logger.debug("Skill root does not exist: %s", root)
        return []
    try:
        return sorted(root.iterdir())
    except OSError as exc:
        msg = f"Cannot read skill directory {root}: {exc}"
        raise SkillIoError(msg) from exc


# ── Scanning ─────────────────────────────────────────────────────────

def parse_or_skip(parse: SkillParser, path: Path, provider: str) -> Skill | None:
    """Run *parse* on one candidate, logging and dropping library errors."""
    try:
        return parse(path)
    except AllSkillsError as exc:
        logger.warning("%s: skipping %s: %s", provider, path, exc)
        return None


def scan_entries(
    root: Path,
    parse_dir: SkillParser,
    provider: str,
    parse_file: SkillParser | None = None,
) -> list[Skill]:
    """Parse every sub-directory of *root* (and plain files, if asked)."""
    skills: list[Skill] = []
    for entry in list_entries(root):
        if entry.is_dir():
            skill = parse_or_skip(parse_dir, entry, provider)
        elif parse_file is not None and entry.is_file():
            skill = parse_or_skip(parse_file, entry, provider)
        else:
            continue
        if skill is not None:
            skills.append(skill)
    return skills


async def scan_skill_dirs(
    root: Path | None,
    parse_dir: SkillParser,
    provider: str,
    parse_file: SkillParser | None = None,
) -> list[Skill]:
    """Async wrapper around :func:`scan_entries`; ``None`` root lists nothing."""
    if root is None:
        return []
    skills = await asyncio.to_thread(
        scan_entries, root, parse_dir, provider, parse_file,
    )
    logger.debug("%s: found %d skill(s) in %s", provider, len(skills), root)
    return skills


# ── Reading ──────────────────────────────────────────────────────────

def _read_first(path: Path, candidates: tuple[str, ...]) -> str:
    for name in candidates:
        candidate = path / name
        if candidate.is_file():
            return read_text(candidate)
    msg = f"No content found for skill at {path} (tried {', '.join(candidates)})"
    raise SkillNotFoundError(msg)


async def read_first_existing(path: Path, candidates: tuple[str, ...]) -> str:
    """Contents of the first candidate file present in *path*.

    Raises:
        SkillNotFoundError: If none of the candidates exist.
        SkillIoError: If the chosen file cannot be read.
    """
    return await asyncio.to_thread(_read_first, path, candidates)


# ── Installing ───────────────────────────────────────────────────────

def _copy_and_parse(
    provider: str, src: Path, target: Path, parse_dir: SkillParser,
) -> Skill:
    if not src.is_dir():
        msg = f"Source directory does not exist: {src}"
        raise InstallError(msg)
    try:
        copy_dir_recursive(src, target)
    except OSError as exc:
        msg = f"Failed to copy {src} to {target}: {exc}"
        raise InstallError(msg) from exc

    skill = parse_dir(target)
    if skill is None:
        msg = f"Failed to parse installed {provider} skill at {target}"
        raise InstallError(msg)
    logger.info("%s: installed '%s' into %s", provider, skill.name, target)
    return skill


async def install_local_copy(
    provider: str,
    source: SkillSource,
    target: Path,
    parse_dir: SkillParser,
) -> Skill:
    """Copy a local skill directory into *target* and parse the result.

    Raises:
        InstallError: For non-local sources, a missing source directory,
            a failed copy, or a copy that holds no recognisable skill.
    """
    if not isinstance(source, LocalSource):
        msg = f"{provider} only supports installing from a local path"
        raise InstallError(msg)
    return await asyncio.to_thread(
        _copy_and_parse, provider, source.path, target, parse_dir,
    )


# ── Entity construction ──────────────────────────────────────────────

def readme_of(path: Path) -> str | None:
    readme = path / "README.md"
    return str(readme) if readme.is_file() else None


def make_skill(
    source_type: SkillSourceType,
    path: Path,
    fmt: SkillFormat,
    *,
    name: str = "",
    description: str = "",
    version: str | None = None,
    skill_id: str | None = None,
    metadata: SkillMetadata | None = None,
) -> Skill:
    return Skill(
        id=skill_id or make_skill_id(name, path.name),
        name=name,
        description=description,
        source=LocalSource(path=path),
        source_type=source_type,
        path=path,
        format=fmt,
        version=version,
        metadata=metadata or SkillMetadata(),
    )


def manifest_skill(
    source_type: SkillSourceType,
    path: Path,
    data: dict[str, Any],
    fmt: SkillFormat,
    *,
    description: str = "",
    extra_tags: list[str] | None = None,
) -> Skill:
    """Entity from a structured manifest; absent fields default quietly.

    An explicit ``id`` in the manifest is kept; otherwise it is derived
    from ``name`` (or the directory name when the manifest has none).
    """
    return make_skill(
        source_type,
        path,
        fmt,
        name=opt_str(data, "name") or "",
        description=opt_str(data, "description") or description,
        version=opt_str(data, "version"),
        skill_id=opt_str(data, "id"),
        metadata=metadata_from(data, extra_tags, readme_of(path)),
    )


def markdown_skill(
    source_type: SkillSourceType,
    path: Path,
    description: str,
    tags: list[str] | None = None,
    fmt: SkillFormat = SkillFormat.GENERIC_MARKDOWN,
) -> Skill:
    """Entity for a directory known only by its name and a Markdown file."""
    return make_skill(
        source_type,
        path,
        fmt,
        name=path.name,
        description=description,
        metadata=SkillMetadata(tags=list(tags or []), readme=readme_of(path)),
    )


def described_by(text_path: Path, default: str) -> str:
    """First non-heading line of a Markdown file, or *default*."""
    line = first_content_line(read_text(text_path), limit=DESCRIPTION_LIMIT)
    return line or default
