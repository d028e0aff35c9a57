"""Skill entity model shared by every provider, the reader and the resolver."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from alltheskills_core.config import SourceSettings


# ── Source Types ─────────────────────────────────────────────────────

class SourceType(enum.Enum):
    """Known platforms a skill can come from."""
    CLAUDE = "claude"
    CLINE = "cline"
    CURSOR = "cursor"
    OPENCLAW = "openclaw"
    ROO_CODE = "roo-code"
    OPENAI_CODEX = "openai-codex"
    KILO_CODE = "kilo-code"
    MOLTBOT = "moltbot"
    GITHUB = "github"
    LOCAL = "local"


@dataclass(frozen=True, slots=True)
class CustomSource:
    """Escape hatch for platforms outside the known set."""
    name: str

    @property
    def value(self) -> str:
        return self.name


SkillSourceType = SourceType | CustomSource

_SOURCE_ALIASES: dict[str, SourceType] = {
    "claude": SourceType.CLAUDE,
    "cline": SourceType.CLINE,
    "cursor": SourceType.CURSOR,
    "openclaw": SourceType.OPENCLAW,
    "roo": SourceType.ROO_CODE,
    "roocode": SourceType.ROO_CODE,
    "roo-code": SourceType.ROO_CODE,
    "codex": SourceType.OPENAI_CODEX,
    "openai": SourceType.OPENAI_CODEX,
    "openai-codex": SourceType.OPENAI_CODEX,
    "kilo": SourceType.KILO_CODE,
    "kilocode": SourceType.KILO_CODE,
    "kilo-code": SourceType.KILO_CODE,
    "moltbot": SourceType.MOLTBOT,
    "clawdbot": SourceType.MOLTBOT,
    "github": SourceType.GITHUB,
    "local": SourceType.LOCAL,
}


def parse_source_type(text: str) -> SkillSourceType:
    """Map a config/CLI spelling to a source type.

    Unknown names become a :class:`CustomSource` rather than an error.
    """
    key = text.strip().lower()
    return _SOURCE_ALIASES.get(key, CustomSource(key))


class SkillFormat(enum.Enum):
    """Which manifest dialect a skill was parsed from."""
    CLAUDE_SKILL = "claude-skill"
    CLAUDE_PLUGIN = "claude-plugin"
    CLINE_SKILL = "cline-skill"
    CURSOR_RULES = "cursor-rules"
    OPENCLAW_SKILL = "openclaw-skill"
    ROO_SKILL = "roo-skill"
    CODEX_SKILL = "codex-skill"
    KILO_SKILL = "kilo-skill"
    MOLTBOT_SKILL = "moltbot-skill"
    GENERIC_MARKDOWN = "generic-markdown"
    GENERIC_JSON = "generic-json"
    UNKNOWN = "unknown"


class SkillScope(enum.Enum):
    GLOBAL = "global"
    USER = "user"
    PROJECT = "project"

    @classmethod
    def parse(cls, text: str) -> SkillScope:
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.USER


# ── Skill Sources ────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class LocalSource:
    path: Path


@dataclass(frozen=True, slots=True)
class GitHubSource:
    owner: str
    repo: str
    subdir: str | None = None
    branch: str | None = None

    @property
    def url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class RemoteSource:
    url: str
    headers: tuple[tuple[str, str], ...] = ()


SkillSource = LocalSource | GitHubSource | RemoteSource

_GITHUB_PREFIX = "https://github.com/"


def parse_source(text: str) -> SkillSource:
    """Interpret a user-supplied install location.

    ``https://github.com/<owner>/<repo>[/<subdir>...]`` becomes a
    :class:`GitHubSource`, any other ``http(s)://`` URL a
    :class:`RemoteSource`, and everything else a local path.
    """
    if text.startswith(_GITHUB_PREFIX):
        parts = [p for p in text[len(_GITHUB_PREFIX):].split("/") if p]
        if len(parts) < 2:
            msg = f"Invalid GitHub URL: {text}"
            raise ValueError(msg)
        repo = parts[1].removesuffix(".git")
        subdir = "/".join(parts[2:]) or None
        return GitHubSource(owner=parts[0], repo=repo, subdir=subdir)
    if text.startswith(("http://", "https://")):
        return RemoteSource(url=text)
    return LocalSource(path=Path(text).expanduser())


# ── Source Configuration ─────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class SourceConfig:
    """Resolved configuration handed to ``SkillProvider.list_skills``.

    ``enabled``, ``scope`` and ``priority`` are carried through for
    collaborators; providers do not filter or order on them.  ``path``
    overrides the provider's own root directory when set.
    """
    name: str
    source_type: SkillSourceType
    enabled: bool = True
    scope: SkillScope = SkillScope.USER
    priority: int = 0
    path: Path | None = None

    @classmethod
    def from_settings(cls, settings: SourceSettings) -> SourceConfig:
        return cls(
            name=settings.name,
            source_type=parse_source_type(settings.source_type),
            enabled=settings.enabled,
            scope=SkillScope.parse(settings.scope),
            priority=settings.priority,
            path=Path(settings.path).expanduser() if settings.path else None,
        )


# ── Skill Entity ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class SkillDependency:
    """A declared dependency on another skill."""
    name: str
    version_req: str | None = None
    source: str | None = None
    optional: bool = False


@dataclass(frozen=True, slots=True)
class SkillMetadata:
    author: str | None = None
    tags: list[str] = field(default_factory=list)
    homepage: str | None = None
    repository: str | None = None
    license: str | None = None
    readme: str | None = None
    requirements: list[str] = field(default_factory=list)
    dependencies: list[SkillDependency] = field(default_factory=list)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def make_skill_id(name: str, fallback: str = "") -> str:
    """Lowercase-hyphenated id derived from *name* (or *fallback* when empty)."""
    base = name.strip() or fallback.strip()
    return base.lower().replace(" ", "-")


@dataclass(frozen=True, slots=True)
class Skill:
    """A normalized skill record, built fresh on every listing.

    ``path`` is a reference to where the files live right now; nothing
    here owns or locks them.
    """

    id: str
    name: str
    description: str
    source: SkillSource
    source_type: SkillSourceType
    path: Path
    format: SkillFormat
    version: str | None = None
    installed_at: datetime = field(default_factory=_utcnow)
    metadata: SkillMetadata = field(default_factory=SkillMetadata)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serialisable view of the skill."""
        src = self.source
        source: dict[str, Any]
        if isinstance(src, LocalSource):
            source = {"kind": "local", "path": str(src.path)}
        elif isinstance(src, GitHubSource):
            source = {
                "kind": "github",
                "owner": src.owner,
                "repo": src.repo,
                "subdir": src.subdir,
                "branch": src.branch,
            }
        else:
            source = {"kind": "remote", "url": src.url, "headers": dict(src.headers)}

        meta = self.metadata
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "source": source,
            "source_type": self.source_type.value,
            "path": str(self.path),
            "installed_at": self.installed_at.isoformat(),
            "format": self.format.value,
            "metadata": {
                "author": meta.author,
                "tags": list(meta.tags),
                "homepage": meta.homepage,
                "repository": meta.repository,
                "license": meta.license,
                "readme": meta.readme,
                "requirements": list(meta.requirements),
                "dependencies": [
                    {
                        "name": dep.name,
                        "version_req": dep.version_req,
                        "source": dep.source,
                        "optional": dep.optional,
                    }
                    for dep in meta.dependencies
                ],
            },
        }
