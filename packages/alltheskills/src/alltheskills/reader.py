"""Aggregate skills across every registered provider."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from alltheskills_core.errors import SkillNotFoundError
from alltheskills_core.logging import get_logger

from alltheskills.providers import (
    ClaudeProvider,
    ClineProvider,
    CloudflareProvider,
    CodexProvider,
    CursorProvider,
    KiloProvider,
    LocalProvider,
    MoltbotProvider,
    OpenClawProvider,
    RooProvider,
    VercelProvider,
)
from alltheskills.types import SkillScope, SourceConfig, parse_source_type

if TYPE_CHECKING:
    from collections.abc import Callable

    from alltheskills_core.config import AllSkillsConfig

    from alltheskills.detect import KnownSources
    from alltheskills.providers import SkillProvider
    from alltheskills.types import Skill

logger = get_logger("skills.reader")

DEFAULT_MAX_CONCURRENCY = 10


@dataclass(frozen=True, slots=True)
class ProviderFailure:
    """A provider whose listing raised; it contributed no skills."""
    provider: str
    error: Exception


@dataclass(frozen=True, slots=True)
class ListingReport:
    skills: list[Skill] = field(default_factory=list)
    errors: list[ProviderFailure] = field(default_factory=list)


class SkillReader:
    """Fans ``list_skills`` out to every provider and merges the results.

    Listing is best effort: a provider that raises is logged, recorded
    in :attr:`ListingReport.errors` and otherwise ignored, so the
    aggregate call never fails because one source is broken.  Results
    are concatenated in registration order regardless of which provider
    finished first.  No de-duplication by id is done here.

    Usage::

        reader = SkillReader()
        reader.add_provider(ClaudeProvider())
        skills = await reader.list_all()
    """

    def __init__(
        self,
        config: AllSkillsConfig | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        if max_concurrency is None:
            max_concurrency = (
                config.max_concurrency if config is not None
                else DEFAULT_MAX_CONCURRENCY
            )
        if max_concurrency < 1:
            msg = f"max_concurrency must be at least 1, got {max_concurrency}"
            raise ValueError(msg)
        self._config = config
        self._max_concurrency = max_concurrency
        self._providers: list[SkillProvider] = []

    def add_provider(self, provider: SkillProvider) -> None:
        self._providers.append(provider)

    @property
    def providers(self) -> list[SkillProvider]:
        """Registered providers, in registration order."""
        return list(self._providers)

    def source_config(self, provider: SkillProvider) -> SourceConfig:
        """Configuration handed to *provider* for one listing.

        A ``[[sources]]`` entry of the provider's type supplies the path
        and the pass-through fields; otherwise the provider gets its own
        name with the neutral user scope and priority 0.
        """
        if self._config is not None:
            for settings in self._config.sources:
                if parse_source_type(settings.source_type) == provider.source_type:
                    return SourceConfig.from_settings(settings)
        return SourceConfig(
            name=provider.name,
            source_type=provider.source_type,
            scope=SkillScope.USER,
            priority=0,
        )

    async def list_all_detailed(self) -> ListingReport:
        """List every provider concurrently, keeping per-provider failures."""
        providers = list(self._providers)
        if not providers:
            return ListingReport()

        sem = asyncio.Semaphore(self._max_concurrency)

        async def _bounded(provider: SkillProvider) -> list[Skill]:
            async with sem:
                return await provider.list_skills(self.source_config(provider))

        results = await asyncio.gather(
            *[_bounded(p) for p in providers],
            return_exceptions=True,
        )

        report = ListingReport()
        for provider, result in zip(providers, results, strict=True):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(
                    "Provider %s failed, skipping: %s", provider.name, result,
                )
                report.errors.append(ProviderFailure(provider.name, result))
                continue
            report.skills.extend(result)

        logger.debug(
            "Listed %d skill(s) from %d provider(s), %d failed",
            len(report.skills), len(providers), len(report.errors),
        )
        return report

    async def list_all(self) -> list[Skill]:
        """Every skill every provider can see; never raises for provider errors."""
        report = await self.list_all_detailed()
        return report.skills

    async def search(self, predicate: Callable[[Skill], bool]) -> list[Skill]:
        """Linear filter over :meth:`list_all`."""
        return [skill for skill in await self.list_all() if predicate(skill)]

    async def find(self, name_or_id: str) -> Skill | None:
        """First skill whose name or id matches, ignoring case."""
        wanted = name_or_id.strip().lower()
        for skill in await self.list_all():
            if skill.name.lower() == wanted or skill.id.lower() == wanted:
                return skill
        return None

    async def read(self, skill: Skill) -> str:
        """Primary content of *skill*, read by the provider that produced it.

        Raises:
            SkillNotFoundError: If no registered provider has the skill's
                source type, or the provider finds no content.
        """
        for provider in self._providers:
            if provider.source_type == skill.source_type:
                return await provider.read_skill(skill)
        msg = f"No provider registered for source type '{skill.source_type.value}'"
        raise SkillNotFoundError(msg)


def matches_query(skill: Skill, query: str) -> bool:
    """Case-insensitive substring match on name, description or a tag."""
    needle = query.strip().lower()
    if not needle:
        return True
    if needle in skill.name.lower() or needle in skill.description.lower():
        return True
    return any(needle in tag.lower() for tag in skill.metadata.tags)


def default_providers(
    sources: KnownSources | None = None,
    config: AllSkillsConfig | None = None,
    project_dir: Path | None = None,
) -> list[SkillProvider]:
    """Every built-in listing provider, in a fixed order.

    The local provider scans the configured install directory.  Cursor
    project rules are read from *project_dir* only when one is given.  Source
    types that the configuration lists only as disabled are left out.
    GitHub is not included: it lists nothing and is used for installs.
    """
    install_dir = Path(config.install_dir) if config is not None else Path(".alltheskills")
    providers: list[SkillProvider] = [
        ClaudeProvider(sources=sources),
        ClineProvider(sources=sources),
        CursorProvider(
            sources=sources,
            project_dir=project_dir,
            include_project=project_dir is not None,
        ),
        RooProvider(sources=sources),
        OpenClawProvider(sources=sources),
        MoltbotProvider(sources=sources),
        CodexProvider(sources=sources),
        KiloProvider(sources=sources),
        VercelProvider(sources=sources),
        CloudflareProvider(sources=sources),
        LocalProvider(root=install_dir),
    ]
    if config is None:
        return providers

    enabled = {parse_source_type(s.source_type) for s in config.sources if s.enabled}
    disabled = {
        parse_source_type(s.source_type) for s in config.sources if not s.enabled
    } - enabled
    return [p for p in providers if p.source_type not in disabled]
