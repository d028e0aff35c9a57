from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from alltheskills.types import (
        Skill,
        SkillSource,
        SkillSourceType,
        SourceConfig,
    )


@runtime_checkable
class SkillProvider(Protocol):
    """One platform's view of its installed skills.

    ``list_skills`` must treat a missing root directory as zero results,
    log and skip a single malformed skill, and raise only when the root
    exists but cannot be read.  Instances hold no per-call state and may
    be shared between concurrent calls.
    """

    @property
    def name(self) -> str: ...
    @property
    def source_type(self) -> SkillSourceType: ...
    def can_handle(self, source: SkillSource) -> bool: ...
    async def list_skills(self, config: SourceConfig) -> list[Skill]: ...
    async def read_skill(self, skill: Skill) -> str: ...
    async def install(self, source: SkillSource, target: Path) -> Skill: ...
