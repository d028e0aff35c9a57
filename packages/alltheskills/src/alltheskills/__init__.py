"""AllTheSkills: discover, normalise and aggregate AI-assistant skills."""
from __future__ import annotations

from alltheskills.dependencies import (
    DependencyResolver,
    compare_versions,
    parse_dependencies,
    version_satisfies,
)
from alltheskills.detect import KnownSources, detect_path
from alltheskills.providers import SkillProvider
from alltheskills.reader import (
    ListingReport,
    ProviderFailure,
    SkillReader,
    default_providers,
    matches_query,
)
from alltheskills.scaffold import scaffold_skill, skill_files
from alltheskills.types import (
    CustomSource,
    GitHubSource,
    LocalSource,
    RemoteSource,
    Skill,
    SkillDependency,
    SkillFormat,
    SkillMetadata,
    SkillScope,
    SkillSource,
    SkillSourceType,
    SourceConfig,
    SourceType,
    make_skill_id,
    parse_source,
    parse_source_type,
)
from alltheskills.validator import SkillValidator, ValidationReport

__all__ = [
    "CustomSource",
    "DependencyResolver",
    "GitHubSource",
    "KnownSources",
    "ListingReport",
    "LocalSource",
    "ProviderFailure",
    "RemoteSource",
    "Skill",
    "SkillDependency",
    "SkillFormat",
    "SkillMetadata",
    "SkillProvider",
    "SkillReader",
    "SkillScope",
    "SkillSource",
    "SkillSourceType",
    "SkillValidator",
    "SourceConfig",
    "SourceType",
    "ValidationReport",
    "compare_versions",
    "default_providers",
    "detect_path",
    "make_skill_id",
    "matches_query",
    "parse_dependencies",
    "parse_source",
    "parse_source_type",
    "scaffold_skill",
    "skill_files",
    "version_satisfies",
]
