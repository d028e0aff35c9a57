"""AllTheSkills Core: shared config, errors, and logging."""
from __future__ import annotations

from alltheskills_core._version import __version__
from alltheskills_core.config import (
    AllSkillsConfig,
    LoggingConfig,
    SourceSettings,
    config_dir,
    config_path,
)
from alltheskills_core.errors import (
    AllSkillsError,
    ConfigError,
    DependencyCycleError,
    InstallError,
    SkillIoError,
    SkillNotFoundError,
    SkillParseError,
    UnsupportedFormatError,
)
from alltheskills_core.logging import get_logger, setup_from_config, setup_logging

__all__ = [
    # Config
    "AllSkillsConfig",
    # Errors
    "AllSkillsError",
    "ConfigError",
    "DependencyCycleError",
    "InstallError",
    "LoggingConfig",
    "SkillIoError",
    "SkillNotFoundError",
    "SkillParseError",
    "SourceSettings",
    "UnsupportedFormatError",
    # Version
    "__version__",
    "config_dir",
    "config_path",
    # Logging
    "get_logger",
    "setup_from_config",
    "setup_logging",
]
