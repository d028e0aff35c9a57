from __future__ import annotations


class AllSkillsError(Exception):
    """Base exception for all AllTheSkills errors."""


# ── Filesystem / Parsing Errors ──────────────────────────────────────

class SkillIoError(AllSkillsError):
    """A filesystem operation failed (unreadable directory or file)."""


class SkillParseError(AllSkillsError):
    """A manifest was read but its content could not be parsed."""


class UnsupportedFormatError(AllSkillsError):
    """The manifest dialect is not recognised."""


# ── Lookup Errors ────────────────────────────────────────────────────

class SkillNotFoundError(AllSkillsError):
    """Skill, or any readable content for it, does not exist."""


# ── Config Errors ────────────────────────────────────────────────────

class ConfigError(AllSkillsError):
    """Invalid configuration or an unsatisfiable dependency graph."""


class DependencyCycleError(ConfigError):
    """The declared dependency graph contains a cycle."""

    def __init__(self, entry: str) -> None:
        self.entry = entry
        super().__init__(f"Circular dependency detected: {entry}")


# ── Install Errors ───────────────────────────────────────────────────

class InstallError(AllSkillsError):
    """A provider could not install a skill from the given source."""
