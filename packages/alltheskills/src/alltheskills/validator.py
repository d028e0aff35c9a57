"""Structural checks for skill directories and parsed skills."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path  # noqa: TC003 - Path is used at runtime for path operations
from typing import TYPE_CHECKING

from alltheskills_core.errors import AllSkillsError

from alltheskills.manifest import load_manifest, read_text, split_frontmatter
from alltheskills.utils import MANIFEST_FILES

if TYPE_CHECKING:
    from alltheskills.types import Skill

_DESCRIPTION_MAX_LENGTH = 1024
_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*([-+][0-9A-Za-z.-]+)?$")
_MARKDOWN_SUFFIX = ".md"


@dataclass(slots=True)
class ValidationReport:
    """Outcome of :meth:`SkillValidator.check_directory`."""
    path: Path
    manifests: list[str] = field(default_factory=list)
    has_readme: bool = False
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class SkillValidator:
    """Checks that a directory looks like a skill any provider can read."""

    def check_directory(self, path: Path) -> ValidationReport:
        """Inspect *path* for recognised manifests and parse each of them.

        A directory with no manifest at all is an error; one without a
        README.md only earns a warning.
        """
        report = ValidationReport(path=path)
        if not path.exists():
            report.errors.append(f"Path does not exist: {path}")
            return report
        if not path.is_dir():
            report.errors.append(f"Path is not a directory: {path}")
            return report

        for filename in MANIFEST_FILES:
            manifest = path / filename
            if not manifest.is_file():
                continue
            report.manifests.append(filename)
            problem = self._parse_problem(manifest)
            if problem:
                report.errors.append(f"{filename}: {problem}")

        report.has_readme = (path / "README.md").is_file()
        if not report.manifests:
            if report.has_readme:
                report.warnings.append(
                    "No recognised manifest file; only README.md will be used",
                )
            else:
                report.errors.append("Skill is missing a manifest file or README.md")
        elif not report.has_readme:
            report.warnings.append("No README.md found")

        return report

    def _parse_problem(self, manifest: Path) -> str | None:
        try:
            if manifest.suffix == _MARKDOWN_SUFFIX:
                split_frontmatter(read_text(manifest))
            elif manifest.name != ".cursorrules":
                load_manifest(manifest)
        except AllSkillsError as exc:
            return str(exc)
        return None

    def validate(self, skill: Skill) -> list[str]:
        """Return problems with a parsed skill; an empty list means valid."""
        errors: list[str] = []

        if not skill.name:
            errors.append("Skill name is required.")
        if len(skill.description) > _DESCRIPTION_MAX_LENGTH:
            errors.append(
                f"Skill description exceeds {_DESCRIPTION_MAX_LENGTH} characters "
                f"({len(skill.description)} chars)."
            )
        if skill.version and not _VERSION_PATTERN.match(skill.version):
            errors.append(f"Skill version is not dotted-numeric: '{skill.version}'.")
        if not skill.path.exists():
            errors.append(f"Skill path does not exist: {skill.path}")

        for dep in skill.metadata.dependencies:
            if dep.name in (skill.name, skill.id):
                errors.append(f"Skill depends on itself: '{dep.name}'.")

        return errors
