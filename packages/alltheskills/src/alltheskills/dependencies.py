"""Skill dependency parsing, satisfaction checks and install planning."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from alltheskills_core.errors import DependencyCycleError
from alltheskills_core.logging import get_logger

from alltheskills.types import SkillDependency

if TYPE_CHECKING:
    from collections.abc import Iterable

    from alltheskills.types import Skill

logger = get_logger("skills.dependencies")


def parse_dependencies(data: dict[str, Any]) -> list[SkillDependency]:
    """Parse the ``dependencies`` list of a manifest mapping.

    Items may be bare names (``"skill-a"``) or objects::

        {"name": "skill-b", "version": "^1.0.0",
         "source": "https://github.com/user/skill-b", "optional": false}

    ``version_req`` is accepted as an alias of ``version``.  The first
    occurrence of a name wins; later entries with the same name are
    dropped.  Items without a usable name are ignored.
    """
    raw = data.get("dependencies")
    if not isinstance(raw, list):
        return []

    deps: list[SkillDependency] = []
    seen: set[str] = set()

    for item in raw:
        if isinstance(item, str):
            dep = SkillDependency(name=item)
        elif isinstance(item, dict) and isinstance(item.get("name"), str):
            version = item.get("version", item.get("version_req"))
            source = item.get("source")
            dep = SkillDependency(
                name=item["name"],
                version_req=str(version) if version is not None else None,
                source=str(source) if source is not None else None,
                optional=bool(item.get("optional", False)),
            )
        else:
            continue

        if not dep.name or dep.name in seen:
            continue
        seen.add(dep.name)
        deps.append(dep)

    return deps


# ── Version requirements ─────────────────────────────────────────────


def _components(version: str) -> list[int]:
    """Numeric dot-separated components; non-numeric parts count as 0."""
    parts: list[int] = []
    for piece in version.strip().split("."):
        try:
            parts.append(int(piece))
        except ValueError:
            parts.append(0)
    return parts


def compare_versions(left: str, right: str) -> int:
    """Compare two dotted versions.

    Returns a negative number, zero or a positive number as *left* is
    lower than, equal to or greater than *right*.  Missing trailing
    components are zero, so ``"1.0"`` equals ``"1.0.0"``.
    """
    a = _components(left)
    b = _components(right)
    width = max(len(a), len(b))
    a += [0] * (width - len(a))
    b += [0] * (width - len(b))
    for x, y in zip(a, b, strict=True):
        if x != y:
            return x - y
    return 0


def _is_compatible(version: str, requirement: str) -> bool:
    """Caret semantics: same major version and not older."""
    if _components(version)[0] != _components(requirement)[0]:
        return False
    return compare_versions(version, requirement) >= 0


def version_satisfies(version: str, requirement: str) -> bool:
    """Check *version* against a simplified requirement string.

    Supported: exact equality, ``^X.Y.Z``, ``>=X.Y.Z`` and ``>X.Y.Z``.
    Anything else falls back to exact string equality.  Pre-release and
    build metadata are not understood.
    """
    if version == requirement:
        return True

    req = requirement.strip()
    if req.startswith("^"):
        return _is_compatible(version, req[1:].strip())
    if req.startswith(">="):
        return compare_versions(version, req[2:].strip()) >= 0
    if req.startswith(">"):
        return compare_versions(version, req[1:].strip()) > 0

    return version == req


# ── Resolver ─────────────────────────────────────────────────────────


class DependencyResolver:
    """Computes which declared dependencies of a skill still need installing.

    The resolver keeps two lookups keyed by skill name:

    * ``installed``: skills already present; their dependencies are
      considered satisfied for planning purposes.
    * ``available``: skills the caller knows about but has not installed
      (e.g. from a listing or a fetched catalogue).  When a dependency
      names an available skill, that skill's own dependencies are
      traversed too.  Without it, traversal is one level deep.

    Both are meant to be seeded once and reused across calls within a
    session.
    """

    def __init__(
        self,
        installed: Iterable[Skill] | None = None,
        available: Iterable[Skill] | None = None,
    ) -> None:
        self._installed: dict[str, Skill] = {}
        self._available: dict[str, Skill] = {}
        self._resolving: set[str] = set()
        for skill in installed or ():
            self.add_installed(skill)
        for skill in available or ():
            self.add_available(skill)

    def add_installed(self, skill: Skill) -> None:
        self._installed[skill.name] = skill

    def add_available(self, skill: Skill) -> None:
        self._available[skill.name] = skill

    @property
    def installed(self) -> dict[str, Skill]:
        """Installed skills by name (read-only view by convention)."""
        return self._installed

    @property
    def available(self) -> dict[str, Skill]:
        return self._available

    def resolve_dependencies(self, skill: Skill) -> list[SkillDependency]:
        """Plan the dependencies of *skill* that still need installing.

        Depth-first over declared dependencies.  Each missing dependency
        is reported once, in first-discovered order.  Optional
        dependencies and installed ones are skipped.

        Raises:
            DependencyCycleError: If a dependency leads back to a skill
                that is still being resolved.  No partial plan is
                returned in that case.
        """
        self._resolving.clear()
        result: list[SkillDependency] = []
        self._resolve(skill, result)
        logger.debug(
            "Resolved %d dependency(ies) for '%s'", len(result), skill.name,
        )
        return result

    def _resolve(self, skill: Skill, result: list[SkillDependency]) -> None:
        if skill.name in self._resolving:
            raise DependencyCycleError(skill.name)
        if skill.name in self._installed:
            return

        self._resolving.add(skill.name)

        for dep in skill.metadata.dependencies:
            if dep.optional:
                continue
            if dep.name in self._resolving:
                raise DependencyCycleError(dep.name)
            if dep.name in self._installed:
                continue
            if any(existing.name == dep.name for existing in result):
                continue

            result.append(dep)

            nested = self._available.get(dep.name)
            if nested is not None:
                self._resolve(nested, result)

        self._resolving.discard(skill.name)

    def is_satisfied(self, dep: SkillDependency) -> bool:
        """True when *dep* is installed in a version meeting its requirement.

        An installed skill that declares no version satisfies any
        requirement.
        """
        installed = self._installed.get(dep.name)
        if installed is None:
            return False
        if not dep.version_req:
            return True
        if installed.version is None:
            return True
        return version_satisfies(installed.version, dep.version_req)

    def unsatisfied(self, skill: Skill) -> list[SkillDependency]:
        """Every declared dependency (optional ones included) not satisfied."""
        return [
            dep for dep in skill.metadata.dependencies
            if not self.is_satisfied(dep)
        ]
