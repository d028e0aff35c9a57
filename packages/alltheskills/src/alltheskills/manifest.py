"""Manifest readers shared by the providers.

Each platform keeps its skill metadata in a different dialect (JSON,
YAML, TOML, Markdown with or without YAML frontmatter).  The helpers
here turn any of them into plain mappings and map failures onto the
library's error kinds:

* the file cannot be read        -> ``SkillIoError``
* the file was read but is junk  -> ``SkillParseError``
* the suffix is not a known one  -> ``UnsupportedFormatError``

Absent fields are never an error; callers default them.
"""
from __future__ import annotations

import json
import re
import tomllib
from typing import TYPE_CHECKING, Any

import yaml
from alltheskills_core.errors import (
    SkillIoError,
    SkillParseError,
    UnsupportedFormatError,
)

from alltheskills.dependencies import parse_dependencies
from alltheskills.types import SkillMetadata

if TYPE_CHECKING:
    from pathlib import Path

DESCRIPTION_LIMIT = 80

# A frontmatter line such as "name: x".
_YAML_KEY_LINE = re.compile(r"^[A-Za-z_][\w-]*\s*:")
_RULE_LINE = re.compile(r"^([-*_])\s*(?:\1\s*){2,}$")


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, mapping OS failures to SkillIoError."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise SkillIoError(msg) from exc


def _require_mapping(result: Any, path: Path) -> dict[str, Any]:
    if not isinstance(result, dict):
        msg = f"Manifest must be a mapping, got {type(result).__name__}: {path}"
        raise SkillParseError(msg)
    return result


def load_json(path: Path) -> dict[str, Any]:
    text = read_text(path)
    try:
        result = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Failed to parse {path.name}: {exc}"
        raise SkillParseError(msg) from exc
    return _require_mapping(result, path)


def load_yaml(path: Path) -> dict[str, Any]:
    """Parse a YAML manifest using safe_load.

    An empty file is treated as an empty mapping.
    """
    text = read_text(path)
    try:
        result = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = f"Failed to parse {path.name}: {exc}"
        raise SkillParseError(msg) from exc
    if result is None:
        return {}
    return _require_mapping(result, path)


def load_toml(path: Path) -> dict[str, Any]:
    text = read_text(path)
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Failed to parse {path.name}: {exc}"
        raise SkillParseError(msg) from exc


_LOADERS = {
    ".json": load_json,
    ".yaml": load_yaml,
    ".yml": load_yaml,
    ".toml": load_toml,
}


def load_manifest(path: Path) -> dict[str, Any]:
    """Load a structured manifest, picking the parser from the suffix.

    Dot-files without a suffix (``.roomodes``) are JSON.
    """
    suffix = path.suffix.lower()
    if not suffix and path.name.startswith("."):
        suffix = ".json"
    loader = _LOADERS.get(suffix)
    if loader is None:
        msg = f"Unsupported manifest format: {path.name}"
        raise UnsupportedFormatError(msg)
    return loader(path)


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split optional YAML frontmatter from a Markdown document.

    Unlike a strict SKILL.md parser this is tolerant: a document without
    an opening ``---`` yields an empty mapping and the whole text as the
    body, and so does one that opens with a horizontal rule (an unclosed
    ``---`` not followed by a ``key:`` line).  An unclosed block that does
    look like YAML, or frontmatter that is not a YAML mapping, is a parse
    error.
    """
    stripped = text.lstrip("\n")
    if not stripped.startswith("---"):
        return {}, text

    first_newline = stripped.find("\n")
    if first_newline == -1:
        return {}, ""
    rest = stripped[first_newline + 1 :]
    closing_idx = rest.find("\n---")
    if rest.startswith("---"):
        frontmatter, body = "", rest[3:]
    elif closing_idx == -1:
        first_line = next((line for line in rest.splitlines() if line.strip()), "")
        if not _YAML_KEY_LINE.match(first_line):
            return {}, text
        msg = "Frontmatter is missing its closing '---'"
        raise SkillParseError(msg)
    else:
        frontmatter = rest[:closing_idx]
        body = rest[closing_idx + 4 :]

    try:
        meta = yaml.safe_load(frontmatter) if frontmatter.strip() else {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML frontmatter: {exc}"
        raise SkillParseError(msg) from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        msg = f"YAML frontmatter must be a mapping, got {type(meta).__name__}"
        raise SkillParseError(msg)
    return meta, body.lstrip("\n")


def load_markdown(path: Path) -> tuple[dict[str, Any], str]:
    """Read a Markdown file and split its frontmatter (if any)."""
    text = read_text(path)
    try:
        return split_frontmatter(text)
    except SkillParseError as exc:
        msg = f"{path}: {exc}"
        raise SkillParseError(msg) from exc


def first_content_line(
    text: str,
    skip_headings: bool = True,
    limit: int | None = None,
) -> str | None:
    """Return the first non-blank line, stripped.

    With *skip_headings*, Markdown ``#`` headings and horizontal rules
    are passed over.  With *limit*, longer lines are cut to
    ``limit - 3`` characters plus ``...``.
    """
    for line in text.splitlines():
        candidate = line.strip()
        if not candidate:
            continue
        if skip_headings and (candidate.startswith("#") or _RULE_LINE.match(candidate)):
            continue
        if limit is not None and len(candidate) > limit:
            return candidate[: limit - 3] + "..."
        return candidate
    return None


def opt_str(data: dict[str, Any], key: str) -> str | None:
    """String value of *key*, or None when absent or not scalar text."""
    value = data.get(key)
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def as_str_list(value: Any) -> list[str]:
    """Coerce a value to a list of strings, or return empty list."""
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value if not isinstance(item, (dict, list))]
    if isinstance(value, str):
        return [value]
    return []


def metadata_from(
    data: dict[str, Any],
    extra_tags: list[str] | None = None,
    readme: str | None = None,
) -> SkillMetadata:
    """Build SkillMetadata from any manifest mapping.

    Duplicate tags are dropped while keeping their first position.
    """
    tags: list[str] = []
    for tag in as_str_list(data.get("tags")) + (extra_tags or []):
        if tag not in tags:
            tags.append(tag)

    author = data.get("author")
    if isinstance(author, dict):
        author = author.get("name")

    return SkillMetadata(
        author=str(author) if author is not None else None,
        tags=tags,
        homepage=opt_str(data, "homepage"),
        repository=_repository(data),
        license=opt_str(data, "license"),
        readme=readme,
        requirements=as_str_list(data.get("requirements")),
        dependencies=parse_dependencies(data),
    )


def _repository(data: dict[str, Any]) -> str | None:
    repo = data.get("repository")
    # package.json style: {"type": "git", "url": "..."}
    if isinstance(repo, dict):
        url = repo.get("url")
        return str(url) if url else None
    return opt_str(data, "repository")

