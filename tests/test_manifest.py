"""Tests for manifest loading, frontmatter splitting and metadata building."""
from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest
from alltheskills.manifest import (
    first_content_line,
    load_json,
    load_manifest,
    load_markdown,
    load_toml,
    load_yaml,
    metadata_from,
    read_text,
    split_frontmatter,
)
from alltheskills_core.errors import (
    SkillIoError,
    SkillParseError,
    UnsupportedFormatError,
)

from conftest import write_file, write_json

if TYPE_CHECKING:
    from pathlib import Path


# ── Loaders ──────────────────────────────────────────────────────────


class TestLoaders:
    def test_read_missing_file_is_io_error(self, tmp_path: Path) -> None:
        with pytest.raises(SkillIoError):
            read_text(tmp_path / "nope.md")

    def test_load_json(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "skill.json", {"name": "x"})
        assert load_json(path) == {"name": "x"}

    def test_malformed_json_is_parse_error(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "claude.json", "{not json")
        with pytest.raises(SkillParseError, match="claude.json"):
            load_json(path)

    def test_json_array_is_parse_error(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "skill.json", "[1, 2]")
        with pytest.raises(SkillParseError, match="mapping"):
            load_json(path)

    def test_empty_yaml_is_empty_mapping(self, tmp_path: Path) -> None:
        assert load_yaml(write_file(tmp_path / "kilo.yaml", "")) == {}

    def test_malformed_yaml_is_parse_error(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "kilo.yaml", "name: [unclosed")
        with pytest.raises(SkillParseError):
            load_yaml(path)

    def test_load_toml(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "wrangler.toml", 'name = "worker"\n')
        assert load_toml(path) == {"name": "worker"}

    def test_malformed_toml_is_parse_error(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "wrangler.toml", "name = \n")
        with pytest.raises(SkillParseError):
            load_toml(path)


class TestLoadManifest:
    def test_dispatches_by_suffix(self, tmp_path: Path) -> None:
        assert load_manifest(write_json(tmp_path / "a.json", {"k": 1})) == {"k": 1}
        assert load_manifest(write_file(tmp_path / "b.yml", "k: 2\n")) == {"k": 2}
        assert load_manifest(write_file(tmp_path / "c.toml", "k = 3\n")) == {"k": 3}

    def test_dotfile_is_json(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / ".roomodes", {"description": "modes"})
        assert load_manifest(path) == {"description": "modes"}

    def test_unknown_suffix_is_unsupported(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "skill.ini", "[x]")
        with pytest.raises(UnsupportedFormatError):
            load_manifest(path)


# ── Frontmatter ──────────────────────────────────────────────────────


class TestSplitFrontmatter:
    def test_with_frontmatter(self) -> None:
        text = textwrap.dedent("""\
            ---
            name: reviewer
            tags: [review, quality]
            ---

            # Reviewer

            Reviews pull requests.
        """)
        meta, body = split_frontmatter(text)
        assert meta == {"name": "reviewer", "tags": ["review", "quality"]}
        assert body.startswith("# Reviewer")

    def test_without_frontmatter(self) -> None:
        meta, body = split_frontmatter("# Plain\n\nJust text.\n")
        assert meta == {}
        assert body == "# Plain\n\nJust text.\n"

    def test_empty_frontmatter(self) -> None:
        meta, body = split_frontmatter("---\n---\nBody\n")
        assert meta == {}
        assert body == "Body\n"

    def test_unclosed_frontmatter(self) -> None:
        with pytest.raises(SkillParseError, match="closing"):
            split_frontmatter("---\nname: x\n\nno end\n")

    def test_leading_horizontal_rule_is_not_frontmatter(self) -> None:
        text = "---\n\nKeeps a changelog.\n"
        assert split_frontmatter(text) == ({}, text)

    def test_non_mapping_frontmatter(self) -> None:
        with pytest.raises(SkillParseError, match="mapping"):
            split_frontmatter("---\n- a\n- b\n---\nbody\n")

    def test_load_markdown_names_the_file(self, tmp_path: Path) -> None:
        path = write_file(tmp_path / "SKILL.md", "---\nname: [bad\n---\n")
        with pytest.raises(SkillParseError, match="SKILL.md"):
            load_markdown(path)


class TestFirstContentLine:
    def test_skips_headings_and_blanks(self) -> None:
        text = "# Title\n\n## Sub\n  First real line.  \nSecond\n"
        assert first_content_line(text) == "First real line."

    def test_skips_horizontal_rules(self) -> None:
        assert first_content_line("---\n* * *\nAfter the rule.\n") == "After the rule."

    def test_keeps_headings_when_asked(self) -> None:
        assert first_content_line("# Title\nBody\n", skip_headings=False) == "# Title"

    def test_truncates_to_limit(self) -> None:
        line = "x" * 100
        result = first_content_line(line, limit=80)
        assert result == "x" * 77 + "..."
        assert len(result) == 80

    def test_nothing_found(self) -> None:
        assert first_content_line("# Only a heading\n\n") is None


# ── Metadata ─────────────────────────────────────────────────────────


class TestMetadataFrom:
    def test_full_manifest(self) -> None:
        meta = metadata_from(
            {
                "author": {"name": "Ada", "email": "ada@example.com"},
                "tags": ["a", "b", "a"],
                "homepage": "https://example.com",
                "repository": {"type": "git", "url": "https://github.com/acme/x"},
                "license": "MIT",
                "requirements": "python>=3.11",
                "dependencies": ["base"],
            },
            extra_tags=["b", "extra"],
        )
        assert meta.author == "Ada"
        assert meta.tags == ["a", "b", "extra"]
        assert meta.repository == "https://github.com/acme/x"
        assert meta.license == "MIT"
        assert meta.requirements == ["python>=3.11"]
        assert [d.name for d in meta.dependencies] == ["base"]

    def test_absent_fields_default(self) -> None:
        meta = metadata_from({})
        assert meta.author is None
        assert meta.tags == []
        assert meta.homepage is None
        assert meta.dependencies == []

    def test_structured_values_are_not_strings(self) -> None:
        meta = metadata_from({"homepage": {"url": "x"}, "license": ["MIT"]})
        assert meta.homepage is None
        assert meta.license is None
