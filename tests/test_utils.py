"""Tests for filesystem helpers."""
from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from alltheskills.utils import (
    copy_dir_recursive,
    is_skill_dir,
    remove_path,
    sanitize_filename,
)

from conftest import write_file

if TYPE_CHECKING:
    from pathlib import Path


class TestCopyDirRecursive:
    def test_copies_nested_tree_and_overwrites(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        write_file(src / "skill.json", "{}")
        write_file(src / "docs" / "guide.md", "new")
        dst = tmp_path / "out" / "skill"
        write_file(dst / "docs" / "guide.md", "old")

        copy_dir_recursive(src, dst)

        assert (dst / "skill.json").read_text() == "{}"
        assert (dst / "docs" / "guide.md").read_text() == "new"


class TestIsSkillDir:
    def test_manifest_or_readme(self, tmp_path: Path) -> None:
        write_file(tmp_path / "a" / "kilo.yml", "name: a\n")
        write_file(tmp_path / "b" / "README.md", "b")
        (tmp_path / "c").mkdir()

        assert is_skill_dir(tmp_path / "a")
        assert is_skill_dir(tmp_path / "b")
        assert not is_skill_dir(tmp_path / "c")
        assert not is_skill_dir(tmp_path / "a" / "kilo.yml")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("my skill", "my skill"),
        ("a/b\\c:d", "a-b-c-d"),
        ("..hidden", "hidden"),
        ('what?*"<>|', "what------"),
    ],
)
def test_sanitize_filename(raw: str, expected: str) -> None:
    assert sanitize_filename(raw) == expected


class TestRemovePath:
    def test_directory_tree(self, tmp_path: Path) -> None:
        write_file(tmp_path / "skill" / "nested" / "file.md", "x")
        remove_path(tmp_path / "skill")
        assert not (tmp_path / "skill").exists()

    def test_single_file(self, tmp_path: Path) -> None:
        rules = write_file(tmp_path / ".cursorrules", "x")
        remove_path(rules)
        assert not rules.exists()

    def test_symlink_leaves_target(self, tmp_path: Path) -> None:
        write_file(tmp_path / "real" / "README.md", "x")
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "real", target_is_directory=True)

        remove_path(link)

        assert not link.exists()
        assert (tmp_path / "real" / "README.md").is_file()

    def test_missing_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            remove_path(tmp_path / "ghost")
