"""Boilerplate for new skills, in the layout each platform's provider reads."""
from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003 - Path is used at runtime for path operations
from typing import TYPE_CHECKING, Any

import yaml
from alltheskills_core.errors import SkillIoError
from alltheskills_core.logging import get_logger

from alltheskills.providers import CLOUDFLARE, VERCEL
from alltheskills.types import SourceType, parse_source_type

if TYPE_CHECKING:
    from alltheskills.types import SkillSourceType

logger = get_logger("skills.scaffold")

DEFAULT_VERSION = "0.1.0"


def _manifest(name: str, platform: str) -> dict[str, Any]:
    return {
        "name": name,
        "description": f"A {platform} skill for ...",
        "version": DEFAULT_VERSION,
        "author": "Your Name",
        "tags": [platform.lower().replace(" ", "-"), "skill"],
    }


def _readme(name: str, platform: str) -> str:
    return (
        f"# {name}\n\n"
        f"A {platform} skill for ...\n\n"
        "## Usage\n\n"
        "Explain when and how this skill should be used.\n"
    )


def _instructions(name: str) -> str:
    return (
        f"# {name}\n\n"
        "Describe what this skill does in one line.\n\n"
        "## Instructions\n\n"
        "Step-by-step instructions for the assistant.\n"
    )


def _skill_md(name: str) -> str:
    front = yaml.safe_dump(
        {"name": name, "description": "A brief description of what this skill does",
         "version": DEFAULT_VERSION, "tags": ["custom"]},
        sort_keys=False,
    )
    return f"---\n{front}---\n\n{_instructions(name)}"


def _json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2) + "\n"


def skill_files(name: str, kind: SkillSourceType) -> dict[str, str]:
    """File name -> content for a new skill of the given platform.

    Unknown kinds get a generic ``skill.json`` + ``SKILL.md`` pair, which
    the local provider understands.
    """
    if kind == SourceType.CLAUDE:
        return {
            "claude.json": _json(_manifest(name, "Claude")),
            "SKILL.md": _skill_md(name),
            "README.md": _readme(name, "Claude"),
        }
    if kind == SourceType.CLINE:
        return {
            "cline.json": _json(_manifest(name, "Cline")),
            "custom-instructions.md": _instructions(name),
            "README.md": _readme(name, "Cline"),
        }
    if kind == SourceType.CURSOR:
        return {
            ".cursorrules": f"Rules for {name}.\n\n- Prefer explicit over implicit\n",
            "cursor.json": _json(_manifest(name, "Cursor")),
            "README.md": _readme(name, "Cursor"),
        }
    if kind == SourceType.ROO_CODE:
        return {
            "roo.json": _json(_manifest(name, "Roo Code")),
            "README.md": _readme(name, "Roo Code"),
        }
    if kind == SourceType.OPENCLAW:
        return {
            "skill.json": _json(_manifest(name, "OpenClaw")),
            "README.md": _readme(name, "OpenClaw"),
        }
    if kind == SourceType.MOLTBOT:
        manifest = _manifest(name, "Moltbot")
        manifest["commands"] = [{"name": name, "description": "Run the skill"}]
        return {
            "manifest.json": _json(manifest),
            "SKILL.md": _instructions(name),
            "README.md": _readme(name, "Moltbot"),
        }
    if kind == SourceType.OPENAI_CODEX:
        manifest = _manifest(name, "OpenAI Codex")
        manifest["tools"] = []
        return {
            "codex.json": _json(manifest),
            "instructions.md": _instructions(name),
            "README.md": _readme(name, "OpenAI Codex"),
        }
    if kind == SourceType.KILO_CODE:
        return {
            "kilo.yaml": yaml.safe_dump(_manifest(name, "Kilo Code"), sort_keys=False),
            "instructions.md": _instructions(name),
            "README.md": _readme(name, "Kilo Code"),
        }
    if kind == VERCEL:
        return {
            "skill.json": _json(_manifest(name, "Vercel AI")),
            "README.md": _readme(name, "Vercel AI"),
        }
    if kind == CLOUDFLARE:
        return {
            "wrangler.toml": (
                f"name = {json.dumps(name)}\n"
                'main = "worker.js"\n'
                'compatibility_date = "2024-01-01"\n'
            ),
            "worker.js": "export default {\n  async fetch(request, env) {\n"
                         "    return new Response(\"ok\");\n  },\n};\n",
            "README.md": _readme(name, "Cloudflare Workers AI"),
        }
    return {
        "skill.json": _json(_manifest(name, "generic")),
        "SKILL.md": _skill_md(name),
        "README.md": _readme(name, "generic"),
    }


def scaffold_skill(name: str, kind: str = "claude", parent: Path | None = None) -> Path:
    """Create ``<parent>/<name>`` with boilerplate files for *kind*.

    Raises:
        SkillIoError: If the directory already exists or cannot be written.
    """
    skill_dir = (parent / name) if parent is not None else Path(name)
    if skill_dir.exists():
        msg = f"Directory already exists: {skill_dir}"
        raise SkillIoError(msg)

    files = skill_files(name, parse_source_type(kind))
    try:
        skill_dir.mkdir(parents=True)
        for filename, content in files.items():
            (skill_dir / filename).write_text(content, encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot create skill at {skill_dir}: {exc}"
        raise SkillIoError(msg) from exc

    logger.info("Scaffolded %s skill at %s", kind, skill_dir)
    return skill_dir
