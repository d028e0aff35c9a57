"""Locate each platform's skill directory.

Every lookup is a pure function of an environment mapping and an
existence probe, both injectable, so tests never touch the real home
directory:

1. the first set environment variable wins outright;
2. otherwise the first ``~/``-relative fallback that exists;
3. otherwise ``None`` (the platform contributes nothing).
"""
from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

ExistsProbe = Callable[[Path], bool]

# platform key -> (env overrides, fallbacks)
PLATFORM_DIRS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "claude": (
        ("CLAUDE_SKILLS_DIR",),
        ("~/.claude/skills", "~/.claude/plugins/skills"),
    ),
    "cline": (("CLINE_SKILLS_DIR",), ("~/.cline/skills",)),
    "cursor": (("CURSOR_RULES_DIR",), ("~/.cursor/rules", "~/.cursor")),
    "openclaw": (("OPENCLAW_SKILLS_DIR",), ("~/.openclaw/skills",)),
    "roo": (("ROO_SKILLS_DIR",), ("~/.roo/skills",)),
    "kilo": (("KILO_SKILLS_DIR",), ("~/.kilo/skills",)),
    "codex": (("CODEX_SKILLS_DIR",), ("~/.codex/skills",)),
    "moltbot": (
        ("MOLTBOT_SKILLS_DIR", "CLAWDBOT_SKILLS_DIR"),
        ("~/.moltbot/skills", "~/.clawdbot/skills"),
    ),
    "vercel": (("VERCEL_SKILLS_DIR",), ("~/.vercel/ai/skills", "~/.ai/skills")),
    "cloudflare": (
        ("CLOUDFLARE_SKILLS_DIR",),
        ("~/.cloudflare/workers/skills", "~/.workers-ai/skills"),
    ),
}

DISPLAY_NAMES: dict[str, str] = {
    "claude": "Claude",
    "cline": "Cline",
    "cursor": "Cursor",
    "openclaw": "OpenClaw",
    "roo": "Roo Code",
    "kilo": "Kilo Code",
    "codex": "OpenAI Codex",
    "moltbot": "Moltbot",
    "vercel": "Vercel",
    "cloudflare": "Cloudflare",
}


def home_dir(env: Mapping[str, str]) -> Path | None:
    home = env.get("HOME") or env.get("USERPROFILE")
    return Path(home) if home else None


def expand_home(path: str, env: Mapping[str, str]) -> Path | None:
    """Expand a leading ``~/`` against *env*; None if no home is known."""
    if not path.startswith("~/"):
        return Path(path)
    home = home_dir(env)
    if home is None:
        return None
    return home / path[2:]


def detect_path(
    env_keys: Iterable[str],
    fallbacks: Iterable[str],
    env: Mapping[str, str],
    exists: ExistsProbe = Path.exists,
) -> Path | None:
    """Resolve a directory from env overrides, then existing fallbacks.

    An override is returned as-is even when it does not exist; absence is
    the provider's business (it simply lists nothing).
    """
    for key in env_keys:
        value = env.get(key)
        if value:
            return Path(value)

    for fallback in fallbacks:
        candidate = expand_home(fallback, env)
        if candidate is not None and exists(candidate):
            return candidate

    return None


class KnownSources:
    """Per-platform directory detection bound to one environment snapshot."""

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        exists: ExistsProbe = Path.exists,
    ) -> None:
        self._env: Mapping[str, str] = dict(os.environ) if env is None else env
        self._exists = exists

    @property
    def env(self) -> Mapping[str, str]:
        return self._env

    def detect(self, platform: str) -> Path | None:
        env_keys, fallbacks = PLATFORM_DIRS[platform]
        return detect_path(env_keys, fallbacks, self._env, self._exists)

    def claude_skills_dir(self) -> Path | None:
        return self.detect("claude")

    def cline_skills_dir(self) -> Path | None:
        return self.detect("cline")

    def cursor_rules_dir(self) -> Path | None:
        return self.detect("cursor")

    def openclaw_skills_dir(self) -> Path | None:
        return self.detect("openclaw")

    def roo_skills_dir(self) -> Path | None:
        return self.detect("roo")

    def kilo_skills_dir(self) -> Path | None:
        return self.detect("kilo")

    def codex_skills_dir(self) -> Path | None:
        return self.detect("codex")

    def moltbot_skills_dir(self) -> Path | None:
        """Moltbot, honouring the legacy ClawdBot variable and path."""
        return self.detect("moltbot")

    def clawdbot_legacy_dir(self) -> Path | None:
        """The legacy ``~/.clawdbot/skills`` directory, when it exists."""
        candidate = expand_home("~/.clawdbot/skills", self._env)
        if candidate is not None and self._exists(candidate):
            return candidate
        return None

    def vercel_skills_dir(self) -> Path | None:
        return self.detect("vercel")

    def cloudflare_skills_dir(self) -> Path | None:
        return self.detect("cloudflare")

    def known_directories(self) -> list[tuple[str, Path]]:
        """(display name, directory) for every platform that was detected."""
        found: list[tuple[str, Path]] = []
        for platform in PLATFORM_DIRS:
            path = self.detect(platform)
            if path is not None:
                found.append((DISPLAY_NAMES[platform], path))
        return found
