"""Per-platform skill providers."""
from __future__ import annotations

from alltheskills.providers.base import SkillProvider
from alltheskills.providers.claude import ClaudeProvider
from alltheskills.providers.cline import ClineProvider
from alltheskills.providers.cloudflare import CLOUDFLARE, CloudflareProvider
from alltheskills.providers.codex import CodexProvider
from alltheskills.providers.cursor import CursorProvider
from alltheskills.providers.github import GitHubProvider
from alltheskills.providers.kilo import KiloProvider
from alltheskills.providers.local import LocalProvider
from alltheskills.providers.moltbot import MoltbotProvider
from alltheskills.providers.openclaw import OpenClawProvider
from alltheskills.providers.roo import RooProvider
from alltheskills.providers.vercel import VERCEL, VercelProvider

__all__ = [
    "CLOUDFLARE",
    "VERCEL",
    "ClaudeProvider",
    "ClineProvider",
    "CloudflareProvider",
    "CodexProvider",
    "CursorProvider",
    "GitHubProvider",
    "KiloProvider",
    "LocalProvider",
    "MoltbotProvider",
    "OpenClawProvider",
    "RooProvider",
    "SkillProvider",
    "VercelProvider",
]
