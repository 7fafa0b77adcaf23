"""Prompt files shipped with the package."""

from __future__ import annotations

from pathlib import Path

PROMPTS_DIR = Path(__file__).parent / "promptFiles"
REPAIR_SYSTEM_PROMPT = PROMPTS_DIR / "json_repair.md"
