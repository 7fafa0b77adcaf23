"""Which repair providers to call, and in what order.

The chain always starts with one primary provider (``gemini`` unless
``LLM_PRIMARY`` or ``--provider`` names another). ``LLM_FALLBACK`` adds a comma
separated list of providers that are tried only when the ones before them
report quota exhaustion.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

from .gemini_llm import GeminiLLM
from .mistral_llm import MistralLLM
from .provider import ProviderFactory, RepairProvider

logger = logging.getLogger(__name__)

PROVIDERS: dict[str, ProviderFactory] = {
    GeminiLLM.name: GeminiLLM,
    MistralLLM.name: MistralLLM,
}


def _clean_names(names: Iterable[str]) -> tuple[str, ...]:
    return tuple(name.strip().lower() for name in names if name.strip())


@dataclass(frozen=True)
class ChainSettings:
    """Primary provider plus the ordered quota fallbacks."""

    primary: str = GeminiLLM.name
    fallbacks: tuple[str, ...] = ()

    @classmethod
    def from_env(
        cls,
        *,
        primary: str | None = None,
        fallbacks: Iterable[str] | None = None,
    ) -> "ChainSettings":
        """Build settings, letting explicit arguments win over the environment.

        Empty values count as unset, so ``LLM_PRIMARY=`` keeps the default.
        """
        primary_name = _clean_names([primary or os.environ.get("LLM_PRIMARY", "")])
        if fallbacks is None:
            fallbacks = os.environ.get("LLM_FALLBACK", "").split(",")
        return cls(
            primary=primary_name[0] if primary_name else cls.primary,
            fallbacks=_clean_names(fallbacks),
        )

    def order(self) -> list[str]:
        """Return the provider names to try, first occurrence wins.

        Raises:
            ValueError: If a name has no registered provider.
        """
        names = list(dict.fromkeys([self.primary, *self.fallbacks]))
        unknown = [name for name in names if name not in PROVIDERS]
        if unknown:
            raise ValueError(f"Unknown LLM provider: {', '.join(unknown)}")
        return names


def create_provider_chain(
    *,
    system_prompt: str | Path | None = None,
    dotenv_path: str | Path | None = None,
    primary: str | None = None,
    fallbacks: Iterable[str] | None = None,
) -> list[RepairProvider]:
    """Instantiate the configured providers in call order.

    A ``dotenv_path`` is loaded (overriding the process environment) before
    ``LLM_PRIMARY``/``LLM_FALLBACK`` are read.
    """
    if dotenv_path is not None:
        load_dotenv(dotenv_path=str(dotenv_path), override=True)

    names = ChainSettings.from_env(primary=primary, fallbacks=fallbacks).order()
    logger.info("Repair provider order: %s", " -> ".join(names))
    return [
        PROVIDERS[name](system_prompt=system_prompt, dotenv_path=dotenv_path)
        for name in names
    ]
