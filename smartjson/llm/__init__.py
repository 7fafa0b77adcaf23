"""Remote JSON repair through LLM providers."""

from __future__ import annotations

from .provider import (
    LLMParseError,
    LLMProviderConfigurationError,
    LLMProviderError,
    LLMQuotaError,
    ProviderStatus,
    RepairProvider,
)
from .service import RepairService

__all__ = [
    "LLMParseError",
    "LLMProviderConfigurationError",
    "LLMProviderError",
    "LLMQuotaError",
    "ProviderStatus",
    "RepairProvider",
    "RepairService",
]
