from __future__ import annotations

import logging
from typing import Sequence

from .provider import (
    LLMProviderError,
    LLMQuotaError,
    ProviderReporter,
    ProviderStatus,
    RepairProvider,
)

logger = logging.getLogger(__name__)


class RepairService:
    """Facade that routes repair requests across a priority-ordered provider list."""

    def __init__(
        self,
        providers: Sequence[RepairProvider],
        *,
        reporter: ProviderReporter | None = None,
    ) -> None:
        if not providers:
            raise ValueError("RepairService needs at least one provider.")
        self._providers = list(providers)
        self._reporter = reporter

    def repair(self, text: str) -> str:
        """Try each provider until one answers or all quotas are exhausted.

        Returns:
            The repaired text from the first provider that answered.

        Raises:
            LLMQuotaError: If every provider reported quota exhaustion.
            LLMProviderError: If a provider failed for any other reason.
        """

        last_error: LLMQuotaError | None = None
        for provider in self._providers:
            try:
                value = provider.repair(text)
            except LLMQuotaError as exc:
                last_error = exc
                logger.warning("Provider %s is out of quota: %s", provider.name, exc)
                self._report(provider.name, ProviderStatus.QUOTA, exc)
                continue
            except LLMProviderError as exc:
                self._report(provider.name, ProviderStatus.FAILURE, exc)
                raise
            self._report(provider.name, ProviderStatus.SUCCESS)
            return value
        raise LLMQuotaError("All providers exceeded quota") from last_error

    def _report(
        self,
        provider_name: str,
        status: ProviderStatus,
        error: Exception | None = None,
    ) -> None:
        if self._reporter is None:
            return
        self._reporter(provider_name, status, error)
