from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Any, Sequence

from dotenv import load_dotenv
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .json_utils import strip_code_fences
from .provider import (
    LLMParseError,
    LLMProviderConfigurationError,
    LLMProviderError,
    LLMQuotaError,
    resolve_system_prompt,
)

logger = logging.getLogger(__name__)

INPUT_HEADER = "Input to fix:"


class GeminiLLM:
    """JSON repair provider backed by the Gemini SDK.

    The system prompt can be provided either as a string directly or as a Path
    to a file; it defaults to the packaged ``json_repair.md`` prompt.
    """

    name = "gemini"
    MODEL = "gemini-2.5-flash"
    THINKING_BUDGET = 0

    def __init__(
        self,
        system_prompt: str | Path | None = None,
        *,
        client: genai.Client | None = None,
        dotenv_path: str | Path | None = None,
        model: str | None = None,
        min_request_interval: float | None = None,
    ) -> None:
        self._system_prompt = resolve_system_prompt(system_prompt)

        if dotenv_path is not None:
            load_dotenv(dotenv_path=Path(dotenv_path))
        else:
            load_dotenv()

        if client is None:
            try:
                client = genai.Client()
            except ValueError as exc:
                raise LLMProviderConfigurationError(
                    "Gemini provider: set GEMINI_API_KEY in your .env file or environment."
                ) from exc
        self._client = client
        self._model = model or os.environ.get("GEMINI_MODEL") or self.MODEL

        # Read request spacing from environment or parameters
        if min_request_interval is None:
            try:
                min_request_interval = float(
                    os.environ.get("GEMINI_MIN_REQUEST_INTERVAL", "0")
                )
            except ValueError:
                min_request_interval = 0.0
        self._min_request_interval = max(0.0, min_request_interval)

        # Initialize to 0 so first request is not delayed
        self._last_request_time = 0.0

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    @property
    def model(self) -> str:
        return self._model

    def repair(self, text: str) -> str:
        """Ask Gemini to rewrite ``text`` as valid JSON and return the cleaned reply.

        Raises:
            ValueError: If ``text`` is empty.
            LLMParseError: If the model returned no text.
            LLMQuotaError: If Gemini reports quota or rate-limit exhaustion.
            LLMProviderError: For any other request failure.
        """
        if not text or not text.strip():
            raise ValueError("text must not be empty.")

        prompts = [INPUT_HEADER, text]
        response = self.generate(prompts)

        raw = getattr(response, "text", None)
        if not isinstance(raw, str) or not raw.strip():
            raise LLMParseError(
                "Empty response from AI",
                response_text=None if raw is None else str(raw),
                prompts=prompts,
            )
        return strip_code_fences(raw)

    def generate(self, user_prompts: Sequence[str]) -> Any:
        if not user_prompts:
            raise ValueError("user_prompts must not be empty.")

        contents = "\n".join(user_prompts)
        config = types.GenerateContentConfig(
            system_instruction=self._system_prompt,
            thinking_config=types.ThinkingConfig(thinking_budget=self.THINKING_BUDGET),
            temperature=0.2,
        )

        self._enforce_rate_limit()
        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as exc:
            if exc.code == 429:
                raise LLMQuotaError(
                    "Gemini provider: quota exhausted or rate limited"
                ) from exc
            raise LLMProviderError(f"Gemini provider: request failed ({exc.code})") from exc
        except Exception as exc:
            raise LLMProviderError("Gemini provider: request failed") from exc
        finally:
            # Update last request time even on failure
            self._last_request_time = time.time()

        logger.debug("Gemini %s answered a %d character prompt", self._model, len(contents))
        return response

    def _enforce_rate_limit(self) -> None:
        """Enforce minimum interval between API requests."""
        if self._min_request_interval <= 0:
            return

        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            sleep_time = self._min_request_interval - elapsed
            time.sleep(sleep_time)
