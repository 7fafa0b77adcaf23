from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Sequence, cast

from dotenv import load_dotenv
from mistralai import Mistral, models

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


class MistralLLM:
    """JSON repair provider backed by the Mistral SDK.

    The system prompt can be provided either as a string directly or as a Path
    to a file; it defaults to the packaged ``json_repair.md`` prompt.
    """

    name = "mistral"
    MODEL = "mistral-medium-latest"

    def __init__(
        self,
        system_prompt: str | Path | None = None,
        *,
        client: Mistral | None = None,
        dotenv_path: str | Path | None = None,
        model: str | None = None,
    ) -> None:
        self._system_prompt = resolve_system_prompt(system_prompt)

        if dotenv_path is not None:
            # Load the provided dotenv file but do not override existing
            # environment variables; tests and explicit environment values
            # should take precedence.
            load_dotenv(dotenv_path=Path(dotenv_path))
        else:
            load_dotenv()

        # Mistral SDK does not automatically read MISTRAL_API_KEY from environment
        if client is None:
            api_key = os.environ.get("MISTRAL_API_KEY")
            if not api_key:
                raise LLMProviderConfigurationError(
                    "MISTRAL_API_KEY environment variable is required but not set. "
                    "Please set it in your .env file or environment."
                )
            client = Mistral(api_key=api_key)
        self._client = client
        self._model = model or os.environ.get("MISTRAL_MODEL") or self.MODEL

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    @property
    def model(self) -> str:
        return self._model

    def repair(self, text: str) -> str:
        """Ask Mistral to rewrite ``text`` as valid JSON and return the cleaned reply."""
        if not text or not text.strip():
            raise ValueError("text must not be empty.")

        prompts = [INPUT_HEADER, text]
        response = self.generate(prompts)
        raw = self._response_text(response)
        if raw is None or not raw.strip():
            raise LLMParseError(
                "Empty response from AI",
                response_text=str(response),
                prompts=prompts,
            )
        return strip_code_fences(raw)

    def generate(self, user_prompts: Sequence[str]) -> Any:
        if not user_prompts:
            raise ValueError("user_prompts must not be empty.")

        inputs = cast(
            models.ConversationInputs,
            [
                models.MessageInputEntry(
                    role="user",
                    content="\n".join(user_prompts),
                )
            ],
        )

        try:
            response = self._client.beta.conversations.start(
                inputs=inputs,
                instructions=self._system_prompt,
                model=self._model,
                completion_args={"temperature": 0.2},
                tools=[],
            )
        except Exception as exc:
            # Translate Mistral SDK quota/rate-limit exceptions so the service
            # can move on to the next provider.
            if getattr(exc, "status_code", None) == 429:
                raise LLMQuotaError(
                    "Mistral provider: quota exhausted or rate limited"
                ) from exc
            raise LLMProviderError("Mistral provider: request failed") from exc

        logger.debug("Mistral %s answered", self._model)
        return response

    @staticmethod
    def _response_text(response: Any) -> str | None:
        """Pull the reply text out of a conversation response.

        Supports, in precedence order, the ``outputs`` list returned by
        ``beta.conversations.start`` and the OpenAI-style ``choices`` shape.
        """
        outputs = getattr(response, "outputs", None)
        if isinstance(outputs, list):
            for entry in outputs:
                # Entry could be an object with a `.content` attribute or a dict
                if isinstance(entry, dict):
                    content_val = entry.get("content")
                else:
                    content_val = getattr(entry, "content", None)
                if isinstance(content_val, str) and content_val.strip():
                    return content_val

        choices = getattr(response, "choices", None)
        if choices:
            message = getattr(choices[0], "message", None)
            maybe = getattr(message, "content", None)
            if isinstance(maybe, str):
                return maybe
        return None
