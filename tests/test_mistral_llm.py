from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, cast

import pytest
from mistralai import Mistral

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from smartjson.llm.mistral_llm import INPUT_HEADER, MistralLLM
from smartjson.llm.provider import (
    LLMParseError,
    LLMProviderConfigurationError,
    LLMProviderError,
    LLMQuotaError,
)


class _QuotaExceededError(Exception):
    """Mock quota exceeded error."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.status_code = 429


class _Conversations:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.calls: list[dict[str, object]] = []
        self._response = response
        self._error = error

    def start(self, **kwargs: object) -> Any:
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        return self._response


class _DummyClient:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.beta = SimpleNamespace(conversations=_Conversations(response, error))


def _outputs(*contents: Any) -> SimpleNamespace:
    return SimpleNamespace(outputs=[SimpleNamespace(content=c) for c in contents])


def _llm(client: _DummyClient, **kwargs: Any) -> MistralLLM:
    return MistralLLM(client=cast(Mistral, client), **kwargs)


def test_repair_uses_conversations_api() -> None:
    client = _DummyClient(response=_outputs('{"a": 1}'))
    llm = _llm(client, system_prompt="Fix JSON.\nOnly JSON.")

    assert llm.repair("{a: 1}") == '{"a": 1}'

    call = client.beta.conversations.calls[0]
    assert call["instructions"] == "Fix JSON.\nOnly JSON."
    assert call["model"] == llm.model
    assert call["completion_args"] == {"temperature": 0.2}
    entry = call["inputs"][0]  # type: ignore[index]
    assert entry.role == "user"
    assert entry.content == f"{INPUT_HEADER}\n{{a: 1}}"


def test_repair_skips_blank_output_entries_and_strips_fences() -> None:
    client = _DummyClient(response=_outputs("  ", "```json\n[1, 2]\n```"))
    assert _llm(client).repair("[1, 2,]") == "[1, 2]"


def test_repair_reads_openai_style_choices() -> None:
    response = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content='{"b": 2}'))]
    )
    assert _llm(_DummyClient(response=response)).repair("{b: 2}") == '{"b": 2}'


def test_repair_raises_on_empty_response() -> None:
    llm = _llm(_DummyClient(response=SimpleNamespace(outputs=[])))
    with pytest.raises(LLMParseError) as exc_info:
        llm.repair("{broken")
    assert exc_info.value.prompts == [INPUT_HEADER, "{broken"]


def test_quota_error_is_translated() -> None:
    llm = _llm(_DummyClient(error=_QuotaExceededError("Too many requests")))
    with pytest.raises(LLMQuotaError):
        llm.repair("{broken")


def test_other_errors_become_provider_errors() -> None:
    llm = _llm(_DummyClient(error=RuntimeError("boom")))
    with pytest.raises(LLMProviderError) as exc_info:
        llm.repair("{broken")
    assert not isinstance(exc_info.value, LLMQuotaError)


def test_missing_api_key_is_a_configuration_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("MISTRAL_API_KEY", raising=False)
    empty_env = tmp_path / ".env"
    empty_env.write_text("", encoding="utf-8")

    with pytest.raises(LLMProviderConfigurationError):
        MistralLLM(dotenv_path=empty_env)
