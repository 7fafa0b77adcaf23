from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from smartjson.llm.provider import (
    LLMProviderError,
    LLMQuotaError,
    ProviderStatus,
)
from smartjson.llm.service import RepairService


class _Provider:
    def __init__(self, name: str, *, result: str = "{}", error: Exception | None = None) -> None:
        self.name = name
        self._result = result
        self._error = error
        self.calls: list[str] = []

    def repair(self, text: str) -> str:
        self.calls.append(text)
        if self._error is not None:
            raise self._error
        return self._result


def test_first_provider_answers() -> None:
    first = _Provider("first", result='{"a": 1}')
    second = _Provider("second")
    service = RepairService([first, second])

    assert service.repair("{a: 1}") == '{"a": 1}'
    assert first.calls == ["{a: 1}"]
    assert second.calls == []


def test_quota_error_falls_through_to_next_provider() -> None:
    reports: list[tuple[str, ProviderStatus, Exception | None]] = []
    first = _Provider("first", error=LLMQuotaError("quota"))
    second = _Provider("second", result="[1]")
    service = RepairService(
        [first, second], reporter=lambda name, status, exc: reports.append((name, status, exc))
    )

    assert service.repair("[1,]") == "[1]"
    assert [(name, status) for name, status, _ in reports] == [
        ("first", ProviderStatus.QUOTA),
        ("second", ProviderStatus.SUCCESS),
    ]


def test_all_quota_errors_raise_quota_error() -> None:
    service = RepairService(
        [_Provider("a", error=LLMQuotaError("q1")), _Provider("b", error=LLMQuotaError("q2"))]
    )
    with pytest.raises(LLMQuotaError, match="All providers exceeded quota"):
        service.repair("x")


def test_provider_failure_propagates_without_fallback() -> None:
    second = _Provider("second")
    service = RepairService([_Provider("first", error=LLMProviderError("down")), second])

    with pytest.raises(LLMProviderError, match="down"):
        service.repair("x")
    assert second.calls == []


def test_service_requires_a_provider() -> None:
    with pytest.raises(ValueError):
        RepairService([])
