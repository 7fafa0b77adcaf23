"""User-facing actions built on the parser, the formatter and the diff engine.

These mirror what a front end offers: format, minify, fix (local heuristics
first, remote repair as a fallback) and diff two texts. Every action returns a
result object; nothing here raises for bad input.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from smartjson.diff import generate_diff
from smartjson.formatting import format_json, minify_json
from smartjson.llm.json_utils import validate_repaired_json
from smartjson.llm.provider import LLMProviderError
from smartjson.models import (
    DiffResult,
    DiffSide,
    Failure,
    FailureKind,
    FormatResult,
    ParseOutcome,
    ResultSource,
    Success,
)
from smartjson.parsing import smart_local_parse

logger = logging.getLogger(__name__)

REMOTE_REPAIR_REASON = "AI failed to fix the JSON. Please check the input."

Repair = Callable[[str], str]


def _render(text: str, render: Callable[[Any], str]) -> FormatResult:
    outcome = smart_local_parse(text)
    if isinstance(outcome, Failure):
        return FormatResult(outcome)
    return FormatResult(outcome, render(outcome.value), ResultSource.LOCAL)


def format_text(text: str) -> FormatResult:
    """Recover ``text`` locally and pretty-print it."""
    return _render(text, format_json)


def minify_text(text: str) -> FormatResult:
    """Recover ``text`` locally and minify it."""
    return _render(text, minify_json)


def fix_text(text: str, repair: Repair | None = None) -> FormatResult:
    """Recover ``text``, escalating to ``repair`` only when local heuristics fail.

    Args:
        text: Raw user input.
        repair: Remote repair callable, typically ``RepairService.repair``.
            When omitted the local outcome is returned as-is.

    Returns:
        A pretty-printed ``FormatResult`` whose ``source`` says which path
        produced it, or a failure of kind ``EMPTY_INPUT``,
        ``UNRECOVERABLE_SYNTAX`` (no ``repair`` given) or
        ``REMOTE_REPAIR_FAILED``.
    """
    local = _render(text, format_json)
    if local.success or repair is None:
        return local
    if local.outcome.kind is not FailureKind.UNRECOVERABLE_SYNTAX:
        return local

    try:
        value = validate_repaired_json(repair(text))
        rendered = format_json(value)
    except (LLMProviderError, ValueError, RecursionError):
        logger.exception("Remote JSON repair failed")
        return FormatResult(Failure(FailureKind.REMOTE_REPAIR_FAILED, REMOTE_REPAIR_REASON))

    logger.info("Remote repair recovered the input")
    return FormatResult(Success(value), rendered, ResultSource.AI)


def diff_texts(original: str, modified: str) -> DiffResult:
    """Recover both texts locally and diff them.

    The diff only runs when both sides parse; otherwise the failure of the
    first side that could not be recovered is returned with ``side`` set to
    ``"original"`` or ``"modified"``.
    """
    sides: dict[DiffSide, ParseOutcome] = {
        "original": smart_local_parse(original),
        "modified": smart_local_parse(modified),
    }
    for side, outcome in sides.items():
        if isinstance(outcome, Failure):
            return DiffResult(failure=outcome, side=side)

    old = sides["original"]
    new = sides["modified"]
    assert isinstance(old, Success) and isinstance(new, Success)
    return DiffResult(tree=generate_diff(old.value, new.value))
