"""Local recovery parser.

Turns loosely structured text into a JSON value by trying an ordered list of
stages, each a pure ``text -> Success | None`` function. The first stage that
produces a valid parse wins:

1. direct parse, unwrapping one level of double-encoded JSON strings
2. the same text with all line breaks removed (log-wrapped dumps)
3. Python literals (``None``/``True``/``False``) normalised and trailing
   commas removed
4. as 3, plus single-quoted literals rewritten to double quotes, only when
   the text opens with ``{`` or ``[`` so plain prose with apostrophes is left
   alone

When every stage declines the caller gets a ``UNRECOVERABLE_SYNTAX`` failure
and may escalate to :mod:`smartjson.llm`.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Callable, Optional

from smartjson.models import Failure, FailureKind, ParseOutcome, Success

from .transforms import (
    convert_single_quotes,
    looks_like_container,
    normalize_python_literals,
    remove_trailing_commas,
    strip_line_breaks,
)

logger = logging.getLogger(__name__)

EMPTY_INPUT_REASON = "Input is empty"
UNRECOVERABLE_REASON = "Could not parse locally. Try AI Fix."
BOM = "\ufeff"

Stage = Callable[[str], Optional[Success]]


def strip_input(text: str | None) -> str:
    """Trim whitespace and a leading byte order mark."""
    if not text:
        return ""
    return text.strip().lstrip(BOM).strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"{literal} overflows a double")
    return value


def loads_strict(text: str) -> Any:
    """Parse RFC 8259 JSON whose numbers all fit in a double.

    The ``NaN``/``Infinity`` extensions are rejected, and so are literals such
    as ``1e400`` that overflow to infinity, since neither can be serialised.

    Raises:
        ValueError: If ``text`` is not valid JSON (``json.JSONDecodeError``
            is a subclass).
    """
    return json.loads(
        text, parse_constant=_reject_constant, parse_float=_finite_float
    )


def _try_loads(text: str) -> Optional[Success]:
    try:
        return Success(loads_strict(text))
    except (ValueError, RecursionError):
        return None


def parse_direct(text: str) -> Optional[Success]:
    """Parse ``text`` as JSON; a string result is parsed once more if possible."""
    outcome = _try_loads(text)
    if outcome is None or not isinstance(outcome.value, str):
        return outcome
    # "{\"a\": 1}" -> {"a": 1}; a plain "Hello" stays a string
    return _try_loads(outcome.value) or outcome


def parse_single_line(text: str) -> Optional[Success]:
    return _try_loads(strip_line_breaks(text))


def _normalize(text: str) -> str:
    return remove_trailing_commas(normalize_python_literals(text))


def parse_normalized(text: str) -> Optional[Success]:
    return _try_loads(_normalize(text))


def parse_single_quoted(text: str) -> Optional[Success]:
    normalized = _normalize(text)
    if not looks_like_container(normalized):
        return None
    return _try_loads(convert_single_quotes(normalized))


STAGES: tuple[tuple[str, Stage], ...] = (
    ("direct", parse_direct),
    ("single-line", parse_single_line),
    ("normalized", parse_normalized),
    ("single-quoted", parse_single_quoted),
)


def smart_local_parse(text: str | None) -> ParseOutcome:
    """Recover a JSON value from ``text`` using local heuristics only.

    Args:
        text: Raw user input. ``None`` is treated like empty input.

    Returns:
        ``Success`` with the recovered value, or ``Failure`` with kind
        ``EMPTY_INPUT`` or ``UNRECOVERABLE_SYNTAX``.
    """
    cleaned = strip_input(text)
    if not cleaned:
        return Failure(FailureKind.EMPTY_INPUT, EMPTY_INPUT_REASON)

    for name, stage in STAGES:
        outcome = stage(cleaned)
        if outcome is not None:
            logger.debug("Recovered JSON using the %s stage", name)
            return outcome

    logger.debug("No local stage recovered %d characters of input", len(cleaned))
    return Failure(FailureKind.UNRECOVERABLE_SYNTAX, UNRECOVERABLE_REASON)
