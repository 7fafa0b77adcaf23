"""Cleanup and validation of repaired JSON returned by LLM providers.

Models are told to answer with raw JSON but regularly wrap it in Markdown
code fences anyway. :func:`strip_code_fences` removes that wrapper and
:func:`validate_repaired_json` checks that what is left is a JSON value.
"""

from __future__ import annotations

import re
from typing import Any

from json_repair import repair_json

from smartjson.parsing import loads_strict

_LEADING_FENCE_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE_RE = re.compile(r"\s*```$")

_TOO_DEEP = "Response JSON is nested too deeply to parse."


def strip_code_fences(text: str) -> str:
    """Remove a leading ```` ```json ```` / ```` ``` ```` fence and a trailing fence.

    Example:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    text = text.strip()
    text = _LEADING_FENCE_RE.sub("", text)
    text = _TRAILING_FENCE_RE.sub("", text)
    return text.strip()


def _extract_fragment(text: str) -> str:
    """Return the text between the outermost JSON object or array delimiters."""
    start_obj = text.find("{")
    start_arr = text.find("[")

    if start_obj == -1 and start_arr == -1:
        raise ValueError("Response text does not contain JSON object or array delimiters.")

    # Choose whichever opener appears first in the response text.
    if start_obj == -1 or (start_arr != -1 and start_arr < start_obj):
        start, end_char = start_arr, "]"
    else:
        start, end_char = start_obj, "}"

    end = text.rfind(end_char)
    if end == -1 or end <= start:
        raise ValueError("Response text does not contain matching JSON delimiters.")
    return text[start : end + 1]


def validate_repaired_json(text: str) -> Any:
    """Parse cleaned provider output into a JSON value.

    Strict parsing is tried first. If the model still produced near-JSON
    (trailing commas, commentary around the payload) the outermost object or
    array is extracted and passed through :func:`json_repair.repair_json`.

    Args:
        text: Provider output with code fences already stripped.

    Returns:
        The parsed JSON value.

    Raises:
        ValueError: If no JSON value can be recovered, including output
            nested beyond the interpreter recursion limit
            (``json.JSONDecodeError`` is a subclass).
    """
    if not text or not text.strip():
        raise ValueError("Response text is empty.")

    try:
        return loads_strict(text)
    except RecursionError as exc:
        raise ValueError(_TOO_DEEP) from exc
    except ValueError:
        pass

    fragment = _extract_fragment(text)
    try:
        return loads_strict(repair_json(fragment))
    except RecursionError as exc:
        raise ValueError(_TOO_DEEP) from exc
