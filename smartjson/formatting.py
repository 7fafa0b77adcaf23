"""Serialisation helpers layered on the recovery parser's output."""

from __future__ import annotations

import json
from typing import Any


def format_json(value: Any) -> str:
    """Pretty-print ``value`` with two-space indentation, keeping key order."""
    return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)


def minify_json(value: Any) -> str:
    """Serialise ``value`` without insignificant whitespace."""
    return json.dumps(
        value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )
