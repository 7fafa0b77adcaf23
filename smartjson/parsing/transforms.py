"""Pure text transforms used by the recovery heuristics.

Each transform takes text and returns new text; none of them validate the
result. Keeping them separate lets the recovery stages combine them in a fixed
order and lets tests exercise every rewrite on its own.

Known limitations:

- Literal normalisation works on whole-word matches only, so ``None``,
  ``True`` and ``False`` appearing as standalone words inside string values
  are rewritten too (``"True Detective"`` becomes ``"true Detective"``).
- Single-quote conversion is a regular expression, not a tokenizer. Python
  escapes such as ``\\'`` survive the rewrite and are not valid JSON escapes,
  and a double-quoted string containing an apostrophe can be split.
"""

from __future__ import annotations

import re

# ASCII word boundaries: "éNone" still matches.
_PYTHON_LITERALS = {"None": "null", "True": "true", "False": "false"}
_PYTHON_LITERAL_RE = re.compile(r"\b(None|True|False)\b", re.ASCII)

_LINE_BREAK_RE = re.compile(r"[\r\n]+")
_TRAILING_COMMA_RE = re.compile(r",(\s*[\]}])")

# '  content made of non-quote/non-backslash chars or backslash escapes  '
_SINGLE_QUOTED_RE = re.compile(r"'((?:[^'\\]|\\.)*)'")

CONTAINER_OPENERS = ("{", "[")


def strip_line_breaks(text: str) -> str:
    """Remove every CR/LF so values split by log wrapping join back up."""
    return _LINE_BREAK_RE.sub("", text)


def normalize_python_literals(text: str) -> str:
    """Rewrite whole-word ``None``/``True``/``False`` to their JSON spelling."""
    return _PYTHON_LITERAL_RE.sub(lambda match: _PYTHON_LITERALS[match.group(1)], text)


def remove_trailing_commas(text: str) -> str:
    """Drop commas directly followed (modulo whitespace) by ``]`` or ``}``."""
    return _TRAILING_COMMA_RE.sub(r"\1", text)


def looks_like_container(text: str) -> bool:
    return text.startswith(CONTAINER_OPENERS)


def _requote(match: re.Match[str]) -> str:
    content = match.group(1).replace('"', '\\"')
    return f'"{content}"'


def convert_single_quotes(text: str) -> str:
    """Turn single-quoted literals into double-quoted JSON strings.

    Double quotes inside the literal are escaped so the result stays a single
    JSON string: ``'say "hi"'`` becomes ``"say \\"hi\\""``.
    """
    return _SINGLE_QUOTED_RE.sub(_requote, text)
