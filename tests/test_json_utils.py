from __future__ import annotations

import pytest

from smartjson.llm.json_utils import strip_code_fences, validate_repaired_json


def test_strip_code_fences_removes_json_fence() -> None:
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_code_fences_removes_bare_fence() -> None:
    assert strip_code_fences("```\n[1, 2]\n```  ") == "[1, 2]"


def test_strip_code_fences_leaves_plain_text() -> None:
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_validate_accepts_strict_json_scalars() -> None:
    assert validate_repaired_json('"just a string"') == "just a string"
    assert validate_repaired_json("3") == 3


def test_validate_repairs_json_object_in_text() -> None:
    text = "Here is the result: {\"key\": \"value\",}. Thanks"
    result = validate_repaired_json(text)
    assert isinstance(result, dict)
    assert result["key"] == "value"


def test_validate_repairs_json_array_in_text() -> None:
    text = 'Some preamble text [ {"id": 1, "ok": true} ] end'
    result = validate_repaired_json(text)
    assert isinstance(result, list)
    assert result[0]["id"] == 1


def test_validate_rejects_text_without_json() -> None:
    with pytest.raises(ValueError):
        validate_repaired_json("Sorry, I cannot help with that.")


def test_validate_rejects_empty_text() -> None:
    with pytest.raises(ValueError):
        validate_repaired_json("   ")


def test_validate_rejects_overflowing_numbers() -> None:
    with pytest.raises(ValueError):
        validate_repaired_json('{"big": 1e400}')


def test_validate_turns_deep_nesting_into_value_error() -> None:
    with pytest.raises(ValueError, match="nested too deeply"):
        validate_repaired_json("[" * 100000)
