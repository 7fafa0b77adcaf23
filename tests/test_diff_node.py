from __future__ import annotations

import pytest
from pydantic import ValidationError

from smartjson.models import DiffNode, DiffType


def test_to_dict_omits_unset_fields() -> None:
    node = DiffNode(
        type=DiffType.UPDATED,
        value={"a": 2},
        children={"a": DiffNode(type=DiffType.UPDATED, value=2, old_value=1)},
    )
    assert node.to_dict() == {
        "type": "updated",
        "value": {"a": 2},
        "children": {"a": {"type": "updated", "value": 2, "oldValue": 1}},
    }


def test_old_value_accepts_wire_alias() -> None:
    node = DiffNode.model_validate({"type": "updated", "value": 2, "oldValue": 1})
    assert node.old_value == 1
    assert node.has_old_value


def test_nodes_are_immutable() -> None:
    node = DiffNode(type=DiffType.ADDED, value=1)
    with pytest.raises(ValidationError):
        node.value = 2  # type: ignore[misc]


def test_added_node_cannot_have_children() -> None:
    with pytest.raises(ValidationError):
        DiffNode(type=DiffType.ADDED, value=[], children={})


def test_old_value_only_on_updated_leaves() -> None:
    with pytest.raises(ValidationError):
        DiffNode(type=DiffType.REMOVED, value=1, old_value=0)
    with pytest.raises(ValidationError):
        DiffNode(type=DiffType.UPDATED, value=[1], old_value=[], children={})


def test_child_lookup_on_leaf_raises_key_error() -> None:
    with pytest.raises(KeyError):
        DiffNode(type=DiffType.UNCHANGED, value=1).child("0")


def test_to_dict_renders_nested_children_in_order() -> None:
    leaf = DiffNode(type=DiffType.UPDATED, value=2, old_value=None)
    inner = DiffNode(type=DiffType.UPDATED, value={"y": 2}, children={"y": leaf})
    root = DiffNode(
        type=DiffType.UPDATED,
        value={"x": {"y": 2}, "z": 0},
        children={"x": inner, "z": DiffNode(type=DiffType.REMOVED, value=0)},
    )

    assert root.to_dict() == {
        "type": "updated",
        "value": {"x": {"y": 2}, "z": 0},
        "children": {
            "x": {
                "type": "updated",
                "value": {"y": 2},
                "children": {"y": {"type": "updated", "value": 2, "oldValue": None}},
            },
            "z": {"type": "removed", "value": 0},
        },
    }
    assert list(root.to_dict()["children"]) == ["x", "z"]


def test_to_dict_handles_trees_deeper_than_the_recursion_limit() -> None:
    node = DiffNode(type=DiffType.ADDED, value=0)
    for _ in range(5000):
        node = DiffNode(type=DiffType.UPDATED, value=None, children={"0": node})

    data = node.to_dict()
    depth = 0
    while "children" in data:
        data = data["children"]["0"]
        depth += 1
    assert depth == 5000
    assert data == {"type": "added", "value": 0}
