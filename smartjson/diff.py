"""Structural diff between two JSON values.

The result is a :class:`~smartjson.models.DiffNode` tree. Containers of the
same kind are compared child by child; everything else is either identical
(``unchanged``) or replaced (``updated`` with ``old_value``).

Child order is reproducible: arrays by ascending index, objects by the keys of
the old value in insertion order followed by keys only present in the new one.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from smartjson.models import DiffNode, DiffType

_CONTAINER_KINDS = ("array", "object")
_MISSING = object()


def json_kind(value: Any) -> str:
    """Return the JSON type name of ``value``.

    ``bool`` is checked before numbers because it subclasses ``int``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Value of type {type(value).__name__} is not a JSON value")


def _leaf_diff(old: Any, new: Any) -> Optional[DiffNode]:
    """Diff two values that are not both containers of the same kind.

    Returns ``None`` when they are, so the caller descends into their children.
    """
    old_kind = json_kind(old)
    new_kind = json_kind(new)
    if old_kind == new_kind:
        if old_kind in _CONTAINER_KINDS:
            return None
        if old == new:
            return DiffNode(type=DiffType.UNCHANGED, value=old)
    return DiffNode(type=DiffType.UPDATED, value=new, old_value=old)


def _child_pairs(old: Any, new: Any) -> Iterator[tuple[str, Any, Any]]:
    if isinstance(old, dict):
        for key in dict.fromkeys([*old, *new]):
            yield key, old.get(key, _MISSING), new.get(key, _MISSING)
        return
    for index in range(max(len(old), len(new))):
        yield (
            str(index),
            old[index] if index < len(old) else _MISSING,
            new[index] if index < len(new) else _MISSING,
        )


class _Frame:
    """A container pair whose children are still being compared."""

    __slots__ = ("key", "value", "pairs", "children")

    def __init__(self, key: str | None, old: Any, new: Any) -> None:
        self.key = key
        self.value = new
        self.pairs = _child_pairs(old, new)
        self.children: dict[str, DiffNode] = {}

    def summarise(self) -> DiffNode:
        changed = any(child.changed for child in self.children.values())
        return DiffNode(
            type=DiffType.UPDATED if changed else DiffType.UNCHANGED,
            value=self.value,
            children=self.children,
        )


def generate_diff(old: Any, new: Any) -> DiffNode:
    """Compare ``old`` with ``new`` and return the root of the diff tree.

    Nested containers are walked with an explicit stack, so any depth the
    parser accepts can be diffed.

    Args:
        old: Previously parsed JSON value.
        new: Newly parsed JSON value.

    Returns:
        A fresh, immutable tree; inputs are never modified.

    Raises:
        TypeError: If either value contains a non-JSON type.
    """
    root = _leaf_diff(old, new)
    if root is not None:
        return root

    stack = [_Frame(None, old, new)]
    while True:
        frame = stack[-1]
        for key, old_child, new_child in frame.pairs:
            if old_child is _MISSING:
                frame.children[key] = DiffNode(type=DiffType.ADDED, value=new_child)
            elif new_child is _MISSING:
                frame.children[key] = DiffNode(type=DiffType.REMOVED, value=old_child)
            else:
                node = _leaf_diff(old_child, new_child)
                if node is None:
                    stack.append(_Frame(key, old_child, new_child))
                    break
                frame.children[key] = node
        else:
            # every child compared; fold the frame into its parent
            stack.pop()
            node = frame.summarise()
            if not stack:
                return node
            stack[-1].children[frame.key] = node
