"""Tree model produced by :func:`smartjson.diff.generate_diff`.

Every node carries a change marker and the surviving value:

- ``unchanged``/``added`` nodes hold the value on the new side
- ``removed`` nodes hold the value that no longer exists
- ``updated`` leaves additionally hold ``old_value`` (serialised as ``oldValue``)
- container nodes (object or array on both sides) hold ``children`` keyed by
  field name or stringified array index

``old_value`` may legitimately be ``None`` (a JSON ``null`` that changed), so
whether it was provided is tracked through pydantic's ``model_fields_set``
rather than by comparing against ``None``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import DiffType


class DiffNode(BaseModel):
    """Immutable node of a structural diff tree."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    type: DiffType
    value: Any = None
    old_value: Any = Field(default=None, alias="oldValue")
    children: Optional[Dict[str, "DiffNode"]] = None

    @model_validator(mode="after")
    def _check_shape(self) -> "DiffNode":
        if self.children is not None and self.type in (DiffType.ADDED, DiffType.REMOVED):
            raise ValueError(f"{self.type.value} nodes cannot carry children")
        if self.has_old_value:
            if self.type is not DiffType.UPDATED:
                raise ValueError("oldValue is only allowed on updated nodes")
            if self.children is not None:
                raise ValueError("a node cannot carry both oldValue and children")
        return self

    @property
    def has_old_value(self) -> bool:
        return "old_value" in self.model_fields_set

    @property
    def changed(self) -> bool:
        return self.type is not DiffType.UNCHANGED

    def child(self, key: str | int) -> "DiffNode":
        """Return the child stored under ``key`` (array indices may be ints)."""
        if self.children is None:
            raise KeyError(key)
        return self.children[str(key)]

    def _own_fields(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, "value": self.value}
        if self.has_old_value:
            data["oldValue"] = self.old_value
        return data

    def to_dict(self) -> dict[str, Any]:
        """Render the tree in its camelCase wire shape, omitting unset fields.

        Built with an explicit stack so deeply nested diffs render too.
        """
        root = self._own_fields()
        pending = [(self, root)]
        while pending:
            node, data = pending.pop()
            if node.children is None:
                continue
            rendered = data["children"] = {}
            for key, child in node.children.items():
                rendered[key] = child._own_fields()
                pending.append((child, rendered[key]))
        return root


DiffNode.model_rebuild()
