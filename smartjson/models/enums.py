"""Enumerations shared by the parser, the diff engine and the workflow layer."""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Why an input could not be turned into a JSON value.

    Values are stable strings so they can be shown to users or written to logs.
    """

    EMPTY_INPUT = "EMPTY_INPUT"
    UNRECOVERABLE_SYNTAX = "UNRECOVERABLE_SYNTAX"
    REMOTE_REPAIR_FAILED = "REMOTE_REPAIR_FAILED"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class DiffType(str, Enum):
    """Change marker carried by every node of a diff tree."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class ResultSource(str, Enum):
    """Where a successful repair came from.

    Values:
        LOCAL: the local heuristics recovered the value
        AI: the remote repair provider produced the value
    """

    LOCAL = "local"
    AI = "ai"
