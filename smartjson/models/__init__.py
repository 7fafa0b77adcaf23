"""Public model exports for the project.

Keep the :mod:`smartjson` namespace clean: tests and other modules should import
``from smartjson.models import DiffNode, Success, Failure``.
"""

from __future__ import annotations

from .diff_node import DiffNode
from .enums import DiffType, FailureKind, ResultSource
from .outcome import DiffResult, DiffSide, Failure, FormatResult, ParseOutcome, Success

__all__ = [
    "DiffNode",
    "DiffResult",
    "DiffSide",
    "DiffType",
    "Failure",
    "FailureKind",
    "FormatResult",
    "ParseOutcome",
    "ResultSource",
    "Success",
]
