"""Result types returned by the recovery parser and the workflow actions.

The parser never raises for malformed input. It returns either a
:class:`Success` carrying the recovered value or a :class:`Failure` naming the
failure kind and a short, user-facing reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Union

from .enums import FailureKind, ResultSource

if TYPE_CHECKING:
    from .diff_node import DiffNode

DiffSide = Literal["original", "modified"]


@dataclass(frozen=True)
class Success:
    """A successfully recovered JSON value (which may itself be ``None``)."""

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A failed recovery attempt."""

    kind: FailureKind
    reason: str

    @property
    def ok(self) -> bool:
        return False


ParseOutcome = Union[Success, Failure]


@dataclass(frozen=True)
class FormatResult:
    """Outcome of a user-facing action such as format, minify or AI fix.

    ``text`` holds the rendered JSON and ``source`` says whether the local
    heuristics or the remote repair provider produced it. Both are ``None``
    when the action failed.
    """

    outcome: ParseOutcome
    text: str | None = None
    source: ResultSource | None = None

    @property
    def success(self) -> bool:
        return self.outcome.ok

    @property
    def error(self) -> str | None:
        if isinstance(self.outcome, Failure):
            return self.outcome.reason
        return None


@dataclass(frozen=True)
class DiffResult:
    """Outcome of diffing two raw texts.

    ``tree`` is only set when both sides parsed; otherwise ``failure`` names
    the first side that could not be recovered.
    """

    tree: DiffNode | None = None
    failure: Failure | None = None
    side: DiffSide | None = None

    @property
    def success(self) -> bool:
        return self.tree is not None
