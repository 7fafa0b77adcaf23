"""Local JSON recovery: text transforms and the staged recovery parser."""

from __future__ import annotations

from .recovery import STAGES, loads_strict, smart_local_parse

__all__ = ["STAGES", "loads_strict", "smart_local_parse"]
