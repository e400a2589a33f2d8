"""Shared core type aliases used across rows, statements, and ports."""

from __future__ import annotations

from typing import Any, List, Sequence

PositionalParams = List[Any]
ColumnNames = Sequence[str]
