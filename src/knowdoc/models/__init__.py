"""Pydantic models used across the project."""

from __future__ import annotations

from knowdoc.models.outline import HeadingNode, Outline, OutlineNode
from knowdoc.models.record import KnowledgeRecord, RecordMeta

__all__ = [
    "HeadingNode",
    "KnowledgeRecord",
    "Outline",
    "OutlineNode",
    "RecordMeta",
]
