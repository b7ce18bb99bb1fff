"""Knowledge records: projection to documents, loading and the in-memory workspace."""

from __future__ import annotations

from knowdoc.records.projector import (
    InvalidSectionError,
    ProjectionError,
    project,
    project_preview,
    write_back,
)
from knowdoc.records.workspace import RecordNotFoundError, RecordWorkspace

__all__ = [
    "InvalidSectionError",
    "ProjectionError",
    "RecordNotFoundError",
    "RecordWorkspace",
    "project",
    "project_preview",
    "write_back",
]
