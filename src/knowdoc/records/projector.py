"""Record projection.

A record is rendered as one level-1 heading carrying its title, followed by one level-2
section per remaining field::

    # 人工智能基础知识

    ## 定义

    人工智能是模拟人类智能的计算机系统

Editing a section writes the new text back into the record; the document is then
regenerated from the record, never patched in place.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from knowdoc.logging import get_logger
from knowdoc.models.record import KnowledgeRecord

logger = get_logger(__name__)

DEFAULT_TITLE_FIELD = "名称"
DEFAULT_TITLE_PLACEHOLDER = "知识数据"
DEFAULT_PREVIEW_PLACEHOLDER = "数据预览"


class ProjectionError(ValueError):
    """Base error for record projection."""


class InvalidSectionError(ProjectionError):
    """Raised when a section key does not name a field of the record."""

    def __init__(self, section_key: str, record_id: int) -> None:
        super().__init__(f"record {record_id} has no section {section_key!r}")
        self.section_key = section_key
        self.record_id = record_id


def project(
    record: KnowledgeRecord,
    *,
    title_field: str = DEFAULT_TITLE_FIELD,
    title_placeholder: str = DEFAULT_TITLE_PLACEHOLDER,
) -> str:
    """Render a record as a markdown document.

    Args:
        record: Record to render.
        title_field: Field whose value becomes the level-1 heading.
        title_placeholder: Heading used when the title field is absent or empty.

    Returns:
        Markdown text with one ``##`` section per non-title field, in field order.
    """

    parts = [f"# {record.title(title_field) or title_placeholder}\n\n"]
    for key, value in record.fields.items():
        if key == title_field:
            continue
        parts.append(f"## {key}\n\n{value or ''}\n\n")
    return "".join(parts)


def write_back(record: KnowledgeRecord, section_key: str, new_text: str) -> KnowledgeRecord:
    """Return a copy of ``record`` with one field replaced.

    Raises:
        InvalidSectionError: ``section_key`` is not one of the record's fields. The
            record is left untouched.
    """

    if section_key not in record.fields:
        raise InvalidSectionError(section_key, record.id)

    fields = dict(record.fields)
    fields[section_key] = new_text
    logger.debug("Section %r of record %s rewritten (%d chars)", section_key, record.id, len(new_text))
    return record.model_copy(update={"fields": fields})


def project_preview(
    header: Sequence[str],
    row: Mapping[str, object],
    *,
    title_field: str = DEFAULT_TITLE_FIELD,
    placeholder: str = DEFAULT_PREVIEW_PLACEHOLDER,
) -> str:
    """Render a raw source row as a flat, numbered preview.

    Every column (title column included) becomes a level-1 heading ``# {n}.{column}``.
    """

    title = row.get(title_field) or placeholder
    parts = [f"# {title}\n\n"]
    for n, column in enumerate(header, start=1):
        value = row.get(column)
        parts.append(f"# {n}.{column}\n\n{'' if value is None else value}\n\n")
    return "".join(parts)
