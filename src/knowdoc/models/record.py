"""Knowledge record models.

A record is one row of the source sheet: an ordered set of named text fields plus the
metadata entered on the upload form.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RecordMeta(BaseModel):
    """Provenance of a record."""

    model_config = ConfigDict(frozen=True)

    author: str = ""
    source: str = ""
    date: str = ""
    tags: list[str] | None = None


class KnowledgeRecord(BaseModel):
    """A structured knowledge item.

    ``fields`` keeps insertion order; that order is the section order of the generated
    document. The key set is fixed when the record is created.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    fields: dict[str, str | None] = Field(default_factory=dict)
    meta: RecordMeta = Field(default_factory=RecordMeta)

    def title(self, title_field: str) -> str | None:
        """Return the title text, or ``None`` when the title field is absent or empty."""

        return self.fields.get(title_field) or None
