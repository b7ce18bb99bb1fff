"""In-memory record workspace.

Holds the records of one upload in source order. Records are replaced, never edited in
place: a commit swaps in the record returned by ``write_back``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from knowdoc.config import Settings
from knowdoc.logging import get_logger
from knowdoc.models.outline import Outline
from knowdoc.models.record import KnowledgeRecord
from knowdoc.outline.builder import outline_document
from knowdoc.records.projector import project, write_back

logger = get_logger(__name__)


class RecordNotFoundError(LookupError):
    """Raised when a record id is not in the workspace."""


class RecordWorkspace:
    """Ordered collection of the records being edited."""

    def __init__(self, records: Iterable[KnowledgeRecord] = (), *, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._lock = threading.Lock()
        self._records: dict[int, KnowledgeRecord] = {}
        self.load(records)

    @property
    def settings(self) -> Settings:
        return self._settings

    def load(self, records: Iterable[KnowledgeRecord]) -> None:
        """Replace the workspace content."""

        loaded = {r.id: r for r in records}
        with self._lock:
            self._records = loaded
        logger.info("Workspace loaded with %d records", len(loaded))

    def records(self) -> list[KnowledgeRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def get(self, record_id: int) -> KnowledgeRecord:
        try:
            return self._records[record_id]
        except KeyError:
            raise RecordNotFoundError(f"record {record_id} not found") from None

    def commit(self, record_id: int, section_key: str, text: str) -> KnowledgeRecord:
        """Write one section back into a record and store the result.

        Raises:
            RecordNotFoundError: Unknown record id.
            InvalidSectionError: ``section_key`` is not a field of the record.
        """

        with self._lock:
            current = self.get(record_id)
            updated = write_back(current, section_key, text)
            self._records[record_id] = updated
        logger.info("Committed section %r of record %s", section_key, record_id)
        return updated

    def project_record(self, record: KnowledgeRecord) -> str:
        """Render ``record`` with the workspace title settings."""

        return project(
            record,
            title_field=self._settings.title_field,
            title_placeholder=self._settings.title_placeholder,
        )

    def outline_record(self, record: KnowledgeRecord) -> Outline:
        """Extract and nest the headings of ``record``'s document."""

        return outline_document(self.project_record(record), **self._settings.allocation_options())

    def document(self, record_id: int) -> str:
        return self.project_record(self.get(record_id))

    def outline(self, record_id: int) -> Outline:
        return self.outline_record(self.get(record_id))

    def display_title(self, record: KnowledgeRecord) -> str:
        return record.title(self._settings.title_field) or f"未命名文件 {record.id}"
