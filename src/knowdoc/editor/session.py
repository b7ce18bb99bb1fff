"""Editor session.

Mirrors the editing screen without any UI: one current record, at most one section being
edited, and a document plus outline that are recomputed whenever the record changes.
"""

from __future__ import annotations

from knowdoc.logging import editor_context, get_logger
from knowdoc.models.outline import Outline
from knowdoc.models.record import KnowledgeRecord
from knowdoc.outline.builder import outline_document
from knowdoc.outline.navigation import DocumentView, NavigationController, Scheduler
from knowdoc.records.projector import InvalidSectionError
from knowdoc.records.workspace import RecordWorkspace

logger = get_logger(__name__)


class EditorSession:
    """State of one editing session over a workspace."""

    def __init__(self, workspace: RecordWorkspace, *, navigator: NavigationController | None = None) -> None:
        self._workspace = workspace
        self._navigator = navigator
        self._settings = workspace.settings

        self._current: KnowledgeRecord | None = None
        self._document = ""
        self._outline = Outline()
        self.editing_section: str | None = None
        self.draft = ""

        records = workspace.records()
        if records:
            self._show(records[0])

    @property
    def current(self) -> KnowledgeRecord | None:
        return self._current

    @property
    def document(self) -> str:
        return self._document

    @property
    def outline(self) -> Outline:
        return self._outline

    def attach_navigator(self, navigator: NavigationController | None) -> None:
        self._navigator = navigator

    def bind_view(self, view: DocumentView, scheduler: Scheduler) -> NavigationController:
        """Attach a navigator for ``view`` configured from the workspace settings."""

        navigator = NavigationController.from_settings(view, scheduler, self._settings)
        self._navigator = navigator
        return navigator

    def select(self, record_id: int) -> bool:
        """Make ``record_id`` the current record. Unknown ids are ignored."""

        if record_id not in self._workspace:
            logger.debug("Ignoring selection of unknown record %s", record_id)
            return False
        with editor_context(record_id=record_id, event="select"):
            self._show(self._workspace.get(record_id))
            logger.info("Record selected")
        return True

    def start_editing(self, section_key: str) -> str:
        """Open ``section_key`` for editing and return its current text."""

        record = self._require_current()
        if section_key not in record.fields:
            raise InvalidSectionError(section_key, record.id)
        self.editing_section = section_key
        self.draft = record.fields[section_key] or ""
        return self.draft

    def update_draft(self, text: str) -> None:
        self.draft = text

    def save_editing(self) -> KnowledgeRecord | None:
        """Commit the draft of the open section.

        Returns:
            The updated record, or ``None`` when no section is open.
        """

        if self.editing_section is None or self._current is None:
            return None
        return self.commit(self.editing_section, self.draft)

    def cancel_editing(self) -> None:
        self.editing_section = None
        self.draft = ""

    def commit(self, section_key: str, text: str) -> KnowledgeRecord:
        """Write ``text`` into ``section_key`` of the current record and regenerate."""

        record = self._require_current()
        with editor_context(record_id=record.id, event="commit"):
            updated = self._workspace.commit(record.id, section_key, text)
            self._show(updated)
        return updated

    def navigate_to(self, identifier: str) -> bool:
        """Navigate to an outline entry of the current document."""

        if self._navigator is None:
            return False
        with editor_context(record_id=self._current.id if self._current else None, event="navigate"):
            return self._navigator.navigate_to(identifier)

    def _require_current(self) -> KnowledgeRecord:
        if self._current is None:
            raise LookupError("no record selected")
        return self._current

    def _show(self, record: KnowledgeRecord) -> None:
        self._current = record
        self._document = self._workspace.project_record(record)
        self._outline = outline_document(self._document, **self._settings.allocation_options())
        self.editing_section = None
        self.draft = ""
        if self._navigator is not None:
            self._navigator.reset()
