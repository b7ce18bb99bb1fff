"""FastAPI app exposing the record workspace and the outline read path."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from knowdoc.config import Settings, load_settings
from knowdoc.logging import configure_logging, editor_context, get_logger
from knowdoc.models.outline import Outline
from knowdoc.models.record import KnowledgeRecord, RecordMeta
from knowdoc.records.projector import InvalidSectionError
from knowdoc.records.sources import load_rows, records_from_rows
from knowdoc.records.workspace import RecordNotFoundError, RecordWorkspace


class LoadRequest(BaseModel):
    """Parsed source rows plus the metadata entered on the upload form."""

    rows: list[dict[str, str | None]] = Field(default_factory=list)
    meta: RecordMeta = Field(default_factory=RecordMeta)


class RecordSummary(BaseModel):
    id: int
    title: str
    author: str
    date: str


class DocumentResponse(BaseModel):
    id: int
    markdown: str


class SectionUpdate(BaseModel):
    text: str


def create_app(settings: Settings | None = None, workspace: RecordWorkspace | None = None) -> FastAPI:
    """Create FastAPI app."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    if workspace is None:
        workspace = RecordWorkspace(settings=settings)
        if settings.source_path is not None:
            rows = load_rows(settings.source_path, sheet_name=settings.source_sheet)
            workspace.load(records_from_rows(rows, RecordMeta(source=settings.source_path.name)))

    app = FastAPI(title="knowdoc", version="0.1.0")
    app.state.workspace = workspace

    def _get(record_id: int) -> KnowledgeRecord:
        try:
            return workspace.get(record_id)
        except RecordNotFoundError:
            raise HTTPException(status_code=404, detail="record not found") from None

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/records")
    def load_records(req: LoadRequest) -> list[RecordSummary]:
        logger.info("API load requested", extra={"rows": len(req.rows)})
        workspace.load(records_from_rows(req.rows, req.meta))
        return list_records()

    @app.get("/records")
    def list_records() -> list[RecordSummary]:
        return [
            RecordSummary(
                id=r.id,
                title=workspace.display_title(r),
                author=r.meta.author,
                date=r.meta.date,
            )
            for r in workspace.records()
        ]

    @app.get("/records/{record_id}")
    def get_record(record_id: int) -> KnowledgeRecord:
        return _get(record_id)

    @app.get("/records/{record_id}/document")
    def get_document(record_id: int) -> DocumentResponse:
        record = _get(record_id)
        return DocumentResponse(id=record.id, markdown=workspace.project_record(record))

    @app.get("/records/{record_id}/outline")
    def get_outline(record_id: int) -> Outline:
        return workspace.outline_record(_get(record_id))

    @app.put("/records/{record_id}/sections/{section_key}")
    def put_section(record_id: int, section_key: str, body: SectionUpdate) -> KnowledgeRecord:
        with editor_context(record_id=record_id, event="commit"):
            try:
                return workspace.commit(record_id, section_key, body.text)
            except RecordNotFoundError:
                raise HTTPException(status_code=404, detail="record not found") from None
            except InvalidSectionError as exc:
                logger.warning("Rejected edit: %s", exc)
                raise HTTPException(status_code=400, detail=str(exc)) from exc

    return app
