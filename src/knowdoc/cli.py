"""CLI entrypoints for knowdoc."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import typer
from rich.console import Console

from knowdoc.api import serve
from knowdoc.config import Settings, load_settings
from knowdoc.logging import configure_logging, get_logger, log_exception
from knowdoc.models.record import KnowledgeRecord, RecordMeta
from knowdoc.outline.render import render_toc_markdown, render_toc_tree
from knowdoc.records.projector import project_preview
from knowdoc.records.sources import SourceSheetError, load_rows, records_from_rows
from knowdoc.records.workspace import RecordNotFoundError, RecordWorkspace

app = typer.Typer(add_completion=False, help="Turn a knowledge spreadsheet into navigable documents")
app.command("serve", help="Start the HTTP API")(serve.main)
logger = get_logger(__name__)
console = Console()


def _load_workspace(
    settings: Settings,
    source: Path,
    *,
    sheet: str | None,
    author: str,
    date_text: str | None,
) -> tuple[RecordWorkspace, list[dict[str, str]]]:
    try:
        rows = load_rows(source, sheet_name=sheet or settings.source_sheet)
    except SourceSheetError as exc:
        log_exception(logger, "Failed to read source", source=str(source))
        raise typer.BadParameter(str(exc), param_hint="SOURCE") from exc
    meta = RecordMeta(author=author, source=source.name, date=date_text or date.today().isoformat())
    return RecordWorkspace(records_from_rows(rows, meta), settings=settings), rows


def _pick(workspace: RecordWorkspace, row: int) -> KnowledgeRecord:
    try:
        return workspace.get(row)
    except RecordNotFoundError as exc:
        typer.echo(f"Row {row} not found ({len(workspace)} records)", err=True)
        raise typer.Exit(code=1) from exc


_SOURCE_ARG = typer.Argument(..., exists=True, dir_okay=False, help="Source .xlsx or .csv file")
_ROW_OPT = typer.Option(0, "--row", "-r", min=0, help="Data row to use, counted from 0")
_SHEET_OPT = typer.Option(None, "--sheet", help="Worksheet name (overrides KNOWDOC_SOURCE_SHEET)")
_AUTHOR_OPT = typer.Option("", "--author", help="Author recorded in record metadata")
_DATE_OPT = typer.Option(None, "--date", help="Date recorded in record metadata (YYYY-MM-DD)")


@app.command()
def render(
    source: Path = _SOURCE_ARG,
    row: int = _ROW_OPT,
    output: Path | None = typer.Option(None, "--output", "-o", help="Write markdown here instead of stdout"),
    sheet: str | None = _SHEET_OPT,
    author: str = _AUTHOR_OPT,
    date_text: str | None = _DATE_OPT,
) -> None:
    """Render one record as a markdown document."""

    settings = load_settings()
    configure_logging(settings.log_level)

    workspace, _ = _load_workspace(settings, source, sheet=sheet, author=author, date_text=date_text)
    record = _pick(workspace, row)
    markdown = workspace.project_record(record)
    if output is None:
        typer.echo(markdown, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markdown, encoding="utf-8")
    typer.echo(str(output))


@app.command()
def outline(
    source: Path = _SOURCE_ARG,
    row: int = _ROW_OPT,
    as_markdown: bool = typer.Option(False, "--markdown", help="Print a markdown link list"),
    sheet: str | None = _SHEET_OPT,
) -> None:
    """Print the table of contents of one record."""

    settings = load_settings()
    configure_logging(settings.log_level)

    workspace, _ = _load_workspace(settings, source, sheet=sheet, author="", date_text=None)
    record = _pick(workspace, row)
    result = workspace.outline_record(record)
    if as_markdown:
        typer.echo(render_toc_markdown(result.nodes), nl=False)
    else:
        console.print(render_toc_tree(result.nodes))


@app.command()
def preview(
    source: Path = _SOURCE_ARG,
    row: int = _ROW_OPT,
    sheet: str | None = _SHEET_OPT,
) -> None:
    """Print the numbered upload preview of a raw row."""

    settings = load_settings()
    configure_logging(settings.log_level)

    _, rows = _load_workspace(settings, source, sheet=sheet, author="", date_text=None)
    if row >= len(rows):
        typer.echo(f"Row {row} not found ({len(rows)} rows)", err=True)
        raise typer.Exit(code=1)
    header = list(rows[0].keys())
    typer.echo(
        project_preview(
            header,
            rows[row],
            title_field=settings.title_field,
            placeholder=settings.preview_placeholder,
        ),
        nl=False,
    )


if __name__ == "__main__":
    app()
