"""Tabular source loading.

Only the shape matters here: a header row followed by data rows, turned into ordered
``column -> text`` mappings. Cell typing and sheet formatting are left to the workbook.
"""

from __future__ import annotations

import csv
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from pathlib import Path

from openpyxl import load_workbook

from knowdoc.logging import get_logger
from knowdoc.models.record import KnowledgeRecord, RecordMeta

logger = get_logger(__name__)

DEFAULT_SHEET = "知识源"


class SourceSheetError(ValueError):
    """Raised when a source file cannot supply the expected sheet."""


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat() if value.time() == datetime.min.time() else value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _rows_from_table(table: list[list[object]]) -> list[dict[str, str]]:
    if not table:
        return []
    header = [_cell_text(c).strip() for c in table[0]]
    rows: list[dict[str, str]] = []
    for raw in table[1:]:
        if all(c is None or _cell_text(c) == "" for c in raw):
            continue
        row: dict[str, str] = {}
        for idx, column in enumerate(header):
            if not column:
                continue
            row[column] = _cell_text(raw[idx]) if idx < len(raw) else ""
        rows.append(row)
    return rows


def load_rows(path: Path, *, sheet_name: str = DEFAULT_SHEET) -> list[dict[str, str]]:
    """Read a ``.xlsx`` workbook or ``.csv`` file into ordered rows.

    Args:
        path: Source file.
        sheet_name: Worksheet to read from a workbook. Ignored for CSV.

    Returns:
        One mapping per data row, keyed by the header row. Empty sheets yield ``[]``.

    Raises:
        SourceSheetError: The workbook has no sheet called ``sheet_name``, or the file
            type is not supported.
    """

    suffix = path.suffix.lower()
    if suffix == ".csv":
        with path.open(newline="", encoding="utf-8-sig") as f:
            table: list[list[object]] = [list(r) for r in csv.reader(f)]
    elif suffix in {".xlsx", ".xlsm"}:
        wb = load_workbook(path, read_only=True, data_only=True)
        try:
            if sheet_name not in wb.sheetnames:
                raise SourceSheetError(f'{path.name}: no worksheet named "{sheet_name}"')
            table = [list(r) for r in wb[sheet_name].iter_rows(values_only=True)]
        finally:
            wb.close()
    else:
        raise SourceSheetError(f"{path.name}: unsupported source type {suffix or '(none)'}")

    rows = _rows_from_table(table)
    if not rows:
        logger.warning("Source %s has no data rows", path.name)
    else:
        logger.info("Parsed %s: %d rows", path.name, len(rows))
    return rows


def records_from_rows(rows: Sequence[Mapping[str, object]], meta: RecordMeta) -> list[KnowledgeRecord]:
    """Turn parsed rows into records numbered from 0.

    The header order of the first row fixes the field order of every record; columns a
    later row lacks are filled with empty text.
    """

    if not rows:
        return []
    header = list(rows[0].keys())
    records: list[KnowledgeRecord] = []
    for idx, row in enumerate(rows):
        fields = {column: _cell_text(row.get(column)) for column in header}
        records.append(KnowledgeRecord(id=idx, fields=fields, meta=meta))
    return records
