"""Tests for tabular source loading."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from openpyxl import Workbook

from knowdoc.models.record import RecordMeta
from knowdoc.records.sources import SourceSheetError, load_rows, records_from_rows


def _write_xlsx(path: Path, sheet: str, table: list[list[object]]) -> None:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet
    for row in table:
        ws.append(row)
    wb.save(path)


def test_load_csv(tmp_path: Path) -> None:
    path = tmp_path / "source.csv"
    path.write_text("名称,定义,历史\nAI,模拟智能,1956\nML,,\n", encoding="utf-8")

    rows = load_rows(path)

    assert rows == [
        {"名称": "AI", "定义": "模拟智能", "历史": "1956"},
        {"名称": "ML", "定义": "", "历史": ""},
    ]
    assert list(rows[0]) == ["名称", "定义", "历史"]


def test_load_xlsx_named_sheet(tmp_path: Path) -> None:
    path = tmp_path / "source.xlsx"
    _write_xlsx(
        path,
        "知识源",
        [
            ["名称", "数量", "日期"],
            ["AI", 3, datetime(2023, 5, 15)],
            [None, None, None],
            ["ML", 2.5, None],
        ],
    )

    rows = load_rows(path)

    assert rows == [
        {"名称": "AI", "数量": "3", "日期": "2023-05-15"},
        {"名称": "ML", "数量": "2.5", "日期": ""},
    ]


def test_load_xlsx_missing_sheet(tmp_path: Path) -> None:
    """A workbook without the expected sheet should be rejected."""

    path = tmp_path / "source.xlsx"
    _write_xlsx(path, "Sheet1", [["名称"], ["AI"]])

    with pytest.raises(SourceSheetError):
        load_rows(path)
    assert load_rows(path, sheet_name="Sheet1") == [{"名称": "AI"}]


def test_load_empty_and_unsupported(tmp_path: Path) -> None:
    empty = tmp_path / "empty.csv"
    empty.write_text("名称,定义\n", encoding="utf-8")
    assert load_rows(empty) == []

    with pytest.raises(SourceSheetError):
        load_rows(tmp_path / "notes.txt")


def test_records_from_rows() -> None:
    """Records should be numbered from 0 with the first row's header order."""

    meta = RecordMeta(author="a", source="s.xlsx", date="2024-01-01")
    records = records_from_rows(
        [{"名称": "AI", "定义": "d"}, {"定义": "d2", "名称": "ML"}, {"名称": "DL"}],
        meta,
    )

    assert [r.id for r in records] == [0, 1, 2]
    assert list(records[1].fields) == ["名称", "定义"]
    assert records[2].fields == {"名称": "DL", "定义": ""}
    assert all(r.meta == meta for r in records)
    assert records_from_rows([], meta) == []
