"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from knowdoc.api.app import create_app
from knowdoc.config import Settings
from knowdoc.models.record import KnowledgeRecord
from knowdoc.records.workspace import RecordWorkspace


@pytest.fixture
def client(records: list[KnowledgeRecord]) -> TestClient:
    settings = Settings(log_level="WARNING")
    return TestClient(create_app(settings, RecordWorkspace(records, settings=settings)))


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_list_records(client: TestClient) -> None:
    body = client.get("/records").json()
    assert body == [
        {"id": 0, "title": "X", "author": "AI研究员", "date": "2023-05-15"},
        {"id": 1, "title": "Machine Learning", "author": "数据科学家", "date": "2023-06-20"},
    ]


def test_document_and_outline(client: TestClient) -> None:
    doc = client.get("/records/0/document").json()
    assert doc == {"id": 0, "markdown": "# X\n\n## A\n\na\n\n## B\n\nb\n\n"}

    outline = client.get("/records/0/outline").json()
    assert [h["identifier"] for h in outline["headings"]] == ["x", "a", "b"]
    assert outline["nodes"][0]["identifier"] == "x"
    assert [c["text"] for c in outline["nodes"][0]["children"]] == ["A", "B"]


def test_put_section(client: TestClient) -> None:
    resp = client.put("/records/0/sections/A", json={"text": "a2"})
    assert resp.status_code == 200
    assert resp.json()["fields"] == {"名称": "X", "A": "a2", "B": "b"}

    doc = client.get("/records/0/document").json()["markdown"]
    assert doc == "# X\n\n## A\n\na2\n\n## B\n\nb\n\n"


def test_put_unknown_section(client: TestClient) -> None:
    """Unknown sections should be rejected without touching the record."""

    resp = client.put("/records/0/sections/Z", json={"text": "x"})
    assert resp.status_code == 400
    assert client.get("/records/0").json()["fields"] == {"名称": "X", "A": "a", "B": "b"}


def test_unknown_record(client: TestClient) -> None:
    assert client.get("/records/9").status_code == 404
    assert client.get("/records/9/outline").status_code == 404
    assert client.put("/records/9/sections/A", json={"text": "x"}).status_code == 404


def test_load_records(client: TestClient) -> None:
    resp = client.post(
        "/records",
        json={
            "rows": [{"名称": "New", "Body": "text"}, {"名称": None, "Body": "more"}],
            "meta": {"author": "me", "source": "upload.xlsx", "date": "2024-02-02"},
        },
    )

    assert resp.status_code == 200
    assert [r["title"] for r in resp.json()] == ["New", "未命名文件 1"]
    assert client.get("/records/1").json()["fields"] == {"名称": "", "Body": "more"}


def test_document_and_outline_single_lookup(records: list[KnowledgeRecord]) -> None:
    """Document and outline endpoints should resolve the record exactly once."""

    settings = Settings(log_level="WARNING")

    class CountingWorkspace(RecordWorkspace):
        lookups = 0

        def get(self, record_id: int) -> KnowledgeRecord:
            CountingWorkspace.lookups += 1
            return super().get(record_id)

    client = TestClient(create_app(settings, CountingWorkspace(records, settings=settings)))

    client.get("/records/1/document")
    assert CountingWorkspace.lookups == 1
    outline = client.get("/records/1/outline").json()
    assert CountingWorkspace.lookups == 2
    assert outline["headings"][0]["identifier"] == "machine-learning"
