"""Shared fixtures."""

from __future__ import annotations

import pytest

from knowdoc.models.record import KnowledgeRecord, RecordMeta


@pytest.fixture
def record() -> KnowledgeRecord:
    return KnowledgeRecord(
        id=0,
        fields={"名称": "X", "A": "a", "B": "b"},
        meta=RecordMeta(author="AI研究员", source="内部知识库", date="2023-05-15"),
    )


@pytest.fixture
def records(record: KnowledgeRecord) -> list[KnowledgeRecord]:
    second = KnowledgeRecord(
        id=1,
        fields={"名称": "Machine Learning", "Types": "supervised\nunsupervised", "Metrics": None},
        meta=RecordMeta(author="数据科学家", source="技术文档", date="2023-06-20", tags=["ml"]),
    )
    return [record, second]
