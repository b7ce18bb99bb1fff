"""Tests for heading extraction."""

from __future__ import annotations

import re

from knowdoc.outline.extractor import extract_headings, heading_text, parse_document


def test_extract_in_document_order() -> None:
    doc = "# Title\n\ntext\n\n## First\n\nbody\n\n### Deep\n\n## Second\n"
    headings = extract_headings(doc)

    assert [(h.identifier, h.text, h.level) for h in headings] == [
        ("title", "Title", 1),
        ("first", "First", 2),
        ("deep", "Deep", 3),
        ("second", "Second", 2),
    ]


def test_extract_empty_document() -> None:
    assert extract_headings("") == []
    assert extract_headings("just a paragraph\n\n- and a list\n") == []


def test_heading_text_ignores_markup() -> None:
    """It should concatenate descendant text without markup."""

    headings = extract_headings("## Hello *big* `code` [world](https://example.com)\n")

    assert headings[0].text == "Hello big code world"
    assert headings[0].identifier == "hello-big-code-world"


def test_setext_and_nested_headings() -> None:
    """Headings below non-heading nodes should be found; code blocks should not."""

    doc = "Top\n===\n\n> ## Quoted\n\n```\n# not a heading\n```\n\n- item\n"
    headings = extract_headings(doc)

    assert [(h.text, h.level) for h in headings] == [("Top", 1), ("Quoted", 2)]


def test_cjk_headings_are_transliterated() -> None:
    """CJK headings should get deterministic slugs, not random fallbacks."""

    doc = "# 人工智能基础知识\n\n## 定义\n\n## 历史\n\n## 核心技术\n"
    first = extract_headings(doc)
    second = extract_headings(doc)

    ids = [h.identifier for h in first]
    assert ids == [h.identifier for h in second]
    assert ids[1] == "ding-yi"
    assert len(set(ids)) == 4
    assert not any(i.startswith("heading-") for i in ids)
    assert [h.text for h in first] == ["人工智能基础知识", "定义", "历史", "核心技术"]


def test_heading_without_letters_gets_fallback() -> None:
    headings = extract_headings("# !!!\n\n## ???\n")

    ids = [h.identifier for h in headings]
    assert all(re.match(r"^heading-[0-9a-z]{6}$", i) for i in ids)
    assert ids[0] != ids[1]


def test_duplicate_heading_text() -> None:
    """Identical headings keep identical identifiers unless dedupe is requested."""

    doc = "## Notes\n\n## Notes\n"

    assert [h.identifier for h in extract_headings(doc)] == ["notes", "notes"]
    assert [h.identifier for h in extract_headings(doc, dedupe=True)] == ["notes", "notes-1"]


def test_accepts_parsed_tree() -> None:
    tree = parse_document("# A\n\n## B\n")
    assert [h.text for h in extract_headings(tree)] == ["A", "B"]
    heading = next(n for n in tree.walk() if n.type == "heading")
    assert heading_text(heading) == "A"
