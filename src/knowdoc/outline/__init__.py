"""Outline engine: heading extraction, table-of-contents building and navigation."""

from __future__ import annotations

from knowdoc.outline.builder import build_outline, flatten_outline, outline_document
from knowdoc.outline.extractor import extract_headings, heading_text, parse_document
from knowdoc.outline.navigation import NavigationController, StaticDocumentView, StaticElement

__all__ = [
    "NavigationController",
    "StaticDocumentView",
    "StaticElement",
    "build_outline",
    "extract_headings",
    "flatten_outline",
    "heading_text",
    "outline_document",
    "parse_document",
]
