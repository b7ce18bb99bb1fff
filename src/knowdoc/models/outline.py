"""Outline models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HeadingNode(BaseModel):
    """A heading found in a document, in document order."""

    identifier: str
    text: str
    level: int = Field(ge=1, le=6)


class OutlineNode(BaseModel):
    """Nested table-of-contents node.

    Every child is strictly deeper than its parent.
    """

    identifier: str
    text: str
    level: int = Field(ge=1, le=6)

    children: list["OutlineNode"] = Field(default_factory=list)


class Outline(BaseModel):
    """Flat headings together with the forest built from them."""

    headings: list[HeadingNode] = Field(default_factory=list)
    nodes: list[OutlineNode] = Field(default_factory=list)
