"""Heading extraction from generated documents."""

from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from knowdoc.models.outline import HeadingNode
from knowdoc.utils.ids import allocate_identifier

_TEXT_NODE_TYPES = {"text", "code_inline", "html_inline"}
_BREAK_NODE_TYPES = {"softbreak", "hardbreak"}


def parse_document(markdown: str) -> SyntaxTreeNode:
    """Parse markdown into a typed node tree (CommonMark)."""

    md = MarkdownIt("commonmark")
    return SyntaxTreeNode(md.parse(markdown))


def heading_text(node: SyntaxTreeNode) -> str:
    """Concatenate the plain text below ``node``, ignoring markup."""

    parts: list[str] = []
    for child in node.walk(include_self=False):
        if child.type in _TEXT_NODE_TYPES:
            parts.append(child.content)
        elif child.type in _BREAK_NODE_TYPES:
            parts.append("\n")
    return "".join(parts)


def extract_headings(
    document: str | SyntaxTreeNode,
    *,
    prefix: str = "heading",
    token_length: int = 6,
    dedupe: bool = False,
) -> list[HeadingNode]:
    """Return every heading of ``document`` in document order.

    Args:
        document: Markdown text or an already parsed tree.
        prefix: Fallback identifier prefix for headings without a usable slug.
        token_length: Length of the random part of fallback identifiers.
        dedupe: Disambiguate identical slugs within this call.

    Returns:
        Flat ``HeadingNode`` list. Identifiers are allocated against those already
        produced in this call only.
    """

    tree = parse_document(document) if isinstance(document, str) else document

    headings: list[HeadingNode] = []
    used: set[str] = set()
    for node in tree.walk():
        if node.type != "heading":
            continue
        text = heading_text(node)
        identifier = allocate_identifier(
            text, used, prefix=prefix, token_length=token_length, dedupe=dedupe
        )
        used.add(identifier)
        headings.append(HeadingNode(identifier=identifier, text=text, level=int(node.tag[1:])))
    return headings
