"""Table-of-contents building.

Headings arrive flat and depth-tagged; the outline is rebuilt with a single pass over a
stack of open ancestors. A heading closes every open ancestor at its own level or
deeper, so equal levels become siblings. Skipped levels (``#`` then ``###``) nest
directly under the nearest shallower heading; no placeholder nodes are inserted.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from markdown_it.tree import SyntaxTreeNode

from knowdoc.models.outline import HeadingNode, Outline, OutlineNode
from knowdoc.outline.extractor import extract_headings


def build_outline(headings: Sequence[HeadingNode]) -> list[OutlineNode]:
    """Nest flat headings into a forest.

    Args:
        headings: Headings in document order.

    Returns:
        Top-level nodes in document order. Input headings are not modified.
    """

    forest: list[OutlineNode] = []
    stack: list[tuple[OutlineNode, int]] = []

    for heading in headings:
        node = OutlineNode(identifier=heading.identifier, text=heading.text, level=heading.level)

        while stack and stack[-1][1] >= heading.level:
            stack.pop()

        if not stack:
            forest.append(node)
        else:
            stack[-1][0].children.append(node)

        stack.append((node, heading.level))

    return forest


def flatten_outline(nodes: Iterable[OutlineNode]) -> list[HeadingNode]:
    """Pre-order walk of a forest back into flat headings."""

    flat: list[HeadingNode] = []
    pending = list(reversed(list(nodes)))
    while pending:
        node = pending.pop()
        flat.append(HeadingNode(identifier=node.identifier, text=node.text, level=node.level))
        pending.extend(reversed(node.children))
    return flat


def outline_document(
    document: str | SyntaxTreeNode,
    *,
    prefix: str = "heading",
    token_length: int = 6,
    dedupe: bool = False,
) -> Outline:
    """Extract and nest the headings of a document."""

    headings = extract_headings(document, prefix=prefix, token_length=token_length, dedupe=dedupe)
    return Outline(headings=headings, nodes=build_outline(headings))
