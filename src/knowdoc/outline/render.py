"""Rendering of outlines as a navigation panel."""

from __future__ import annotations

from collections.abc import Sequence

from rich.markup import escape
from rich.tree import Tree

from knowdoc.models.outline import OutlineNode


def render_toc_markdown(nodes: Sequence[OutlineNode], *, indent: int = 2) -> str:
    """Render a forest as a nested markdown list of anchor links."""

    lines: list[str] = []

    def _emit(node: OutlineNode, depth: int) -> None:
        lines.append(f"{' ' * (indent * depth)}- [{node.text}](#{node.identifier})")
        for child in node.children:
            _emit(child, depth + 1)

    for node in nodes:
        _emit(node, 0)
    return "\n".join(lines) + ("\n" if lines else "")


def render_toc_tree(nodes: Sequence[OutlineNode], *, title: str = "目录") -> Tree:
    """Build a rich ``Tree`` for terminal display."""

    tree = Tree(f"[bold]{escape(title)}[/bold]")

    def _attach(parent: Tree, node: OutlineNode) -> None:
        branch = parent.add(f"{escape(node.text)} [dim]#{node.identifier}[/dim]")
        for child in node.children:
            _attach(branch, child)

    for node in nodes:
        _attach(tree, node)
    return tree
