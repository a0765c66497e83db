"""Blank-slot search.

A slot is an edge with an empty label pointing at a node with empty text.
Canvases can be prepared with a chain of such placeholders; they are filled
in edge order, first one first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from canvasqa.models import Canvas, CanvasEdge, CanvasNode


def iter_slots(canvas: Canvas) -> Iterator[tuple[CanvasNode, CanvasEdge]]:
    """Yield every (node, edge) slot in edge order."""
    blank_nodes: dict[str, CanvasNode] = {}
    for node in canvas.nodes:
        if node.blank:
            blank_nodes.setdefault(node.id, node)

    for edge in canvas.edges:
        # dangling or non-string references are skipped, not errors
        if not isinstance(edge.to_node, str):
            continue
        node = blank_nodes.get(edge.to_node)
        if node is not None and edge.blank:
            yield node, edge


def find_slot(canvas: Canvas) -> tuple[CanvasNode, CanvasEdge] | None:
    """Return the first slot in edge order, or None."""
    return next(iter_slots(canvas), None)
