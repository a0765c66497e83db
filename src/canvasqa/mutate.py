"""Apply a question/answer pair to a canvas.

Exactly one of two things happens per call:

    fill    the first blank slot gets the answer as node text and the
            question as edge label; the node is resized to the box size
    create  a new box is placed `vertical_gap` below the greatest node y and
            linked bottom -> top from the last node in the nodes array

New boxes always sit at x=0. On an empty canvas a 1x1 stub root is added
first so the new edge has something to hang from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, cast

from canvasqa.errors import MissingInputError
from canvasqa.models import Canvas, CanvasEdge, CanvasNode, is_blank, new_id
from canvasqa.slots import find_slot

Action = Literal["filled", "created"]


@dataclass
class Layout:
    box_width: int = 800
    box_height: int = 800
    vertical_gap: int = 150
    stub_size: int = 1


@dataclass
class MutationResult:
    action: Action
    node: CanvasNode
    edge: CanvasEdge


def check_inputs(question: str | None, answer: str | None) -> tuple[str, str]:
    """Return (question, answer), or raise MissingInputError unless both have content."""
    missing = [name for name, value in (("question", question), ("answer", answer)) if is_blank(value)]
    if missing:
        raise MissingInputError(missing)
    return cast(str, question), cast(str, answer)


def fill_slot(
    node: CanvasNode,
    edge: CanvasEdge,
    question: str,
    answer: str,
    layout: Layout | None = None,
) -> None:
    layout = layout or Layout()
    node.text = answer
    node.width = layout.box_width
    node.height = layout.box_height
    edge.label = question


def append_pair(
    canvas: Canvas,
    question: str,
    answer: str,
    layout: Layout | None = None,
) -> tuple[CanvasNode, CanvasEdge]:
    """Add a new answer box plus the edge leading to it. Returns both."""
    layout = layout or Layout()
    taken = canvas.taken_ids()

    if canvas.nodes:
        anchor_id = canvas.nodes[-1].id
    else:
        anchor_id = new_id(taken)
        taken.add(anchor_id)
        canvas.nodes.append(CanvasNode(
            id=anchor_id,
            x=0,
            y=0,
            width=layout.stub_size,
            height=layout.stub_size,
            type="text",
            text="",
        ))

    # Measured after the stub is added, so an empty canvas stacks below y=0
    y_base = canvas.max_y()

    target = CanvasNode(
        id=new_id(taken),
        x=0,
        y=y_base + layout.vertical_gap,
        width=layout.box_width,
        height=layout.box_height,
        type="text",
        text=answer,
    )
    taken.add(target.id)
    canvas.nodes.append(target)

    edge = CanvasEdge(
        id=new_id(taken),
        from_node=anchor_id,
        from_side="bottom",
        to_node=target.id,
        to_side="top",
        label=question,
    )
    canvas.edges.append(edge)
    return target, edge


def apply(
    canvas: Canvas,
    question: str | None,
    answer: str | None,
    layout: Layout | None = None,
) -> MutationResult:
    """Validate inputs, then fill the first blank slot or append a new pair."""
    question, answer = check_inputs(question, answer)

    slot = find_slot(canvas)
    if slot is not None:
        node, edge = slot
        fill_slot(node, edge, question, answer, layout)
        return MutationResult(action="filled", node=node, edge=edge)

    node, edge = append_pair(canvas, question, answer, layout)
    return MutationResult(action="created", node=node, edge=edge)
