"""Question/answer boxes for JSON Canvas (.canvas) files.

A commit takes a question and an answer and writes them into a canvas:

    nodes/edges already hold a blank slot  ->  fill it (answer = node text,
                                               question = edge label)
    otherwise                              ->  append an 800x800 text node
                                               below the others, linked from
                                               the last node by a labeled edge

Writes go through a sibling temp file and an atomic rename, so the canvas on
disk is always either the old or the new version.
"""

from canvasqa.config import CanvasQAConfig, init_config, load_config
from canvasqa.errors import (
    CanvasQAError,
    InvalidTargetError,
    MalformedDocumentError,
    MissingInputError,
    PersistenceError,
)
from canvasqa.models import Canvas, CanvasEdge, CanvasNode
from canvasqa.mutate import Layout, MutationResult, apply
from canvasqa.session import Session

__all__ = [
    "Canvas",
    "CanvasEdge",
    "CanvasNode",
    "CanvasQAConfig",
    "CanvasQAError",
    "InvalidTargetError",
    "Layout",
    "MalformedDocumentError",
    "MissingInputError",
    "MutationResult",
    "PersistenceError",
    "Session",
    "apply",
    "init_config",
    "load_config",
]
