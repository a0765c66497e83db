"""Data models for JSON Canvas documents."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

ID_LENGTH = 16
SIDES = ("top", "bottom", "left", "right")

_NODE_KEYS = ("id", "type", "text", "x", "y", "width", "height")
_EDGE_KEYS = ("id", "fromNode", "fromSide", "toNode", "toSide", "label")


def new_id(taken: set[str] | None = None) -> str:
    """Generate a compact entity ID: 16 hex chars, not in `taken`."""
    while True:
        candidate = uuid.uuid4().hex[:ID_LENGTH]
        if not taken or candidate not in taken:
            return candidate


def is_blank(value: object) -> bool:
    """Absent or whitespace-only. Non-string values (e.g. a numeric label) are content."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


@dataclass
class CanvasNode:
    """A single entry of the canvas "nodes" array."""

    id: str
    x: int | None = None               # None when absent from the file
    y: int | None = None
    width: int | None = None
    height: int | None = None
    type: str = "text"                 # text | file | link | group
    text: str | None = None            # absent on non-text nodes
    extra: dict[str, Any] = field(default_factory=dict)   # color, file, url, ...

    @property
    def blank(self) -> bool:
        return is_blank(self.text)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CanvasNode:
        return cls(
            id=d["id"],
            x=d.get("x"),
            y=d.get("y"),
            width=d.get("width"),
            height=d.get("height"),
            type=d.get("type", "text"),
            text=d.get("text"),
            extra={k: v for k, v in d.items() if k not in _NODE_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
        }
        if self.text is not None:
            d["text"] = self.text
        for key in ("x", "y", "width", "height"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        d.update(self.extra)
        return d


@dataclass
class CanvasEdge:
    """A single entry of the canvas "edges" array."""

    id: str
    from_node: str | None = None
    to_node: str | None = None
    from_side: str | None = None
    to_side: str | None = None
    label: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)   # color, fromEnd, toEnd, ...

    @property
    def blank(self) -> bool:
        return is_blank(self.label)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CanvasEdge:
        return cls(
            id=d["id"],
            from_node=d.get("fromNode"),
            to_node=d.get("toNode"),
            from_side=d.get("fromSide"),
            to_side=d.get("toSide"),
            label=d.get("label"),
            extra={k: v for k, v in d.items() if k not in _EDGE_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id}
        if self.from_node is not None:
            d["fromNode"] = self.from_node
        if self.from_side is not None:
            d["fromSide"] = self.from_side
        if self.to_node is not None:
            d["toNode"] = self.to_node
        if self.to_side is not None:
            d["toSide"] = self.to_side
        if self.label is not None:
            d["label"] = self.label
        d.update(self.extra)
        return d


@dataclass
class Canvas:
    """A whole .canvas document.

    Top-level keys other than "nodes" and "edges" are kept in `extra` and
    written back unchanged.
    """

    nodes: list[CanvasNode] = field(default_factory=list)
    edges: list[CanvasEdge] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Canvas:
        return cls(
            nodes=[CanvasNode.from_dict(n) for n in d.get("nodes") or []],
            edges=[CanvasEdge.from_dict(e) for e in d.get("edges") or []],
            extra={k: v for k, v in d.items() if k not in ("nodes", "edges")},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            **self.extra,
        }

    def taken_ids(self) -> set[str]:
        """All node and edge IDs currently in use."""
        return {n.id for n in self.nodes} | {e.id for e in self.edges}

    def max_y(self) -> int:
        """Greatest node y, truncated to an int; nodes without y count as 0."""
        return max((int(n.y or 0) for n in self.nodes), default=0)
