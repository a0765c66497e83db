"""Read and serialize .canvas documents.

    canvas = load(path)                        # empty Canvas if unparseable
    canvas = load(path, on_malformed="error")  # raise instead
    text = serialize(canvas)

A .canvas file is a single JSON object:
    {
      "nodes": [{"id": ..., "type": "text", "text": ..., "x": 0, "y": 0, "width": 800, "height": 800}],
      "edges": [{"id": ..., "fromNode": ..., "fromSide": "bottom", "toNode": ..., "toSide": "top", "label": ...}]
    }
Any other top-level keys are carried through untouched.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

from canvasqa.errors import MalformedDocumentError
from canvasqa.models import Canvas

logger = logging.getLogger("canvasqa.store")

MalformedPolicy = Literal["reset", "error"]
MALFORMED_POLICIES = ("reset", "error")

_NUMERIC_KEYS = ("x", "y", "width", "height")


def parse(text: str) -> Canvas:
    """Parse canvas JSON text. Raises MalformedDocumentError on any shape problem."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(raw, dict):
        msg = f"top-level value is {type(raw).__name__}, expected object"
        raise MalformedDocumentError(msg)

    _check_entries(raw, "nodes")
    _check_entries(raw, "edges")
    for entry in raw.get("nodes") or []:
        for key in _NUMERIC_KEYS:
            value = entry.get(key, 0)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                msg = f"node {entry['id']!r} has non-numeric {key}: {value!r}"
                raise MalformedDocumentError(msg)

    return Canvas.from_dict(raw)


def _check_entries(raw: dict[str, Any], key: str) -> None:
    entries = raw.get(key)
    if entries is None:
        return
    if not isinstance(entries, list):
        msg = f'"{key}" is {type(entries).__name__}, expected array'
        raise MalformedDocumentError(msg)
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            msg = f"{key}[{i}] is {type(entry).__name__}, expected object"
            raise MalformedDocumentError(msg)
        if not isinstance(entry.get("id"), str):
            msg = f"{key}[{i}] has no string id"
            raise MalformedDocumentError(msg)


def load(path: Path | str, *, on_malformed: MalformedPolicy = "reset") -> Canvas:
    """Load a canvas from disk.

    A missing file yields an empty Canvas. Unparseable content yields an
    empty Canvas under the "reset" policy (the old content is lost on the
    next save) or raises MalformedDocumentError under "error".
    """
    if on_malformed not in MALFORMED_POLICIES:
        msg = f"on_malformed must be one of {MALFORMED_POLICIES}, got {on_malformed!r}"
        raise ValueError(msg)

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Canvas()
    except UnicodeDecodeError as exc:
        err = MalformedDocumentError(f"not UTF-8 text ({exc.reason})", path)
        return _recover(err, on_malformed)

    try:
        return parse(text)
    except MalformedDocumentError as exc:
        err = MalformedDocumentError(exc.reason, path)
        err.__cause__ = exc.__cause__
        return _recover(err, on_malformed)


def _recover(err: MalformedDocumentError, on_malformed: MalformedPolicy) -> Canvas:
    if on_malformed == "error":
        raise err
    logger.warning("%s; starting from an empty canvas", err)
    return Canvas()


def serialize(canvas: Canvas) -> str:
    """Deterministic JSON encoding with a trailing newline."""
    return json.dumps(canvas.to_dict(), indent=2, ensure_ascii=False) + "\n"
