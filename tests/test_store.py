"""Tests for canvas parsing, loading and serialization."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from canvasqa import store
from canvasqa.errors import MalformedDocumentError
from canvasqa.models import Canvas, CanvasEdge, CanvasNode


SAMPLE = {
    "nodes": [
        {"id": "n1", "type": "text", "text": "hello", "x": 10, "y": -20, "width": 250, "height": 60, "color": "4"},
        {"id": "n2", "type": "file", "file": "notes/a.md", "x": 0, "y": 100, "width": 400, "height": 400},
    ],
    "edges": [
        {"id": "e1", "fromNode": "n1", "fromSide": "bottom", "toNode": "n2", "toSide": "top", "label": "", "toEnd": "arrow"},
        {"id": "e2", "fromNode": "n2", "toNode": "n1"},
    ],
    "metadata": {"version": "1.0", "tags": ["a", "b"]},
}


def test_round_trip_preserves_everything() -> None:
    canvas = store.parse(json.dumps(SAMPLE))
    again = store.parse(store.serialize(canvas))
    assert again == canvas
    assert json.loads(store.serialize(canvas)) == SAMPLE


def test_unknown_fields_are_kept() -> None:
    canvas = store.parse(json.dumps(SAMPLE))
    assert canvas.extra == {"metadata": {"version": "1.0", "tags": ["a", "b"]}}
    assert canvas.nodes[0].extra == {"color": "4"}
    assert canvas.nodes[1].extra == {"file": "notes/a.md"}
    assert canvas.edges[0].extra == {"toEnd": "arrow"}


def test_absent_optional_fields_stay_absent() -> None:
    canvas = store.parse(json.dumps(SAMPLE))
    out = json.loads(store.serialize(canvas))
    assert "text" not in out["nodes"][1]
    assert "label" not in out["edges"][1]
    assert "fromSide" not in out["edges"][1]


def test_missing_arrays_become_empty() -> None:
    canvas = store.parse("{}")
    assert canvas.nodes == []
    assert canvas.edges == []
    assert json.loads(store.serialize(canvas)) == {"nodes": [], "edges": []}


def test_serialize_is_deterministic() -> None:
    canvas = Canvas(
        nodes=[CanvasNode(id="a", text="x", width=800, height=800)],
        edges=[CanvasEdge(id="e", from_node="a", to_node="a", label="q")],
        extra={"z": 1},
    )
    text = store.serialize(canvas)
    assert text == store.serialize(canvas)
    assert text.endswith("\n")
    assert list(json.loads(text)) == ["nodes", "edges", "z"]


def test_non_ascii_text_is_written_verbatim() -> None:
    canvas = Canvas(nodes=[CanvasNode(id="a", text="Grüße 日本")])
    assert "Grüße 日本" in store.serialize(canvas)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not json",
        "[1, 2]",
        '{"nodes": {}}',
        '{"edges": [1]}',
        '{"nodes": [{"text": "no id"}]}',
        '{"nodes": [{"id": "n", "y": "high"}]}',
    ],
)
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(MalformedDocumentError):
        store.parse(text)


def test_load_missing_file_is_empty(tmp_path: Path) -> None:
    canvas = store.load(tmp_path / "nope.canvas")
    assert canvas == Canvas()


def test_load_malformed_resets_by_default(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "broken.canvas"
    path.write_text("{ this is not json")
    with caplog.at_level(logging.WARNING, logger="canvasqa.store"):
        canvas = store.load(path)
    assert canvas == Canvas()
    assert "broken.canvas" in caplog.text
    # load never writes; the old content is only lost on the next save
    assert path.read_text() == "{ this is not json"


def test_load_malformed_raises_under_error_policy(tmp_path: Path) -> None:
    path = tmp_path / "broken.canvas"
    path.write_text('{"nodes": 5}')
    with pytest.raises(MalformedDocumentError) as excinfo:
        store.load(path, on_malformed="error")
    assert excinfo.value.path == path


def test_load_non_utf8_is_malformed(tmp_path: Path) -> None:
    path = tmp_path / "binary.canvas"
    path.write_bytes(b"\xff\xfe\x00garbage")
    assert store.load(path) == Canvas()
    with pytest.raises(MalformedDocumentError):
        store.load(path, on_malformed="error")


def test_load_rejects_unknown_policy(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        store.load(tmp_path / "x.canvas", on_malformed="ignore")  # type: ignore[arg-type]


def test_absent_coordinates_and_endpoints_stay_absent() -> None:
    raw = {
        "nodes": [{"id": "g", "type": "group", "label": "box"}],
        "edges": [{"id": "e", "toNode": "g"}],
    }
    out = json.loads(store.serialize(store.parse(json.dumps(raw))))
    assert out == raw


def test_non_string_fields_load_and_round_trip() -> None:
    raw = {
        "nodes": [{"id": "n", "type": "text", "text": 7, "x": 0, "y": 10.5, "width": 1, "height": 1}],
        "edges": [{"id": "e", "fromNode": "n", "toNode": ["n"], "label": 5}],
    }
    out = json.loads(store.serialize(store.parse(json.dumps(raw))))
    assert out == raw
