"""canvasqa CLI: write question/answer pairs into JSON Canvas files.

Commands:
    canvasqa init                  create canvasqa.toml
    canvasqa add CANVAS -q Q -a A  fill the first blank slot or append a new box
    canvasqa slots CANVAS          list blank slots in fill order
    canvasqa show CANVAS           summarize a canvas and what the next add would do
    canvasqa listen                run the q / a / c trigger loop on stdin
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from canvasqa import store
from canvasqa.config import CanvasQAConfig, init_config, load_config
from canvasqa.errors import CanvasQAError
from canvasqa.listener import Listener
from canvasqa.models import Canvas
from canvasqa.session import Session, validate_target
from canvasqa.slots import iter_slots
from canvasqa.sources import ClipboardSource, StaticSource, TextSource

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cfg() -> CanvasQAConfig:
    try:
        return load_config()
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(message)s",
    )


def _snippet(value: object, width: int = 50) -> str:
    text = ("" if value is None else str(value)).replace("\n", " ")
    return text if len(text) <= width else text[: width - 1] + "…"


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="canvasqa")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr")
def cli(verbose: bool) -> None:
    """canvasqa — question/answer boxes for JSON Canvas files."""
    _setup_logging(verbose)


# ---------------------------------------------------------------------------
# canvasqa init
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--dir", "root", default=".", show_default=True, help="Project root")
def init(root: str) -> None:
    """Create canvasqa.toml in the given directory."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("canvasqa.toml already exists — skipping init")


# ---------------------------------------------------------------------------
# canvasqa add
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("canvas")
@click.option("-q", "--question", required=True, help="Edge label text")
@click.option("-a", "--answer", required=True, help="Node text")
def add(canvas: str, question: str, answer: str) -> None:
    """Write one question/answer pair into CANVAS."""
    cfg = _load_cfg()
    session = Session(cfg)
    session.set_question(question)
    session.set_answer(answer)
    try:
        result = session.commit(canvas)
    except CanvasQAError as exc:
        raise click.ClickException(str(exc)) from exc

    if result.action == "filled":
        click.echo(f"Filled blank node {result.node.id} (edge {result.edge.id})")
    else:
        click.echo(f"Added node {result.node.id} at y={result.node.y} (edge {result.edge.id})")


# ---------------------------------------------------------------------------
# canvasqa slots / show
# ---------------------------------------------------------------------------


def _read_canvas(canvas: str, cfg: CanvasQAConfig) -> Canvas:
    try:
        path = validate_target(canvas, cfg.canvas.extension)
        return store.load(path, on_malformed="error")
    except CanvasQAError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.argument("canvas")
def slots(canvas: str) -> None:
    """List blank slots in CANVAS, in the order they will be filled."""
    cfg = _load_cfg()
    doc = _read_canvas(canvas, cfg)
    found = list(iter_slots(doc))
    if not found:
        click.echo("No blank slots — the next add appends a new node.")
        return
    for i, (node, edge) in enumerate(found, 1):
        click.echo(f"{i:3}. edge {edge.id}  {edge.from_node} → {node.id}  at ({node.x}, {node.y})")


@cli.command()
@click.argument("canvas")
def show(canvas: str) -> None:
    """Summarize CANVAS and report what the next add would do."""
    cfg = _load_cfg()
    doc = _read_canvas(canvas, cfg)
    click.echo(f"Nodes : {len(doc.nodes)}")
    click.echo(f"Edges : {len(doc.edges)}")
    if doc.extra:
        click.echo(f"Other : {', '.join(sorted(doc.extra))}")

    nodes_by_id = {n.id: n for n in doc.nodes}
    for edge in doc.edges:
        target = nodes_by_id.get(edge.to_node) if isinstance(edge.to_node, str) else None
        answer = target.text if target is not None else None
        click.echo(f"  [{_snippet(edge.label) or '—'}] → {_snippet(answer) or '—'}")

    first = next(iter_slots(doc), None)
    if first is not None:
        click.echo(f"Next  : fill node {first[0].id} via edge {first[1].id}")
    else:
        y = doc.max_y() + cfg.layout.vertical_gap
        click.echo(f"Next  : append a new node at y={y}")


# ---------------------------------------------------------------------------
# canvasqa listen
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--canvas", "canvas", default=None, help="Fixed canvas path (default: read from clipboard on commit)")
def listen(canvas: str | None) -> None:
    """Run the trigger loop: type q, a, c (or s, x) and press Enter.

    q and a read the clipboard, c commits to --canvas or to a path on the
    clipboard.
    """
    logging.getLogger("canvasqa").setLevel(logging.INFO)
    cfg = _load_cfg()
    capture = cfg.capture
    path_source: TextSource = (
        StaticSource(canvas) if canvas else ClipboardSource(capture.path_delay)
    )
    listener = Listener(
        Session(cfg),
        question_source=ClipboardSource(capture.question_delay),
        answer_source=ClipboardSource(capture.answer_delay),
        path_source=path_source,
    )
    n = listener.run(click.get_text_stream("stdin"))
    click.echo(f"{n} commit(s)")
