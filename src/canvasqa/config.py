"""CanvasQAConfig: project-local config for canvasqa.

Looked up as canvasqa.toml in the given directory or any parent of it.
Every key is optional; a missing file means all defaults.

canvasqa.toml example:

    [canvas]
    extension = ".canvas"
    tmp_suffix = ".tmp"
    on_malformed = "reset"    # "reset" = start over with an empty canvas, "error" = refuse
    lock = true               # flock a sidecar <name>.lock during each commit

    [layout]
    box_width = 800
    box_height = 800
    vertical_gap = 150
    stub_size = 1

    [capture]
    question_delay = 0.5      # seconds to wait before reading the clipboard
    answer_delay = 1.0
    path_delay = 0.5

    [session]
    clear_after_commit = true
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from canvasqa.mutate import Layout
from canvasqa.store import MALFORMED_POLICIES

_CONFIG_FILENAME = "canvasqa.toml"


@dataclass
class CanvasConfig:
    extension: str = ".canvas"
    tmp_suffix: str = ".tmp"
    on_malformed: str = "reset"
    lock: bool = True


@dataclass
class CaptureConfig:
    question_delay: float = 0.5
    answer_delay: float = 1.0
    path_delay: float = 0.5


@dataclass
class SessionConfig:
    clear_after_commit: bool = True


@dataclass
class CanvasQAConfig:
    """Resolved configuration."""

    root: Path                      # directory that contains canvasqa.toml (or the start dir)
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    layout: Layout = field(default_factory=Layout)
    capture: CaptureConfig = field(default_factory=CaptureConfig)
    session: SessionConfig = field(default_factory=SessionConfig)

    @property
    def config_path(self) -> Path:
        return self.root / _CONFIG_FILENAME


def load_config(root: Path | str | None = None) -> CanvasQAConfig:
    """Load canvasqa.toml from root (or search upward from cwd if root is None)."""
    root_path = _find_root(Path(root) if root else Path.cwd())
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as f:
            raw = tomllib.load(f)

    canvas_section = raw.get("canvas", {})
    layout_section = raw.get("layout", {})
    capture_section = raw.get("capture", {})
    session_section = raw.get("session", {})

    on_malformed = str(canvas_section.get("on_malformed", "reset"))
    if on_malformed not in MALFORMED_POLICIES:
        msg = f"{config_path}: canvas.on_malformed must be one of {MALFORMED_POLICIES}, got {on_malformed!r}"
        raise ValueError(msg)

    extension = str(canvas_section.get("extension", ".canvas"))
    if not extension.startswith("."):
        extension = "." + extension

    return CanvasQAConfig(
        root=root_path,
        canvas=CanvasConfig(
            extension=extension,
            tmp_suffix=str(canvas_section.get("tmp_suffix", ".tmp")),
            on_malformed=on_malformed,
            lock=bool(canvas_section.get("lock", True)),
        ),
        layout=Layout(
            box_width=int(layout_section.get("box_width", 800)),
            box_height=int(layout_section.get("box_height", 800)),
            vertical_gap=int(layout_section.get("vertical_gap", 150)),
            stub_size=int(layout_section.get("stub_size", 1)),
        ),
        capture=CaptureConfig(
            question_delay=float(capture_section.get("question_delay", 0.5)),
            answer_delay=float(capture_section.get("answer_delay", 1.0)),
            path_delay=float(capture_section.get("path_delay", 0.5)),
        ),
        session=SessionConfig(
            clear_after_commit=bool(session_section.get("clear_after_commit", True)),
        ),
    )


def _find_root(start: Path) -> Path:
    """Walk upward from start looking for canvasqa.toml."""
    for directory in (start, *start.parents):
        if (directory / _CONFIG_FILENAME).exists():
            return directory
    return start


def init_config(root: Path) -> Path:
    """Write a default canvasqa.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"canvasqa.toml already exists at {config_path}"
        raise FileExistsError(msg)

    content = """\
[canvas]
# extension = ".canvas"
# tmp_suffix = ".tmp"
# on_malformed = "reset"   # "reset" overwrites an unparseable canvas; "error" refuses
# lock = true              # flock <name>.lock while committing

[layout]
# box_width = 800
# box_height = 800
# vertical_gap = 150
# stub_size = 1

[capture]
# question_delay = 0.5     # seconds to wait before reading the clipboard
# answer_delay = 1.0
# path_delay = 0.5

[session]
# clear_after_commit = true
"""
    config_path.write_text(content)
    return config_path
