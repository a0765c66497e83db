"""Tests for canvasqa.toml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from canvasqa.config import init_config, load_config


def test_defaults_without_file(tmp_path: Path) -> None:
    cfg = load_config(tmp_path)
    assert cfg.root == tmp_path
    assert cfg.canvas.extension == ".canvas"
    assert cfg.canvas.on_malformed == "reset"
    assert cfg.canvas.lock is True
    assert (cfg.layout.box_width, cfg.layout.box_height, cfg.layout.vertical_gap, cfg.layout.stub_size) == (
        800, 800, 150, 1,
    )
    assert cfg.capture.answer_delay == 1.0
    assert cfg.session.clear_after_commit is True


def test_values_from_file(tmp_path: Path) -> None:
    (tmp_path / "canvasqa.toml").write_text(
        '[canvas]\nextension = "board"\non_malformed = "error"\nlock = false\n'
        "[layout]\nvertical_gap = 60\n"
        "[capture]\nquestion_delay = 0\n"
        "[session]\nclear_after_commit = false\n"
    )
    cfg = load_config(tmp_path)
    assert cfg.canvas.extension == ".board"
    assert cfg.canvas.on_malformed == "error"
    assert cfg.canvas.lock is False
    assert cfg.layout.vertical_gap == 60
    assert cfg.layout.box_width == 800
    assert cfg.capture.question_delay == 0.0
    assert cfg.session.clear_after_commit is False


def test_config_found_in_parent(tmp_path: Path) -> None:
    (tmp_path / "canvasqa.toml").write_text("[layout]\nbox_width = 640\n")
    nested = tmp_path / "vault" / "maps"
    nested.mkdir(parents=True)
    cfg = load_config(nested)
    assert cfg.root == tmp_path
    assert cfg.layout.box_width == 640


def test_invalid_policy_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "canvasqa.toml").write_text('[canvas]\non_malformed = "ignore"\n')
    with pytest.raises(ValueError, match="on_malformed"):
        load_config(tmp_path)


def test_init_writes_loadable_defaults(tmp_path: Path) -> None:
    path = init_config(tmp_path)
    assert path == tmp_path / "canvasqa.toml"
    assert load_config(tmp_path).layout.box_height == 800
    with pytest.raises(FileExistsError):
        init_config(tmp_path)
