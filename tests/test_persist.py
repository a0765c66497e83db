"""Tests for tmp + rename writes and the sidecar lock."""

from __future__ import annotations

import fcntl
from pathlib import Path

import pytest

from canvasqa import persist
from canvasqa.errors import PersistenceError


def test_save_replaces_content(tmp_path: Path) -> None:
    target = tmp_path / "a.canvas"
    target.write_text("old")
    persist.save(target, '{"nodes": []}\n')
    assert target.read_text() == '{"nodes": []}\n'
    assert not (tmp_path / "a.canvas.tmp").exists()


def test_save_creates_missing_target(tmp_path: Path) -> None:
    target = tmp_path / "new.canvas"
    persist.save(target, "{}")
    assert target.read_text() == "{}"


def test_failure_before_replace_leaves_original_untouched(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "a.canvas"
    original = b'{"nodes": [{"id": "keep"}]}\n'
    target.write_bytes(original)

    def boom(self: Path, other: Path) -> Path:
        raise OSError("simulated crash before rename")

    monkeypatch.setattr(Path, "replace", boom)
    with pytest.raises(PersistenceError) as excinfo:
        persist.save(target, "{}")

    assert target.read_bytes() == original
    assert excinfo.value.path == target
    assert isinstance(excinfo.value.cause, OSError)
    # the half-done temp file is cleaned up
    assert not (tmp_path / "a.canvas.tmp").exists()


def test_unwritable_directory_is_reported(tmp_path: Path) -> None:
    target = tmp_path / "missing-dir" / "a.canvas"
    with pytest.raises(PersistenceError):
        persist.save(target, "{}")


def test_custom_tmp_suffix(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "a.canvas"
    seen: list[str] = []
    real_replace = Path.replace

    def spy(self: Path, other: Path) -> Path:
        seen.append(self.name)
        return real_replace(self, other)

    monkeypatch.setattr(Path, "replace", spy)
    persist.save(target, "{}", tmp_suffix=".partial")
    assert seen == ["a.canvas.partial"]


def test_locked_holds_exclusive_flock_on_the_canvas(tmp_path: Path) -> None:
    target = tmp_path / "a.canvas"
    target.write_text("{}")
    with persist.locked(target) as held:
        assert held == target
        with target.open("rb") as other, pytest.raises(BlockingIOError):
            fcntl.flock(other, fcntl.LOCK_EX | fcntl.LOCK_NB)

    with target.open("rb") as other:
        fcntl.flock(other, fcntl.LOCK_EX | fcntl.LOCK_NB)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.canvas"]


def test_locked_retries_when_canvas_is_replaced_while_waiting(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "a.canvas"
    target.write_text("old")
    real_flock = fcntl.flock
    exclusive_calls: list[int] = []

    def flock(f: object, op: int) -> None:
        if op == fcntl.LOCK_EX:
            exclusive_calls.append(op)
            if len(exclusive_calls) == 1:
                # another writer swaps the file in before our lock is granted
                persist.save(target, "new")
        real_flock(f, op)

    monkeypatch.setattr(persist.fcntl, "flock", flock)
    with persist.locked(target):
        assert target.read_text() == "new"
    assert len(exclusive_calls) == 2


def test_locked_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError), persist.locked(tmp_path / "gone.canvas"):
        pass
