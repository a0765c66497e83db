"""Session: the question/answer pair captured between triggers.

    session = Session(cfg)
    session.set_question("What is X?")
    session.set_answer("X is ...")
    result = session.commit("/vault/notes.canvas")   # fill or create, then save

A session is complete once both values have non-blank text. commit() checks
inputs first, then the target path, and only then touches the file. After a
successful commit the pair is cleared (unless session.clear_after_commit is
off), so the same answer is never written twice by accident. A failed commit
keeps the pair for a retry.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from canvasqa import persist, store
from canvasqa.config import CanvasQAConfig
from canvasqa.errors import InvalidTargetError
from canvasqa.models import is_blank
from canvasqa.mutate import MutationResult, apply, check_inputs

if TYPE_CHECKING:
    from canvasqa.store import MalformedPolicy

logger = logging.getLogger("canvasqa.session")


def normalize_path(raw: str) -> Path:
    """Strip whitespace and surrounding double quotes from a pasted path."""
    return Path(raw.strip(' \t\r\n"'))


def validate_target(raw: Path | str, extension: str = ".canvas") -> Path:
    """Return the normalized path, or raise InvalidTargetError."""
    if isinstance(raw, str):
        if not raw.strip(' \t\r\n"'):
            raise InvalidTargetError(raw, "empty path")
        path = normalize_path(raw)
    else:
        path = raw
    if not path.name.lower().endswith(extension.lower()):
        raise InvalidTargetError(path, f"expected a *{extension} file")
    if not path.is_file():
        raise InvalidTargetError(path, "file does not exist")
    return path


class Session:
    """Question/answer state shared across trigger events."""

    def __init__(self, cfg: CanvasQAConfig | None = None) -> None:
        self.cfg = cfg or CanvasQAConfig(root=Path.cwd())
        self.question: str | None = None
        self.answer: str | None = None

    def set_question(self, text: str | None) -> None:
        self.question = text
        logger.info("question = %r", text)

    def set_answer(self, text: str | None) -> None:
        self.answer = text
        logger.info("answer = %r", text)

    @property
    def is_complete(self) -> bool:
        return not is_blank(self.question) and not is_blank(self.answer)

    def clear(self) -> None:
        self.question = None
        self.answer = None

    def commit(self, target: Path | str) -> MutationResult:
        """Write the pair into the canvas at target. Raises CanvasQAError subclasses."""
        check_inputs(self.question, self.answer)
        canvas_cfg = self.cfg.canvas
        path = validate_target(target, canvas_cfg.extension)

        lock = persist.locked(path) if canvas_cfg.lock else contextlib.nullcontext()
        with lock:
            policy: MalformedPolicy = "error" if canvas_cfg.on_malformed == "error" else "reset"
            canvas = store.load(path, on_malformed=policy)
            result = apply(canvas, self.question, self.answer, self.cfg.layout)
            persist.save(path, store.serialize(canvas), tmp_suffix=canvas_cfg.tmp_suffix)

        logger.info("%s node %s via edge %s in %s", result.action, result.node.id, result.edge.id, path)
        if self.cfg.session.clear_after_commit:
            self.clear()
        return result
