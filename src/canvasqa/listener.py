"""Trigger loop: one keystroke-line per trigger.

    q   capture the question from the question source
    a   capture the answer from the answer source
    c   commit into the canvas path read from the path source
    s   log the current session state
    x   quit

Run from the CLI as `canvasqa listen`, with stdin as the trigger stream. Each
trigger runs to completion before the next line is read. Failures are logged
and the loop keeps going; the next trigger starts from a clean invocation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from canvasqa.errors import CanvasQAError
from canvasqa.mutate import check_inputs

if TYPE_CHECKING:
    from collections.abc import Iterable

    from canvasqa.session import Session
    from canvasqa.sources import TextSource

logger = logging.getLogger("canvasqa.listener")

HELP = "triggers: q=question  a=answer  c=commit  s=status  x=quit"


class Listener:
    def __init__(
        self,
        session: Session,
        question_source: TextSource,
        answer_source: TextSource,
        path_source: TextSource,
    ) -> None:
        self.session = session
        self.question_source = question_source
        self.answer_source = answer_source
        self.path_source = path_source
        self.commits = 0

    def handle(self, trigger: str) -> bool:
        """Dispatch one trigger. Returns False when the loop should stop."""
        key = trigger.strip().lower()[:1]
        if not key:
            return True
        if key == "x":
            return False
        if key == "q":
            self.session.set_question(self.question_source.read())
        elif key == "a":
            self.session.set_answer(self.answer_source.read())
        elif key == "c":
            self._commit()
        elif key == "s":
            logger.info(
                "question=%r answer=%r complete=%s",
                self.session.question, self.session.answer, self.session.is_complete,
            )
        else:
            logger.warning("unknown trigger %r (%s)", trigger.strip(), HELP)
        return True

    def _commit(self) -> None:
        try:
            # nothing to write: fail before the path source waits or reads
            check_inputs(self.session.question, self.session.answer)
            self.session.commit(self.path_source.read())
        except CanvasQAError as exc:
            logger.warning("commit failed: %s", exc)
            return
        except Exception:
            logger.exception("commit crashed")
            return
        self.commits += 1

    def run(self, lines: Iterable[str]) -> int:
        """Consume triggers until exhausted or "x". Returns the number of commits."""
        logger.info(HELP)
        for line in lines:
            if not self.handle(line):
                break
        logger.info("listener stopped after %d commit(s)", self.commits)
        return self.commits
