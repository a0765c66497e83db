"""Input sources for question, answer and canvas path.

Anything with a read() -> str method works; the listener does not care where
text comes from. The clipboard source expects the user (or an OS-level
shortcut) to have copied the text just before the trigger fires, hence the
configurable delay.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

import pyperclip

logger = logging.getLogger("canvasqa.sources")


class TextSource(Protocol):
    def read(self) -> str: ...


class StaticSource:
    """Always returns the same text (CLI arguments, --canvas, tests)."""

    def __init__(self, text: str) -> None:
        self.text = text

    def read(self) -> str:
        return self.text


class ClipboardSource:
    """Reads the system clipboard after waiting `delay` seconds."""

    def __init__(self, delay: float = 0.5) -> None:
        self.delay = delay

    def read(self) -> str:
        if self.delay > 0:
            time.sleep(self.delay)
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as exc:
            logger.warning("clipboard unavailable: %s", exc)
            return ""
