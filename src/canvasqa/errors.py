"""Exceptions raised by canvasqa.

Every error is terminal for the current invocation only; callers (the CLI,
the listener) report it and carry on.
"""

from __future__ import annotations

from pathlib import Path


class CanvasQAError(Exception):
    """Base class for all canvasqa failures."""


class MissingInputError(CanvasQAError):
    """Question or answer is empty when a mutation is requested."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing input: {', '.join(missing)}")


class InvalidTargetError(CanvasQAError):
    """Target path has the wrong extension or does not exist."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid target {path}: {reason}")


class MalformedDocumentError(CanvasQAError):
    """Existing document content cannot be parsed as a canvas."""

    def __init__(self, reason: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        where = f" in {path}" if path is not None else ""
        super().__init__(f"Malformed canvas{where}: {reason}")


class PersistenceError(CanvasQAError):
    """Writing the temp file or replacing the target failed."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Write failed for {path}: {cause}")
