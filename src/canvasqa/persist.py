"""Crash-safe canvas writes.

save() writes the full text to a sibling temp file, fsyncs it, then renames
it over the target. The target therefore holds either the old document or the
new one, never a partial write.

locked() serializes whole load-modify-save cycles across processes with an
exclusive flock on the canvas file itself. save() swaps in a new inode, so a
waiter that wakes up holding the lock on a replaced inode reopens the path and
locks again. Nothing besides the canvas is left on disk.
"""

from __future__ import annotations

import contextlib
import fcntl
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from canvasqa.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger("canvasqa.persist")

DEFAULT_TMP_SUFFIX = ".tmp"


def tmp_path_for(path: Path, suffix: str = DEFAULT_TMP_SUFFIX) -> Path:
    return path.with_name(path.name + suffix)


def save(path: Path | str, text: str, *, tmp_suffix: str = DEFAULT_TMP_SUFFIX) -> None:
    """Write text to path via tmp + rename. Raises PersistenceError."""
    path = Path(path)
    tmp = tmp_path_for(path, tmp_suffix)
    try:
        with tmp.open("w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise PersistenceError(path, exc) from exc
    logger.info("saved %s (%d bytes)", path, len(text.encode("utf-8")))


@contextlib.contextmanager
def locked(path: Path | str) -> Iterator[Path]:
    """Hold an exclusive advisory lock on the file at path until the block exits."""
    path = Path(path)
    while True:
        try:
            f = path.open("rb")
        except OSError as exc:
            raise PersistenceError(path, exc) from exc
        fcntl.flock(f, fcntl.LOCK_EX)
        try:
            current = path.stat()
        except FileNotFoundError:
            current = None
        held = os.fstat(f.fileno())
        if current is not None and (current.st_dev, current.st_ino) == (held.st_dev, held.st_ino):
            break
        # replaced while we waited; the lock on the old inode guards nothing
        logger.info("%s replaced while waiting for lock, retrying", path)
        f.close()

    with f:
        try:
            yield path
        finally:
            fcntl.flock(f, fcntl.LOCK_UN)
