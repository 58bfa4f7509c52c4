"""Helpers for crash-safe file output."""

from __future__ import annotations

import os
import time
from pathlib import Path


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Atomically write *data* into *path*.

    The payload is staged in a sibling ``.tmp`` file, flushed to disk and then
    swapped into place, so readers either see the complete file or nothing.
    The staging file is removed if any step fails.
    """

    tmp_path = path.with_name(path.name + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with tmp_path.open("wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    # ``Path.replace`` can intermittently fail on Windows when another process
    # briefly holds either file open (antivirus, indexers).  Retry with a short
    # back-off before giving up.
    for attempt in range(5):
        try:
            tmp_path.replace(path)
            return
        except PermissionError:
            if attempt == 4:
                tmp_path.unlink(missing_ok=True)
                raise
            time.sleep(0.05 * (attempt + 1))
