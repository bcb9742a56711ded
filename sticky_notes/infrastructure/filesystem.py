# sticky_notes/infrastructure/filesystem.py

from __future__ import annotations

import os
import uuid
from datetime import datetime
from pathlib import Path


# ───────────────────────── public API ─────────────────────────

def atomic_write_text(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """
    Atomic-ish file write:
    - write to a hidden temp file in the same directory
    - fsync
    - replace()

    Newlines are written untranslated so the file holds exactly `text`.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def read_text_exact(path: Path, *, encoding: str = "utf-8") -> str:
    """Read a whole file without newline translation."""
    with open(path, "r", encoding=encoding, newline="") as f:
        return f.read()


def write_recovery_copy(recovery_dir: Path, file_handle: str, text: str) -> Path:
    """
    Emergency copy when the normal save fails.

    Writes a timestamped copy into `recovery_dir`:
      Note_3.recovery.20260101-120000.txt
    """
    name = Path(file_handle)
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")

    recovery_path = Path(recovery_dir) / f"{name.stem or 'Untitled'}.recovery.{ts}{name.suffix}"
    atomic_write_text(recovery_path, text, encoding="utf-8")

    return recovery_path
