from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sticky_notes.core.errors import NoteFileExists, NoteIOError, NoteNotFound
from sticky_notes.core.filenames import is_note_file
from sticky_notes.infrastructure.filesystem import (
    atomic_write_text,
    read_text_exact,
    write_recovery_copy,
)
from sticky_notes.settings import APP_NAME, INDEX_FILENAME

log = logging.getLogger(f"{APP_NAME}.store")


@dataclass(frozen=True)
class NoteStore:
    """
    Files of one notes directory: `<file_handle>` per note plus the index
    file holding the note counter.

    Every filesystem failure surfaces as NoteIOError (or NoteNotFound for
    reads of a missing note).
    """
    notes_dir: Path
    recovery_dir: Path | None = None

    def ensure(self) -> None:
        try:
            self.notes_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise NoteIOError(f"Could not create notes directory {self.notes_dir}: {e}") from e

    def path_for(self, file_handle: str) -> Path:
        return self.notes_dir / file_handle

    @property
    def index_path(self) -> Path:
        return self.notes_dir / INDEX_FILENAME

    def exists(self, file_handle: str) -> bool:
        return self.path_for(file_handle).is_file()

    # ───────────────────────── notes ─────────────────────────

    def write(self, file_handle: str, content: str) -> None:
        self.ensure()
        path = self.path_for(file_handle)
        try:
            atomic_write_text(path, content, encoding="utf-8")
        except OSError as e:
            raise NoteIOError(f"Could not save note to:\n{path}\n{e}", file_handle) from e
        log.debug("Note written: %s (%d chars)", path, len(content))

    def read(self, file_handle: str) -> str:
        path = self.path_for(file_handle)
        try:
            return read_text_exact(path, encoding="utf-8")
        except FileNotFoundError as e:
            raise NoteNotFound(file_handle) from e
        except (OSError, UnicodeDecodeError) as e:
            raise NoteIOError(f"Could not read note {path}: {e}", file_handle) from e

    def rename(self, old_handle: str, new_handle: str) -> None:
        """
        Move a note file to its new name.

        Missing source is fine (note never saved). An existing target is
        never overwritten: it belongs to some other note.
        """
        if old_handle == new_handle:
            return
        old_path = self.path_for(old_handle)
        new_path = self.path_for(new_handle)
        if not old_path.exists():
            log.debug("Rename skipped, nothing on disk: %s", old_path)
            return
        if new_path.exists():
            raise NoteFileExists(old_handle, new_handle)
        try:
            old_path.rename(new_path)
        except OSError as e:
            raise NoteIOError(f"Could not rename {old_handle} to {new_handle}: {e}", old_handle) from e
        log.info("Note file renamed: %s -> %s", old_handle, new_handle)

    def delete(self, file_handle: str) -> None:
        path = self.path_for(file_handle)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise NoteIOError(f"Could not delete {path}: {e}", file_handle) from e
        log.info("Note file deleted: %s", path)

    def list_note_files(self) -> list[str]:
        """Note files in directory-listing order (not numeric order)."""
        if not self.notes_dir.is_dir():
            return []
        return [
            p.name
            for p in self.notes_dir.iterdir()
            if p.is_file() and is_note_file(p.name) and p.name != INDEX_FILENAME
        ]

    # ───────────────────────── counter ─────────────────────────

    def load_counter(self) -> int:
        try:
            raw = read_text_exact(self.index_path)
        except FileNotFoundError:
            return 0
        except (OSError, UnicodeDecodeError):
            log.warning("Index file unreadable, counter reset: %s", self.index_path)
            return 0

        try:
            value = int(raw.strip())
        except ValueError:
            log.warning("Index file malformed (%r), counter reset", raw[:40])
            return 0
        return max(value, 0)

    def save_counter(self, value: int) -> None:
        self.ensure()
        try:
            atomic_write_text(self.index_path, str(int(value)), encoding="utf-8")
        except OSError as e:
            raise NoteIOError(f"Could not write index file {self.index_path}: {e}") from e
        log.debug("Counter saved: %d", value)

    # ───────────────────────── recovery ─────────────────────────

    def write_recovery_copy(self, file_handle: str, content: str) -> Path | None:
        """Best-effort emergency copy; returns None when it fails too."""
        if self.recovery_dir is None:
            return None
        try:
            path = write_recovery_copy(self.recovery_dir, file_handle, content)
        except OSError:
            log.exception("Recovery copy failed for %s", file_handle)
            return None
        log.warning("Recovery copy written: %s", path)
        return path
