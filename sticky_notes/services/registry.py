# sticky_notes/services/registry.py

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Callable, Iterator

from sticky_notes.core.errors import (
    CapacityExceeded,
    DuplicateIdentity,
    NoteIOError,
    NoteStateError,
    StickyNotesError,
)
from sticky_notes.core.filenames import canonical_identity, is_note_file, number_suffix, sanitize, stem
from sticky_notes.core.models import Note, NoteState, PersistedNote
from sticky_notes.settings import APP_NAME, INDEX_FILENAME, MAX_NOTES
from sticky_notes.store.note_store import NoteStore

log = logging.getLogger(f"{APP_NAME}.registry")

RemovedListener = Callable[[Note], None]


@dataclass
class DeleteOutcome:
    """
    Result of NoteRegistry.delete().

    The note is always gone from the registry; errors only say what could
    not be done on disk.
    """
    note: Note
    file_error: NoteIOError | None = None
    reindex_error: StickyNotesError | None = None
    renamed: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.file_error is None and self.reindex_error is None


class NoteRegistry:
    """
    Live notes of one notes directory.

    Responsibilities:
    - assign "Note #N" identities from the persisted counter
    - keep identities dense after deletions (reindex)
    - route every disk effect through NoteStore
    - tell the host when a note is gone

    Single-threaded: call from the UI thread only.
    """

    def __init__(
        self,
        store: NoteStore,
        *,
        max_notes: int = MAX_NOTES,
        on_note_removed: RemovedListener | None = None,
    ):
        self._store = store
        self._max_notes = max_notes
        self._notes: list[Note] = []
        self._removed_listeners: list[RemovedListener] = []
        if on_note_removed is not None:
            self._removed_listeners.append(on_note_removed)

        self._counter = store.load_counter()
        log.info("Registry opened: dir=%s counter=%d", store.notes_dir, self._counter)

    # ───────────────────────── state ─────────────────────────

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def notes(self) -> tuple[Note, ...]:
        return tuple(self._notes)

    @property
    def max_notes(self) -> int:
        return self._max_notes

    def is_full(self) -> bool:
        return len(self._notes) >= self._max_notes

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(tuple(self._notes))

    def get(self, identity: str) -> Note | None:
        for note in self._notes:
            if note.identity == identity:
                return note
        return None

    # ───────────────────────── listeners ─────────────────────────

    def add_removed_listener(self, listener: RemovedListener) -> None:
        if listener not in self._removed_listeners:
            self._removed_listeners.append(listener)

    def remove_removed_listener(self, listener: RemovedListener) -> None:
        if listener in self._removed_listeners:
            self._removed_listeners.remove(listener)

    # ───────────────────────── public API ─────────────────────────

    def create(self) -> Note:
        """
        New empty note "Note #<counter + 1>", on disk from the start.

        Numbers whose file is already taken are skipped so a stored note
        is never overwritten.
        """
        self._check_capacity()

        previous = self._counter
        number = previous + 1
        while self._handle_taken(sanitize(canonical_identity(number))):
            log.warning("Skipping %s: file already exists", canonical_identity(number))
            number += 1

        note = Note(identity=canonical_identity(number))
        self._counter = number
        self._notes.append(note)

        try:
            self._store.save_counter(self._counter)
            self._store.write(note.file_handle, note.content)
        except NoteIOError:
            log.exception("Create failed, rolling back: %s", note.identity)
            self._notes.remove(note)
            self._counter = previous
            try:
                self._store.save_counter(previous)
            except NoteIOError:
                log.warning("Could not restore counter=%d after failed create", previous)
            raise

        note.state = NoteState.SAVED
        log.info("Note created: %s (live=%d)", note.identity, len(self._notes))
        return note

    def load(self, file_handle: str) -> Note:
        """
        Open a stored note. Does not consume a counter number.
        """
        if PurePath(file_handle).name != file_handle or not is_note_file(file_handle):
            raise ValueError(f"Not a note file name: {file_handle!r}")

        self._check_capacity()

        identity = stem(file_handle)
        self._check_not_reserved(sanitize(identity))
        if self._find_by_handle(file_handle) is not None or (
            self._find_by_handle(sanitize(identity)) is not None
        ):
            raise DuplicateIdentity(identity, file_handle)

        content = self._store.read(file_handle)

        note = Note(identity=identity, content=content, state=NoteState.SAVED)
        if note.file_handle != file_handle:
            # stray file whose name sanitize() would not produce
            self._store.rename(file_handle, note.file_handle)

        self._notes.append(note)
        log.info("Note loaded: %s (live=%d)", note.identity, len(self._notes))
        return note

    def rename(self, note: Note, new_identity: str) -> None:
        """
        Rename a note and its file. Identity is only updated once the file
        has moved.
        """
        self._require_live(note)

        new_identity = (new_identity or "").strip()
        if not new_identity:
            raise ValueError("Note name must not be empty")

        old_identity = note.identity
        old_handle = note.file_handle
        new_handle = sanitize(new_identity)
        self._check_not_reserved(new_handle)

        other = self._find_by_handle(new_handle)
        if other is not None and other is not note:
            raise DuplicateIdentity(new_identity, new_handle)

        self._store.rename(old_handle, new_handle)

        note.identity = new_identity
        note.state = NoteState.RENAMED
        log.info("Note renamed: %s -> %s", old_identity, new_identity)

    def save(self, note: Note) -> None:
        """
        Write note content to its file.

        On failure a recovery copy is attempted; its path is attached to the
        raised NoteIOError as `recovery_path`.
        """
        self._require_live(note)
        try:
            self._store.write(note.file_handle, note.content)
        except NoteIOError as e:
            log.error("Save failed: %s | %s", note.identity, e)
            e.recovery_path = self._store.write_recovery_copy(note.file_handle, note.content)
            raise

        if note.state is NoteState.UNSAVED:
            note.state = NoteState.SAVED
        log.debug("Note saved: %s", note.identity)

    def delete(self, note: Note) -> DeleteOutcome:
        """
        Remove a note and renumber the survivors.

        Always removes the note from the registry and notifies listeners,
        even when the disk side fails.
        """
        self._require_live(note)
        outcome = DeleteOutcome(note=note)

        try:
            self._store.delete(note.file_handle)
        except NoteIOError as e:
            log.warning("File of deleted note left on disk: %s | %s", note.file_handle, e)
            outcome.file_error = e

        self._notes.remove(note)
        note.state = NoteState.DELETED
        log.info("Note deleted: %s (live=%d)", note.identity, len(self._notes))

        outcome.reindex_error = self._reindex(outcome.renamed)
        self._notify_removed(note)
        return outcome

    def list_persisted(self) -> list[PersistedNote]:
        """Stored notes for an "open existing note" menu, in numeric order."""
        handles = sorted(self._store.list_note_files(), key=_persisted_sort_key)
        return [PersistedNote(display_identity=stem(h), file_handle=h) for h in handles]

    def close(self, *, save_notes: bool = True) -> list[Note]:
        """
        Teardown at exit: save live notes and flush the counter.

        Returns the notes that could not be saved.
        """
        failed: list[Note] = []
        if save_notes:
            for note in tuple(self._notes):
                try:
                    self.save(note)
                except NoteIOError:
                    failed.append(note)
        try:
            self._store.save_counter(self._counter)
        except NoteIOError:
            log.exception("Counter flush failed on close")
        log.info("Registry closed: counter=%d unsaved=%d", self._counter, len(failed))
        return failed

    # ───────────────────────── internal ─────────────────────────

    def _reindex(self, renamed: list[tuple[str, str]]) -> StickyNotesError | None:
        """
        Renumber live notes to "Note #1".."Note #n" by position.

        Stops at the first failure; the persisted counter then covers only
        the notes processed so far.
        """
        self._counter = 0
        error: StickyNotesError | None = None

        for position, note in enumerate(tuple(self._notes), start=1):
            target = canonical_identity(position)
            if note.identity != target:
                old_identity = note.identity
                try:
                    self._vacate(sanitize(target), start=position)
                    self.rename(note, target)
                except StickyNotesError as e:
                    log.error("Reindex stopped at %s -> %s | %s", old_identity, target, e)
                    error = e
                    break
                renamed.append((old_identity, target))
                self._counter = position
                try:
                    self.save(note)
                except NoteIOError as e:
                    error = e
                    break
            else:
                self._counter = position

        try:
            self._store.save_counter(self._counter)
        except NoteIOError as e:
            log.error("Counter not persisted after reindex: %s", e)
            error = error or e

        log.info("Reindex done: counter=%d renamed=%d", self._counter, len(renamed))
        return error

    def _vacate(self, file_handle: str, *, start: int) -> None:
        # a later note may still hold the handle we are about to take
        for note in self._notes[start:]:
            if note.file_handle == file_handle:
                parked = f"{note.identity} (moving {uuid.uuid4().hex[:6]})"
                log.debug("Parking %s as %s", note.identity, parked)
                self.rename(note, parked)

    def _check_capacity(self) -> None:
        if self.is_full():
            log.warning("Notes full: %d/%d", len(self._notes), self._max_notes)
            raise CapacityExceeded(self._max_notes)

    @staticmethod
    def _check_not_reserved(file_handle: str) -> None:
        if file_handle == INDEX_FILENAME:
            raise ValueError(f"{file_handle} is reserved for the note counter")

    def _require_live(self, note: Note) -> None:
        if note.is_deleted:
            raise NoteStateError(f"{note.identity} was deleted")
        if not any(n is note for n in self._notes):
            raise NoteStateError(f"{note.identity} is not managed by this registry")

    def _find_by_handle(self, file_handle: str) -> Note | None:
        for note in self._notes:
            if note.file_handle == file_handle:
                return note
        return None

    def _handle_taken(self, file_handle: str) -> bool:
        return self._find_by_handle(file_handle) is not None or self._store.exists(file_handle)

    def _notify_removed(self, note: Note) -> None:
        for listener in tuple(self._removed_listeners):
            try:
                listener(note)
            except Exception:
                log.exception("on_note_removed listener failed for %s", note.identity)


def _persisted_sort_key(file_handle: str) -> tuple[bool, int, str]:
    number = number_suffix(file_handle)
    return (number is None, number or 0, file_handle.lower())
