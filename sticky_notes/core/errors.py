from __future__ import annotations


class StickyNotesError(Exception):
    """Base class for every error the note core reports to the host."""


class CapacityExceeded(StickyNotesError):
    def __init__(self, limit: int):
        super().__init__(f"Notes full ({limit}). Delete a note to create new ones.")
        self.limit = limit


class NoteNotFound(StickyNotesError):
    def __init__(self, file_handle: str):
        super().__init__(f"Note file not found: {file_handle}")
        self.file_handle = file_handle


class NoteIOError(StickyNotesError):
    """Filesystem failure while creating, writing, renaming or deleting a note."""

    def __init__(self, message: str, file_handle: str | None = None):
        super().__init__(message)
        self.file_handle = file_handle
        self.recovery_path = None


class DuplicateIdentity(StickyNotesError):
    def __init__(self, identity: str, file_handle: str):
        super().__init__(f"A note named {identity!r} is already open ({file_handle})")
        self.identity = identity
        self.file_handle = file_handle


class NoteStateError(StickyNotesError):
    """Operation on a note that was deleted or is not owned by the registry."""


class NoteFileExists(NoteIOError):
    """Rename target already belongs to another stored note."""

    def __init__(self, file_handle: str, target: str):
        super().__init__(f"Cannot rename {file_handle} to {target}: target already exists", file_handle)
        self.target = target
