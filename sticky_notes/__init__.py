from .core.errors import (
    CapacityExceeded,
    DuplicateIdentity,
    NoteFileExists,
    NoteIOError,
    NoteNotFound,
    NoteStateError,
    StickyNotesError,
)
from .core.filenames import sanitize
from .core.models import Note, NoteState, PersistedNote
from .services.registry import DeleteOutcome, NoteRegistry
from .store.note_store import NoteStore

__all__ = ["CapacityExceeded",
           "DuplicateIdentity",
           "NoteFileExists",
           "NoteIOError",
           "NoteNotFound",
           "NoteStateError",
           "StickyNotesError",
           "sanitize",
           "Note",
           "NoteState",
           "PersistedNote",
           "DeleteOutcome",
           "NoteRegistry",
           "NoteStore"
           ]
