from .errors import CapacityExceeded, DuplicateIdentity, NoteFileExists, NoteIOError, NoteNotFound, NoteStateError, StickyNotesError
from .filenames import canonical_identity, sanitize, stem
from .models import Note, NoteState, PersistedNote

__all__ = ["CapacityExceeded",
           "DuplicateIdentity",
           "NoteFileExists",
           "NoteIOError",
           "NoteNotFound",
           "NoteStateError",
           "StickyNotesError",
           "canonical_identity",
           "sanitize",
           "stem",
           "Note",
           "NoteState",
           "PersistedNote"
           ]
