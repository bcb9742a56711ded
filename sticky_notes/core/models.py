from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sticky_notes.core.filenames import sanitize


class NoteState(str, Enum):
    UNSAVED = "unsaved"
    SAVED = "saved"
    RENAMED = "renamed"
    DELETED = "deleted"


@dataclass(eq=False)
class Note:
    """
    One sticky note. Compared by object identity: two notes with the same
    text are still two windows.
    """
    identity: str
    content: str = ""
    state: NoteState = field(default=NoteState.UNSAVED)

    @property
    def file_handle(self) -> str:
        return sanitize(self.identity)

    @property
    def is_deleted(self) -> bool:
        return self.state is NoteState.DELETED


@dataclass(frozen=True)
class PersistedNote:
    display_identity: str
    file_handle: str
