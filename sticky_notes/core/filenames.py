# sticky_notes/core/filenames.py

from __future__ import annotations

import re

from sticky_notes.settings import IDENTITY_PREFIX, NOTE_EXTENSION


# space and "#" come from the note naming scheme, the rest are not allowed
# in filenames on Windows / macOS / Linux; a run of them becomes one "_"
UNSAFE_CHARS_RE = re.compile(r'[ #<>:"/\\|?*\u0000-\u001f]+')
NUMBER_SUFFIX_RE = re.compile(r"(\d+)$")


def sanitize(identity: str) -> str:
    """
    Convert a note identity into the filename of its backing file.

    "Note #3" -> "Note_3.txt"

    Deterministic and idempotent: sanitize(stem(sanitize(x))) == sanitize(x).
    """
    if identity is None:
        raise ValueError("sanitize(): identity is None")
    return UNSAFE_CHARS_RE.sub("_", str(identity)) + NOTE_EXTENSION


def stem(file_handle: str) -> str:
    """Strip the note extension from a file handle."""
    if file_handle.endswith(NOTE_EXTENSION):
        return file_handle[: -len(NOTE_EXTENSION)]
    return file_handle


def is_note_file(name: str) -> bool:
    return name.endswith(NOTE_EXTENSION) and not name.startswith(".")


def canonical_identity(number: int) -> str:
    return f"{IDENTITY_PREFIX}{number}"


def number_suffix(name: str) -> int | None:
    """Trailing number of an identity or stem: "Note_12" -> 12."""
    m = NUMBER_SUFFIX_RE.search(stem(name))
    return int(m.group(1)) if m else None
