from __future__ import annotations
from pathlib import Path

APP_NAME = "sticky-notes"
APP_DIR = Path.home() / f".{APP_NAME}"
LOG_DIR = APP_DIR / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
RECOVERY_DIR = APP_DIR / "recovery"
DEFAULT_NOTES_DIR = APP_DIR / "notes"

MAX_NOTES = 20
NOTE_EXTENSION = ".txt"
INDEX_FILENAME = "note_index.txt"
IDENTITY_PREFIX = "Note #"
