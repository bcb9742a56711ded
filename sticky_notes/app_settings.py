from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QSettings

from sticky_notes.settings import APP_NAME, DEFAULT_NOTES_DIR


@dataclass(frozen=True)
class SettingsKeys:
    NOTES_DIR: str = "notes/dir"
    MAIN_GEOMETRY: str = "ui/geometry"


def open_settings() -> QSettings:
    return QSettings(APP_NAME, APP_NAME)


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def resolve_notes_dir(settings: QSettings, override: Path | None = None) -> Path:
    """
    Notes directory: command-line override (remembered), else the stored
    value, else the default under the home directory.
    """
    if override is not None:
        path = override.expanduser().resolve()
        settings.setValue(SettingsKeys.NOTES_DIR, str(path))
        return path
    raw = get_str(settings, SettingsKeys.NOTES_DIR, "").strip()
    return Path(raw).expanduser() if raw else DEFAULT_NOTES_DIR
