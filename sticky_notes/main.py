from __future__ import annotations

import argparse
from pathlib import Path

from PySide6.QtWidgets import QApplication

from sticky_notes.app_settings import open_settings, resolve_notes_dir
from sticky_notes.logging_setup import SESSION_ID, install_global_exception_hooks, log, setup_logging
from sticky_notes.services.registry import NoteRegistry
from sticky_notes.settings import RECOVERY_DIR
from sticky_notes.store.note_store import NoteStore
from sticky_notes.ui.main_window import MainWindow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Desktop sticky notes")
    p.add_argument(
        "--notes-dir",
        type=Path,
        default=None,
        help="Folder holding the note files (remembered for next launch)",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()
    install_global_exception_hooks()

    app = QApplication([])
    settings = open_settings()
    notes_dir = resolve_notes_dir(settings, args.notes_dir)

    registry = NoteRegistry(NoteStore(notes_dir, recovery_dir=RECOVERY_DIR))
    win = MainWindow(registry, settings)
    win.show()
    log.info("Application started, notes_dir=%s SID=%s", notes_dir, SESSION_ID)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
