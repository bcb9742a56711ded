from __future__ import annotations

from PySide6.QtCore import Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QLabel, QMainWindow, QMessageBox

from sticky_notes.app_settings import SettingsKeys
from sticky_notes.core.errors import CapacityExceeded, NoteFileExists, StickyNotesError
from sticky_notes.core.models import Note
from sticky_notes.logging_setup import log
from sticky_notes.services.registry import NoteRegistry
from sticky_notes.ui.note_window import StickyNoteWindow


class MainWindow(QMainWindow):
    def __init__(self, registry: NoteRegistry, settings):
        super().__init__()
        self.setWindowTitle("Sticky Notes")
        self._registry = registry
        self._settings = settings
        self._windows: dict[int, StickyNoteWindow] = {}

        self.setCentralWidget(QLabel("Use Menu to create or open notes.", self))
        self._update_status()

        notes_menu = self.menuBar().addMenu("Menu")
        create_action = QAction("Create Note", self)
        notes_menu.addAction(create_action)
        self._view_menu = notes_menu.addMenu("View Notes")
        self._view_menu.aboutToShow.connect(self._rebuild_view_menu)

        create_action.triggered.connect(self.create_note)
        registry.add_removed_listener(self._on_note_removed)

        geo = settings.value(SettingsKeys.MAIN_GEOMETRY)
        if geo:
            self.restoreGeometry(geo)
        else:
            self.resize(320, 120)

    # ───────────────────────── actions ─────────────────────────

    @Slot()
    def create_note(self) -> None:
        try:
            note = self._registry.create()
        except CapacityExceeded as e:
            QMessageBox.warning(self, "Notes full", str(e))
            return
        except StickyNotesError as e:
            QMessageBox.critical(self, "Error", str(e))
            return
        self._show_note(note)

    @Slot()
    def _rebuild_view_menu(self) -> None:
        self._view_menu.clear()
        try:
            persisted = self._registry.list_persisted()
        except OSError:
            log.exception("Listing notes failed")
            persisted = []
        if not persisted:
            self._view_menu.addAction("(no notes)").setEnabled(False)
            return
        for item in persisted:
            action = self._view_menu.addAction(item.display_identity)
            action.triggered.connect(
                lambda _checked=False, fh=item.file_handle: self.open_persisted(fh)
            )

    def open_persisted(self, file_handle: str) -> None:
        for note in self._registry:
            if note.file_handle == file_handle:
                self._show_note(note)
                return
        try:
            note = self._registry.load(file_handle)
        except StickyNotesError as e:
            QMessageBox.warning(self, "Open Note", str(e))
            return
        self._show_note(note)

    def _delete_note(self, note: Note) -> None:
        outcome = self._registry.delete(note)
        if outcome.file_error is not None:
            QMessageBox.warning(self, "Delete Note", str(outcome.file_error))
        err = outcome.reindex_error
        if isinstance(err, NoteFileExists):
            # stays blocked until that stored note is opened or moved away
            QMessageBox.warning(
                self,
                "Delete Note",
                f"Notes could not be renumbered: a stored note {err.target} is in the way.\n"
                "Open it from View Notes or move it out of the notes folder.",
            )
        elif err is not None:
            QMessageBox.warning(self, "Delete Note", str(err))

    # ───────────────────────── registry events ─────────────────────────

    def _on_note_removed(self, note: Note) -> None:
        win = self._windows.pop(id(note), None)
        if win is not None:
            win.close()
            win.deleteLater()
        for other in self._windows.values():
            other.refresh_title()
        self._update_status()

    # ───────────────────────── internal ─────────────────────────

    def _show_note(self, note: Note) -> None:
        win = self._windows.get(id(note))
        if win is None:
            win = StickyNoteWindow(note, self._registry)
            win.deleteRequested.connect(self._delete_note)
            self._windows[id(note)] = win
        win.show()
        win.raise_()
        win.activateWindow()
        self._update_status()

    def _update_status(self) -> None:
        self.statusBar().showMessage(f"{len(self._registry)}/{self._registry.max_notes} notes open")

    def closeEvent(self, event):  # type: ignore[override]
        self._settings.setValue(SettingsKeys.MAIN_GEOMETRY, self.saveGeometry())
        for win in list(self._windows.values()):
            win.hide()
        failed = self._registry.close()
        if failed:
            names = ", ".join(n.identity for n in failed)
            QMessageBox.warning(self, "Sticky Notes", f"Could not save: {names}")
        super().closeEvent(event)
