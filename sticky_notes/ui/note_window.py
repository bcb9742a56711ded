from __future__ import annotations

from PySide6.QtCore import Signal, Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QInputDialog, QLineEdit, QMenuBar, QMessageBox, QTextEdit, QVBoxLayout, QWidget,
)

from sticky_notes.core.errors import NoteIOError, StickyNotesError
from sticky_notes.core.models import Note
from sticky_notes.logging_setup import log
from sticky_notes.qt_utils import blocked_signals
from sticky_notes.services.registry import NoteRegistry


class StickyNoteWindow(QWidget):
    """
    One window per note. Holds the text and forwards File menu actions to
    the registry; closing the window only hides it.
    """
    deleteRequested = Signal(object)

    def __init__(self, note: Note, registry: NoteRegistry, parent=None):
        super().__init__(parent)
        self.note = note
        self._registry = registry
        self.resize(250, 250)

        menu_bar = QMenuBar(self)
        file_menu = menu_bar.addMenu("File")
        save_action = QAction("Save", self)
        delete_action = QAction("Delete", self)
        rename_action = QAction("Rename", self)
        file_menu.addAction(save_action)
        file_menu.addAction(delete_action)
        file_menu.addAction(rename_action)

        self.editor = QTextEdit(self)

        layout = QVBoxLayout(self)
        layout.setMenuBar(menu_bar)
        layout.addWidget(self.editor)

        self.editor.textChanged.connect(self._sync_content)
        with blocked_signals(self.editor):
            self.editor.setPlainText(note.content)
        save_action.triggered.connect(self.save_note)
        delete_action.triggered.connect(lambda: self.deleteRequested.emit(self.note))
        rename_action.triggered.connect(self._ask_rename)

        self.refresh_title()

    def refresh_title(self) -> None:
        self.setWindowTitle(self.note.identity)

    @Slot()
    def _sync_content(self) -> None:
        self.note.content = self.editor.toPlainText()

    @Slot()
    def save_note(self) -> bool:
        if self.note.is_deleted:
            return True
        try:
            self._registry.save(self.note)
        except NoteIOError as e:
            msg = str(e)
            if e.recovery_path is not None:
                msg += f"\n\nA copy was saved to:\n{e.recovery_path}"
            QMessageBox.critical(self, "Error", msg)
            return False
        return True

    @Slot()
    def _ask_rename(self) -> None:
        text, ok = QInputDialog.getText(
            self, "Rename Note", "New name:", QLineEdit.EchoMode.Normal, self.note.identity
        )
        if not ok or not text.strip():
            return
        try:
            self._registry.rename(self.note, text)
        except (StickyNotesError, ValueError) as e:
            log.warning("Rename rejected: %s -> %s | %s", self.note.identity, text, e)
            QMessageBox.warning(self, "Rename Note", str(e))
            return
        self.refresh_title()

    def closeEvent(self, event):  # type: ignore[override]
        self.save_note()
        super().closeEvent(event)
