import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from sticky_notes.core.errors import NoteFileExists, NoteIOError, NoteNotFound
from sticky_notes.store.note_store import NoteStore


@pytest.fixture
def store(tmp_path):
    return NoteStore(tmp_path / "notes", recovery_dir=tmp_path / "recovery")


def test_write_creates_directory(store):
    store.write("Note_1.txt", "hello")
    assert (store.notes_dir / "Note_1.txt").read_text(encoding="utf-8") == "hello"


@pytest.mark.parametrize("content", ["", "one line", "a\nb\n", "crlf\r\nkept\r\n", "ünïcödé ✓"])
def test_read_returns_exact_content(store, content):
    store.write("Note_1.txt", content)
    assert store.read("Note_1.txt") == content


def test_read_missing(store):
    with pytest.raises(NoteNotFound):
        store.read("Note_9.txt")


def test_rename_missing_source_is_noop(store):
    store.rename("Note_1.txt", "Note_2.txt")
    assert not store.exists("Note_2.txt")


def test_rename_moves_file(store):
    store.write("Note_1.txt", "x")
    store.rename("Note_1.txt", "Note_2.txt")
    assert not store.exists("Note_1.txt")
    assert store.read("Note_2.txt") == "x"


def test_rename_never_overwrites(store):
    store.write("Note_1.txt", "first")
    store.write("Note_2.txt", "second")
    with pytest.raises(NoteFileExists):
        store.rename("Note_1.txt", "Note_2.txt")
    assert store.read("Note_1.txt") == "first"
    assert store.read("Note_2.txt") == "second"


def test_delete(store):
    store.write("Note_1.txt", "x")
    store.delete("Note_1.txt")
    assert not store.exists("Note_1.txt")
    store.delete("Note_1.txt")


def test_list_excludes_index_and_other_files(store):
    store.write("Note_1.txt", "")
    store.write("Note_2.txt", "")
    store.save_counter(2)
    (store.notes_dir / "readme.md").write_text("x", encoding="utf-8")
    (store.notes_dir / ".Note_3.txt.tmp-abc.txt").write_text("x", encoding="utf-8")
    assert sorted(store.list_note_files()) == ["Note_1.txt", "Note_2.txt"]


def test_list_missing_directory(store):
    assert store.list_note_files() == []


def test_counter_roundtrip(store):
    store.save_counter(7)
    assert store.index_path.read_text(encoding="utf-8") == "7"
    assert store.load_counter() == 7


def test_counter_missing_file(store):
    assert store.load_counter() == 0


@pytest.mark.parametrize("raw", ["", "garbage", "3.5", "-4", "\x00\x01"])
def test_counter_garbage(store, raw):
    store.ensure()
    store.index_path.write_text(raw, encoding="utf-8")
    assert store.load_counter() == 0


def test_counter_tolerates_trailing_newline(store):
    store.ensure()
    store.index_path.write_text("5\n", encoding="utf-8")
    assert store.load_counter() == 5


def test_write_failure_raises_note_io_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = NoteStore(blocker / "notes")
    with pytest.raises(NoteIOError):
        store.write("Note_1.txt", "x")


def test_recovery_copy(store):
    path = store.write_recovery_copy("Note_4.txt", "rescued")
    assert path is not None
    assert path.parent == store.recovery_dir
    assert path.name.startswith("Note_4.recovery.")
    assert path.read_text(encoding="utf-8") == "rescued"


def test_recovery_disabled(tmp_path):
    assert NoteStore(tmp_path).write_recovery_copy("Note_1.txt", "x") is None
