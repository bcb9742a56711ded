import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sticky_notes.core.filenames import canonical_identity, number_suffix, sanitize, stem


def test_note_identity():
    assert sanitize("Note #3") == "Note_3.txt"


def test_idempotent_on_stem():
    once = sanitize("Note #3")
    assert sanitize(stem(once)) == once


def test_path_separators_replaced():
    assert sanitize("a/b\\c") == "a_b_c.txt"


def test_plain_name_keeps_case():
    assert sanitize("Shopping") == "Shopping.txt"


def test_canonical_identity():
    assert canonical_identity(12) == "Note #12"


def test_number_suffix():
    assert number_suffix("Note_12.txt") == 12
    assert number_suffix("Shopping.txt") is None


def test_run_of_unsafe_chars_collapses():
    assert sanitize("Note  # 3") == "Note_3.txt"
    assert sanitize("a: b?") == "a_b_.txt"


def test_idempotent_on_odd_names():
    once = sanitize("to do: #1 / urgent")
    assert sanitize(stem(once)) == once
