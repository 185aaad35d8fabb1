import pytest

from textforge.core.document import Document, LineEnding, create_document
from textforge.core.errors import TextBufferError


def test_document_operations():
    doc = Document("test.txt")
    doc.insert(0, "Hello")
    assert doc.text == "Hello"
    assert doc.version == 1

    doc.delete(0, 1)
    assert doc.text == "ello"
    assert doc.version == 2

    assert doc.name == "test.txt"
    assert doc.is_dirty


def test_create_document():
    doc = create_document("test.txt")
    assert doc.name == "test.txt"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("hello\nworld", LineEnding.UNIX),
        ("hello\r\nworld", LineEnding.WINDOWS),
        ("hello\rworld", LineEnding.MAC),
        ("no newlines", LineEnding.UNIX),
        ("hello\r\nworld\ntest", LineEnding.WINDOWS),
    ],
)
def test_line_ending_detection(text, expected):
    assert LineEnding.detect(text) is expected


def test_line_ending_normalization():
    unix_text = "line1\nline2\nline3"
    windows_text = "line1\r\nline2\r\nline3"
    mac_text = "line1\rline2\rline3"

    assert LineEnding.UNIX.normalize(windows_text) == unix_text
    assert LineEnding.WINDOWS.normalize(unix_text) == windows_text
    assert LineEnding.MAC.normalize(unix_text) == mac_text

    mixed_text = "line1\nline2\r\nline3\rline4"
    assert LineEnding.UNIX.normalize(mixed_text) == "line1\nline2\nline3\nline4"
    assert LineEnding.WINDOWS.normalize(mixed_text) == "line1\r\nline2\r\nline3\r\nline4"
    assert LineEnding.MAC.normalize(mixed_text) == "line1\rline2\rline3\rline4"


def test_as_str_values():
    assert LineEnding.UNIX.as_str() == "\n"
    assert LineEnding.WINDOWS.as_str() == "\r\n"
    assert LineEnding.MAC.as_str() == "\r"


def test_new_document_metadata():
    doc = Document("main.rs")
    assert doc.language == "rs"
    assert doc.path is None
    assert doc.line_ending is LineEnding.default()
    assert doc.version == 0
    assert not doc.is_dirty


def test_name_without_extension_has_no_language():
    assert Document("Makefile").language is None


def test_failed_edit_does_not_bump_version():
    doc = Document("a.txt")
    with pytest.raises(TextBufferError):
        doc.insert(3, "x")
    assert doc.version == 0


def test_from_file_detects_metadata(tmp_path):
    path = tmp_path / "script.py"
    path.write_bytes(b"a = 1\r\nb = 2\r\n")
    doc = Document.from_file(path)
    assert doc.name == "script.py"
    assert doc.path == path
    assert doc.language == "py"
    assert doc.line_ending is LineEnding.WINDOWS
    assert doc.text == "a = 1\r\nb = 2\r\n"
    assert not doc.is_dirty


def test_save_normalizes_to_chosen_line_ending(tmp_path):
    path = tmp_path / "data.txt"
    path.write_bytes(b"a\r\nb")
    doc = Document.from_file(path)
    doc.set_line_ending(LineEnding.UNIX)
    doc.save()
    assert path.read_bytes() == b"a\nb"
    assert doc.text == "a\nb"
    assert doc.version == 0
    assert not doc.is_dirty


def test_save_writes_edits(tmp_path):
    path = tmp_path / "data.txt"
    path.write_bytes(b"Hello")
    doc = Document.from_file(path)
    doc.insert(5, "\nWorld")
    doc.save()
    assert path.read_bytes() == b"Hello\nWorld"


def test_normalize_line_endings_changes_text_and_style():
    doc = Document("x.txt")
    doc.insert(0, "a\nb")
    doc.normalize_line_endings(LineEnding.WINDOWS)
    assert doc.text == "a\r\nb"
    assert doc.line_ending is LineEnding.WINDOWS
    assert doc.version == 2


def test_normalize_line_endings_without_change_is_noop():
    doc = Document("x.txt")
    before = doc.line_ending
    doc.normalize_line_endings(LineEnding.MAC)
    assert doc.line_ending is before
    assert doc.version == 0