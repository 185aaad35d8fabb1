import pytest

from textforge.core.buffer import Buffer, create_buffer
from textforge.core.errors import TextBufferError


def test_buffer_operations():
    buffer = Buffer()
    buffer.insert(0, "Hello")
    assert buffer.text == "Hello"

    buffer.insert(5, " World")
    assert buffer.text == "Hello World"

    buffer.delete(5, 6)
    assert buffer.text == "HelloWorld"

    assert len(buffer) == 10
    assert buffer.is_dirty


def test_create_buffer():
    buffer = create_buffer("Hello, World!")
    assert buffer.text == "Hello, World!"


def test_new_buffer_is_clean_and_empty():
    buffer = Buffer()
    assert buffer.is_empty
    assert len(buffer) == 0
    assert not buffer.is_dirty
    assert buffer.path is None


def test_length_counts_utf8_bytes():
    buffer = Buffer("é")
    assert len(buffer) == len("é".encode("utf-8"))


def test_insert_out_of_range_raises():
    buffer = Buffer("abc")
    with pytest.raises(TextBufferError):
        buffer.insert(4, "x")
    assert buffer.text == "abc"
    assert not buffer.is_dirty


@pytest.mark.parametrize(("start", "end"), [(2, 1), (-1, 2), (0, 4)])
def test_delete_invalid_range_raises(start, end):
    buffer = Buffer("abc")
    with pytest.raises(TextBufferError):
        buffer.delete(start, end)
    assert buffer.text == "abc"


def test_from_file_and_save_round_trip(tmp_path):
    path = tmp_path / "note.txt"
    path.write_bytes(b"one\r\ntwo\n")
    buffer = Buffer.from_file(path)
    assert buffer.text == "one\r\ntwo\n"
    assert buffer.path == path
    assert not buffer.is_dirty

    buffer.insert(0, "zero\r\n")
    assert buffer.is_dirty
    buffer.save()
    assert not buffer.is_dirty
    assert path.read_bytes() == b"zero\r\none\r\ntwo\n"


def test_from_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Buffer.from_file(tmp_path / "missing.txt")


def test_save_without_path_keeps_dirty_flag():
    buffer = Buffer()
    buffer.insert(0, "x")
    buffer.save()
    assert buffer.is_dirty
    assert buffer.text == "x"