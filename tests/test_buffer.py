import pytest

from imageclient.core import ResponseBuffer


def test_buffer_starts_empty():
    buffer = ResponseBuffer(8)
    assert len(buffer) == 0
    assert buffer.capacity == 8
    assert buffer.getvalue() == b""


def test_buffer_doubles_when_full():
    buffer = ResponseBuffer(4)
    buffer.extend(b"abcd")
    assert buffer.capacity == 4
    buffer.extend(b"e")
    assert buffer.capacity == 8
    buffer.extend(b"fghijklmn")
    assert buffer.capacity == 16
    assert buffer.getvalue() == b"abcdefghijklmn"


def test_buffer_handles_chunks_larger_than_capacity():
    payload = bytes(range(256)) * 40
    buffer = ResponseBuffer(1)
    buffer.extend(payload)
    assert buffer.getvalue() == payload
    assert buffer.capacity >= len(payload)


def test_buffer_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        ResponseBuffer(0)
