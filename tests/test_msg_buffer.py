import os

import pytest

from trantil.msg_buffer import MsgBuffer


def test_readable():
    buffer = MsgBuffer()
    assert buffer.readable_bytes() == 0
    buffer.append(b"a" * 128)
    assert buffer.readable_bytes() == 128
    buffer.retrieve(100)
    assert buffer.readable_bytes() == 28
    assert buffer.peek_int8() == ord("a")
    buffer.retrieve_all()
    assert buffer.readable_bytes() == 0


def test_writable():
    buffer = MsgBuffer(100)
    assert buffer.writable_bytes() == 100
    buffer.append("abcde")
    assert buffer.writable_bytes() == 95
    buffer.append(b"x" * 100)
    assert buffer.writable_bytes() == 111
    buffer.retrieve(100)
    assert buffer.writable_bytes() == 111
    buffer.append(b"c" * 112)
    assert buffer.writable_bytes() == 99
    buffer.retrieve_all()
    assert buffer.writable_bytes() == 216


def test_add_in_front():
    buffer = MsgBuffer(100)
    assert buffer.writable_bytes() == 100
    buffer.add_in_front_int8(ord("a"))
    assert buffer.writable_bytes() == 100
    buffer.add_in_front_int64(123)
    assert buffer.writable_bytes() == 92
    buffer.add_in_front_int64(100)
    assert buffer.writable_bytes() == 84
    buffer.add_in_front_int8(1)
    assert buffer.writable_bytes() == 84
    assert buffer.read_int8() == 1
    assert buffer.read_int64() == 100
    assert buffer.read_int64() == 123
    assert buffer.read_int8() == ord("a")
    assert len(buffer) == 0


def test_swap_moves_state():
    first = MsgBuffer(100)
    first.append(b"hello")
    writable = first.writable_bytes()
    second = MsgBuffer(1000)
    second.swap(first)
    assert second.peek() == b"hello"
    assert second.writable_bytes() == writable
    assert first.writable_bytes() == 1000
    assert first.readable_bytes() == 0


def test_integers_are_big_endian():
    buffer = MsgBuffer()
    buffer.append_int64(0x0102030405060708)
    assert buffer.peek() == bytes(range(1, 9))
    buffer.append_int32(0xDEADBEEF)
    buffer.append_int16(0x1234)
    assert buffer.read_int64() == 0x0102030405060708
    assert buffer.peek_int32() == 0xDEADBEEF
    assert buffer.read_int32() == 0xDEADBEEF
    assert buffer.peek_int16() == 0x1234
    assert buffer.read_int16() == 0x1234
    assert buffer.readable_bytes() == 0


def test_peek_without_enough_data_raises():
    buffer = MsgBuffer()
    buffer.append(b"\x01")
    with pytest.raises(IndexError):
        buffer.peek_int16()
    with pytest.raises(IndexError):
        MsgBuffer().read_int8()


def test_value_out_of_range_raises():
    with pytest.raises(OverflowError):
        MsgBuffer().append_int16(70000)


def test_read_is_capped():
    buffer = MsgBuffer()
    buffer.append(b"abcdef")
    assert buffer.read(4) == b"abcd"
    assert buffer.read(100) == b"ef"
    assert buffer.read(1) == b""


def test_append_other_buffer():
    source = MsgBuffer()
    source.append(b"xyz")
    target = MsgBuffer()
    target.append(b"ab")
    target.append(source)
    assert target.peek() == b"abxyz"
    assert source.peek() == b"xyz"


def test_getitem():
    buffer = MsgBuffer()
    buffer.append(b"abc")
    buffer.retrieve(1)
    assert buffer[0] == ord("b")
    assert buffer[1] == ord("c")
    with pytest.raises(IndexError):
        buffer[2]


def test_find_crlf_and_retrieve_until():
    buffer = MsgBuffer()
    buffer.append(b"GET / HTTP/1.1\r\nHost: example.com\r\n")
    position = buffer.find_crlf()
    assert position == 14
    buffer.retrieve_until(position + 2)
    assert buffer.peek() == b"Host: example.com\r\n"
    with pytest.raises(ValueError):
        buffer.retrieve_until(1000)


def test_find_crlf_missing():
    buffer = MsgBuffer()
    buffer.append(b"no line end\r")
    assert buffer.find_crlf() is None


def test_begin_write_and_has_written():
    buffer = MsgBuffer(16)
    with buffer.begin_write() as view:
        view[:3] = b"abc"
    buffer.has_written(3)
    assert buffer.peek() == b"abc"
    assert buffer.writable_bytes() == 13
    with pytest.raises(ValueError):
        buffer.has_written(14)


def test_unwrite():
    buffer = MsgBuffer()
    buffer.append(b"hello world")
    buffer.unwrite(6)
    assert buffer.peek() == b"hello"
    with pytest.raises(ValueError):
        buffer.unwrite(6)


def test_ensure_writable_moves_data_forward():
    buffer = MsgBuffer(20)
    buffer.append(b"a" * 20)
    buffer.retrieve(15)
    buffer.ensure_writable_bytes(10)
    assert buffer.writable_bytes() == 15
    assert buffer.peek() == b"a" * 5


def test_read_fd_small():
    read_end, write_end = os.pipe()
    try:
        os.write(write_end, b"payload")
        buffer = MsgBuffer(100)
        assert buffer.read_fd(read_end) == 7
        assert buffer.peek() == b"payload"
    finally:
        os.close(read_end)
        os.close(write_end)


def test_read_fd_overflows_into_extra_space():
    read_end, write_end = os.pipe()
    try:
        data = bytes(range(256)) * 4
        os.write(write_end, data)
        buffer = MsgBuffer(16)
        assert buffer.read_fd(read_end) == len(data)
        assert buffer.peek() == data
    finally:
        os.close(read_end)
        os.close(write_end)


def test_read_fd_bad_descriptor_raises():
    read_end, write_end = os.pipe()
    os.close(read_end)
    os.close(write_end)
    with pytest.raises(OSError):
        MsgBuffer().read_fd(read_end)