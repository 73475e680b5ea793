"""A growable byte buffer for sending and receiving data."""

from __future__ import annotations

import os
from typing import Union

DEFAULT_LENGTH = 2048
CRLF = b"\r\n"
_OFFSET = 8
_EXTRA_READ_SIZE = 8192

BytesLike = Union[bytes, bytearray, memoryview, str, "MsgBuffer"]


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, MsgBuffer):
        return data.peek()
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class MsgBuffer:
    """A byte buffer with a read position, a write position and room in front.

    The first readable byte sits after a small reserved area so that short
    headers can be put in front of the data without moving it.  Integers are
    written and read in network byte order.
    """

    def __init__(self, length: int = DEFAULT_LENGTH) -> None:
        if length < 0:
            raise ValueError("buffer length must not be negative")
        self._head = _OFFSET
        self._init_cap = length
        self._buf = bytearray(length + _OFFSET)
        self._tail = _OFFSET

    def __len__(self) -> int:
        return self.readable_bytes()

    def __getitem__(self, offset: int) -> int:
        if not 0 <= offset < self.readable_bytes():
            raise IndexError("buffer offset out of range")
        return self._buf[self._head + offset]

    def __repr__(self) -> str:
        return (
            f"MsgBuffer(readable={self.readable_bytes()}, "
            f"writable={self.writable_bytes()})"
        )

    def readable_bytes(self) -> int:
        """Number of bytes waiting to be read."""
        return self._tail - self._head

    def writable_bytes(self) -> int:
        """Number of bytes that can be written without growing the buffer."""
        return len(self._buf) - self._tail

    def peek(self) -> bytes:
        """Return the readable data without removing it."""
        return bytes(self._buf[self._head : self._tail])

    def _peek_int(self, size: int) -> int:
        if self.readable_bytes() < size:
            raise IndexError(f"need {size} readable bytes, have {self.readable_bytes()}")
        return int.from_bytes(self._buf[self._head : self._head + size], "big")

    def peek_int8(self) -> int:
        """Return the first byte without removing it."""
        return self._peek_int(1)

    def peek_int16(self) -> int:
        """Return the first unsigned 16-bit value without removing it."""
        return self._peek_int(2)

    def peek_int32(self) -> int:
        """Return the first unsigned 32-bit value without removing it."""
        return self._peek_int(4)

    def peek_int64(self) -> int:
        """Return the first unsigned 64-bit value without removing it."""
        return self._peek_int(8)

    def read(self, length: int) -> bytes:
        """Remove and return up to ``length`` bytes."""
        length = min(length, self.readable_bytes())
        data = bytes(self._buf[self._head : self._head + length])
        self.retrieve(length)
        return data

    def _read_int(self, size: int) -> int:
        value = self._peek_int(size)
        self.retrieve(size)
        return value

    def read_int8(self) -> int:
        """Remove and return a byte."""
        return self._read_int(1)

    def read_int16(self) -> int:
        """Remove and return an unsigned 16-bit value."""
        return self._read_int(2)

    def read_int32(self) -> int:
        """Remove and return an unsigned 32-bit value."""
        return self._read_int(4)

    def read_int64(self) -> int:
        """Remove and return an unsigned 64-bit value."""
        return self._read_int(8)

    def swap(self, other: MsgBuffer) -> None:
        """Exchange the whole state of this buffer with ``other``."""
        self._buf, other._buf = other._buf, self._buf
        self._head, other._head = other._head, self._head
        self._tail, other._tail = other._tail, self._tail
        self._init_cap, other._init_cap = other._init_cap, self._init_cap

    def ensure_writable_bytes(self, length: int) -> None:
        """Make room for at least ``length`` more bytes at the end."""
        if self.writable_bytes() >= length:
            return
        if self._head + self.writable_bytes() >= length + _OFFSET:
            readable = self.readable_bytes()
            self._buf[_OFFSET : _OFFSET + readable] = self._buf[self._head : self._tail]
            self._tail = _OFFSET + readable
            self._head = _OFFSET
            return
        needed = _OFFSET + self.readable_bytes() + length
        doubled = len(self._buf) * 2
        new_buffer = MsgBuffer(doubled if doubled > needed else needed)
        new_buffer.append(self)
        self.swap(new_buffer)

    def append(self, data: BytesLike) -> None:
        """Append bytes, text (as UTF-8) or the readable part of another buffer."""
        raw = _as_bytes(data)
        self.ensure_writable_bytes(len(raw))
        self._buf[self._tail : self._tail + len(raw)] = raw
        self._tail += len(raw)

    def append_int8(self, value: int) -> None:
        """Append a byte."""
        self.append(value.to_bytes(1, "big"))

    def append_int16(self, value: int) -> None:
        """Append an unsigned 16-bit value."""
        self.append(value.to_bytes(2, "big"))

    def append_int32(self, value: int) -> None:
        """Append an unsigned 32-bit value."""
        self.append(value.to_bytes(4, "big"))

    def append_int64(self, value: int) -> None:
        """Append an unsigned 64-bit value."""
        self.append(value.to_bytes(8, "big"))

    def add_in_front(self, data: BytesLike) -> None:
        """Put bytes in front of the readable data."""
        raw = _as_bytes(data)
        length = len(raw)
        if self._head >= length:
            self._buf[self._head - length : self._head] = raw
            self._head -= length
            return
        if length <= self.writable_bytes():
            readable = self._buf[self._head : self._tail]
            self._buf[self._head + length : self._tail + length] = readable
            self._buf[self._head : self._head + length] = raw
            self._tail += length
            return
        total = length + self.readable_bytes()
        new_buffer = MsgBuffer(self._init_cap if total < self._init_cap else total)
        new_buffer.append(raw)
        new_buffer.append(self)
        self.swap(new_buffer)

    def add_in_front_int8(self, value: int) -> None:
        """Put a byte in front of the readable data."""
        self.add_in_front(value.to_bytes(1, "big"))

    def add_in_front_int16(self, value: int) -> None:
        """Put an unsigned 16-bit value in front of the readable data."""
        self.add_in_front(value.to_bytes(2, "big"))

    def add_in_front_int32(self, value: int) -> None:
        """Put an unsigned 32-bit value in front of the readable data."""
        self.add_in_front(value.to_bytes(4, "big"))

    def add_in_front_int64(self, value: int) -> None:
        """Put an unsigned 64-bit value in front of the readable data."""
        self.add_in_front(value.to_bytes(8, "big"))

    def retrieve_all(self) -> None:
        """Drop all data, shrinking the buffer if it has grown large."""
        if len(self._buf) > self._init_cap * 2:
            self._buf = self._buf[: max(self._init_cap, _OFFSET)]
        self._tail = self._head = _OFFSET

    def retrieve(self, length: int) -> None:
        """Drop ``length`` bytes from the front."""
        if length >= self.readable_bytes():
            self.retrieve_all()
            return
        self._head += length

    def retrieve_until(self, offset: int) -> None:
        """Drop the readable bytes before ``offset``."""
        if not 0 <= offset <= self.readable_bytes():
            raise ValueError("offset outside the readable data")
        self.retrieve(offset)

    def read_fd(self, fd: int) -> int:
        """Read once from ``fd`` into the buffer and return the byte count.

        Raises :class:`OSError` when the read fails.
        """
        writable = self.writable_bytes()
        extra = bytearray(_EXTRA_READ_SIZE)
        if hasattr(os, "readv"):
            with memoryview(self._buf) as view, view[self._tail :] as region:
                buffers = [region, extra] if writable < len(extra) else [region]
                count = os.readv(fd, buffers)
        else:
            limit = writable + (len(extra) if writable < len(extra) else 0)
            data = os.read(fd, limit)
            count = len(data)
            head_part = min(count, writable)
            self._buf[self._tail : self._tail + head_part] = data[:head_part]
            extra[: count - head_part] = data[head_part:]
        if count <= writable:
            self._tail += count
        else:
            self._tail = len(self._buf)
            self.append(extra[: count - writable])
        return count

    def find_crlf(self) -> int | None:
        """Offset of the first CRLF in the readable data, or None."""
        position = self._buf.find(CRLF, self._head, self._tail)
        return None if position < 0 else position - self._head

    def begin_write(self) -> memoryview:
        """A view of the writable area; release it before appending again."""
        return memoryview(self._buf)[self._tail :]

    def has_written(self, length: int) -> None:
        """Mark ``length`` bytes written through :meth:`begin_write` as readable."""
        if not 0 <= length <= self.writable_bytes():
            raise ValueError("written length exceeds the writable area")
        self._tail += length

    def unwrite(self, offset: int) -> None:
        """Remove ``offset`` bytes from the end of the readable data."""
        if not 0 <= offset <= self.readable_bytes():
            raise ValueError("cannot unwrite more than the readable data")
        self._tail -= offset