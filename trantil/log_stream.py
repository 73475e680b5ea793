"""An append-only text stream used to build log lines."""

from __future__ import annotations

from typing import Any

SMALL_BUFFER = 4000
LARGE_BUFFER = 4000 * 1000
_FMT_BUFFER = 48


class Fmt:
    """A single value rendered with a printf-style format.

    The rendered text must be shorter than 48 characters.
    """

    __slots__ = ("_text",)

    def __init__(self, fmt: str, value: Any) -> None:
        text = fmt % (value,)
        if len(text) >= _FMT_BUFFER:
            raise ValueError(
                f"formatted value is {len(text)} characters; the limit is {_FMT_BUFFER - 1}"
            )
        self._text = text

    def data(self) -> str:
        """The rendered text."""
        return self._text

    def length(self) -> int:
        """Length of the rendered text."""
        return len(self._text)

    def __repr__(self) -> str:
        return f"Fmt({self._text!r})"


def _render(value: Any) -> str:
    if value is None:
        return "(null)"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return "%.12g" % value
    if isinstance(value, str):
        return value
    if isinstance(value, Fmt):
        return value.data()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


class LogStream:
    """Collects the pieces of a log line.

    Values are added with ``<<``: booleans become ``1``/``0``, integers are
    written in decimal, floats with twelve significant digits, ``None`` as
    ``(null)`` and everything else as its text.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0

    def append(self, data: str) -> None:
        """Append text as it is."""
        if data:
            self._parts.append(data)
            self._length += len(data)

    def __lshift__(self, value: Any) -> LogStream:
        self.append(_render(value))
        return self

    def buffer_data(self) -> str:
        """Everything written so far."""
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def buffer_length(self) -> int:
        """Length of everything written so far."""
        return self._length

    def reset_buffer(self) -> None:
        """Discard everything written so far."""
        self._parts.clear()
        self._length = 0

    def __str__(self) -> str:
        return self.buffer_data()

    def __len__(self) -> int:
        return self._length