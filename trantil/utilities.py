"""Conversions between UTF-8 byte strings, text and file-system paths.

Byte strings hold UTF-8 encoded paths; ``str`` values play the part of wide
strings.
"""

from __future__ import annotations

import os
from typing import Union

_WINDOWS = os.name == "nt"

BytesLike = Union[bytes, bytearray, memoryview]


def to_utf8(wide: str) -> bytes:
    """Encode text as UTF-8."""
    if not wide:
        return b""
    return wide.encode("utf-8")


def from_utf8(data: BytesLike) -> str:
    """Decode UTF-8 bytes; invalid input gives an empty string."""
    if not data:
        return ""
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return ""


def to_wide_path(path: BytesLike) -> str:
    """Decode a UTF-8 path; on Windows slashes become backslashes."""
    wide = from_utf8(path)
    if _WINDOWS:
        wide = wide.replace("/", "\\")
    return wide


def from_wide_path(path: str) -> bytes:
    """Encode a path as UTF-8; on Windows backslashes become slashes."""
    if _WINDOWS:
        path = path.replace("\\", "/")
    return to_utf8(path)


def to_native_path(path: BytesLike | str) -> bytes | str:
    """Convert a path to the form the platform's file API prefers.

    On Windows that is text with backslash separators; elsewhere it is UTF-8
    bytes, and byte paths pass through unchanged.
    """
    if isinstance(path, str):
        return path if _WINDOWS else from_wide_path(path)
    if _WINDOWS:
        return to_wide_path(path)
    return bytes(path)


def from_native_path(path: BytesLike | str) -> bytes:
    """Convert a native path back to a UTF-8 byte path."""
    if isinstance(path, str):
        return from_wide_path(path)
    return bytes(path)