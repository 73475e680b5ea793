"""Small helpers: byte-order conversion for 64-bit values and string splitting."""

from __future__ import annotations

import sys

_UINT64_MAX = (1 << 64) - 1


def hton64(n: int) -> int:
    """Convert an unsigned 64-bit integer from host to network byte order."""
    if not 0 <= n <= _UINT64_MAX:
        raise ValueError(f"value out of range for a 64-bit unsigned integer: {n}")
    if sys.byteorder == "big":
        return n
    return int.from_bytes(n.to_bytes(8, "little"), "big")


def ntoh64(n: int) -> int:
    """Convert an unsigned 64-bit integer from network to host byte order."""
    return hton64(n)


def split_string(s: str, delimiter: str, accept_empty_string: bool = False) -> list[str]:
    """Split ``s`` on ``delimiter``.

    Empty pieces are dropped unless ``accept_empty_string`` is true.  An empty
    delimiter yields an empty list.
    """
    if not delimiter:
        return []
    pieces: list[str] = []
    last = 0
    while (found := s.find(delimiter, last)) != -1:
        if found > last or accept_empty_string:
            pieces.append(s[last:found])
        last = found + len(delimiter)
    if len(s) > last or accept_empty_string:
        pieces.append(s[last:])
    return pieces