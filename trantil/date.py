"""A point in time with microsecond resolution."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass

from trantil.funcs import split_string

MICRO_SECONDS_PER_SEC = 1_000_000
_STRFTIME_BUFFER = 256
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _trunc_mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _trunc_div(a, b)


def _parse_leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    return int(match.group(1))


def _limited_strftime(fmt: str, tm: time.struct_time) -> str:
    result = time.strftime(fmt, tm)
    if len(result.encode("utf-8")) >= _STRFTIME_BUFFER:
        return ""
    return result


def _format_tm(tm: time.struct_time, micro: int | None, date_sep: str = "") -> str:
    text = "%4d%s%02d%s%02d %02d:%02d:%02d" % (
        tm.tm_year,
        date_sep,
        tm.tm_mon,
        date_sep,
        tm.tm_mday,
        tm.tm_hour,
        tm.tm_min,
        tm.tm_sec,
    )
    if micro is not None:
        text += ".%06d" % micro
    return text


@dataclass(frozen=True, order=True)
class Date:
    """Microseconds since 1970-01-01 00:00:00 UTC."""

    micro_seconds_since_epoch: int = 0

    @classmethod
    def now(cls) -> Date:
        """Return the current time."""
        return cls(time.time_ns() // 1000)

    @classmethod
    def from_local(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        micro_second: int = 0,
    ) -> Date:
        """Build a date from local calendar fields; out-of-range fields are normalised."""
        epoch = int(time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))
        return cls(epoch * MICRO_SECONDS_PER_SEC + micro_second)

    @classmethod
    def from_db_string_local(cls, datetime_str: str) -> Date:
        """Parse a local ``YYYY-MM-DD HH:MM:SS[.ffffff]`` string."""
        year = month = day = hour = minute = second = micro_second = 0
        parts = split_string(datetime_str, " ")
        if len(parts) == 2:
            date_parts = split_string(parts[0], "-")
            if len(date_parts) == 3:
                year, month, day = (_parse_leading_int(p) for p in date_parts)
                time_parts = split_string(parts[1], ":")
                if len(time_parts) > 2:
                    hour = _parse_leading_int(time_parts[0])
                    minute = _parse_leading_int(time_parts[1])
                    seconds = split_string(time_parts[2], ".")
                    if not seconds:
                        raise ValueError(f"invalid seconds field: {time_parts[2]!r}")
                    second = _parse_leading_int(seconds[0])
                    if len(seconds) > 1:
                        fraction = seconds[1][:6].ljust(6, "0")
                        micro_second = _parse_leading_int(fraction)
        return cls.from_local(year, month, day, hour, minute, second, micro_second)

    def after(self, second: float) -> Date:
        """Return the date ``second`` seconds later."""
        return Date(int(self.micro_seconds_since_epoch + second * MICRO_SECONDS_PER_SEC))

    def round_second(self) -> Date:
        """Return this date with the microseconds dropped."""
        micro = self.micro_seconds_since_epoch
        return Date(micro - _trunc_mod(micro, MICRO_SECONDS_PER_SEC))

    def round_day(self) -> Date:
        """Return the start of this date's local day."""
        t = time.localtime(self.seconds_since_epoch())
        midnight = time.mktime(
            (t.tm_year, t.tm_mon, t.tm_mday, 0, 0, 0, t.tm_wday, t.tm_yday, t.tm_isdst)
        )
        return Date(int(midnight) * MICRO_SECONDS_PER_SEC)

    def seconds_since_epoch(self) -> int:
        """Whole seconds since the epoch, truncated toward zero."""
        return _trunc_div(self.micro_seconds_since_epoch, MICRO_SECONDS_PER_SEC)

    def _micro_part(self) -> int:
        return _trunc_mod(self.micro_seconds_since_epoch, MICRO_SECONDS_PER_SEC)

    def tm_struct(self) -> time.struct_time:
        """Broken-down UTC time."""
        return time.gmtime(self.seconds_since_epoch())

    def to_formatted_string(self, show_microseconds: bool) -> str:
        """UTC string such as ``20180101 10:10:25[.102414]``."""
        micro = self._micro_part() if show_microseconds else None
        return _format_tm(self.tm_struct(), micro)

    def to_custom_formatted_string(self, fmt: str, show_microseconds: bool = False) -> str:
        """UTC string formatted with a strftime format."""
        text = _limited_strftime(fmt, self.tm_struct())
        if not show_microseconds:
            return text
        return text + ".%06d" % self._micro_part()

    def to_formatted_string_local(self, show_microseconds: bool) -> str:
        """Local-time string in the same layout as :meth:`to_formatted_string`."""
        micro = self._micro_part() if show_microseconds else None
        return _format_tm(time.localtime(self.seconds_since_epoch()), micro)

    def to_custom_formatted_string_local(
        self, fmt: str, show_microseconds: bool = False
    ) -> str:
        """Local-time string formatted with a strftime format."""
        text = _limited_strftime(fmt, time.localtime(self.seconds_since_epoch()))
        if not show_microseconds:
            return text
        return text + ".%06d" % self._micro_part()

    def to_db_string_local(self) -> str:
        """Local-time string for databases, omitting parts that are zero."""
        tm = time.localtime(self.seconds_since_epoch())
        micro = self._micro_part()
        if micro != 0:
            return _format_tm(tm, micro, "-")
        if self == self.round_day():
            return "%4d-%02d-%02d" % (tm.tm_year, tm.tm_mon, tm.tm_mday)
        return _format_tm(tm, None, "-")

    def is_same_second(self, other: Date) -> bool:
        """True if both dates fall within the same second."""
        return self.seconds_since_epoch() == other.seconds_since_epoch()