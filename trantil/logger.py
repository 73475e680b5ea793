"""Formatted log lines with pluggable, optionally indexed, output functions."""

from __future__ import annotations

import os
import sys
import threading
from enum import IntEnum
from typing import Callable, Optional, Union

from trantil.date import Date
from trantil.log_stream import LogStream

OutputFunc = Callable[[str], object]
FlushFunc = Callable[[], object]

_TIME_STRING_LIMIT = 31
_TIME_STRING_WIDTH = 17


class LogLevel(IntEnum):
    """Severity of a log line; lines below the current level are not written."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


_LEVEL_NAMES = {
    LogLevel.TRACE: " TRACE ",
    LogLevel.DEBUG: " DEBUG ",
    LogLevel.INFO: " INFO  ",
    LogLevel.WARN: " WARN  ",
    LogLevel.ERROR: " ERROR ",
    LogLevel.FATAL: " FATAL ",
}


def strerror_tl(saved_errno: int) -> str:
    """Text describing an operating-system error number."""
    return os.strerror(saved_errno)


def _default_output(msg: str) -> None:
    sys.stdout.write(msg)


def _default_flush() -> None:
    sys.stdout.flush()


class _Registry:
    """Output and flush functions shared by all loggers, plus the log level."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.output: Optional[OutputFunc] = _default_output
        self.flush: Optional[FlushFunc] = _default_flush
        self.outputs: list[Optional[OutputFunc]] = []
        self.flushes: list[Optional[FlushFunc]] = []
        self.level = LogLevel.DEBUG

    def _grow(self, index: int) -> None:
        while index >= len(self.outputs):
            self.outputs.append(self.output)
        while index >= len(self.flushes):
            self.flushes.append(self.flush)

    def lookup(self, index: int) -> tuple[Optional[OutputFunc], Optional[FlushFunc]]:
        with self.lock:
            if index < 0:
                return self.output, self.flush
            self._grow(index)
            return self.outputs[index], self.flushes[index]

    def assign(
        self, output: Optional[OutputFunc], flush: Optional[FlushFunc], index: int
    ) -> None:
        with self.lock:
            if index < 0:
                self.output = output
                self.flush = flush
            else:
                self._grow(index)
                self.outputs[index] = output
                self.flushes[index] = flush


_registry = _Registry()
_thread_state = threading.local()


def _write_time(stream: LogStream) -> None:
    date = Date.now()
    now = date.seconds_since_epoch()
    micro = date.micro_seconds_since_epoch - date.round_second().micro_seconds_since_epoch
    if getattr(_thread_state, "last_second", None) != now:
        _thread_state.last_second = now
        _thread_state.time_string = date.to_formatted_string(False)[:_TIME_STRING_LIMIT]
    stream.append(_thread_state.time_string[:_TIME_STRING_WIDTH])
    stream.append(".%06d UTC " % micro)
    stream << threading.get_native_id()


def _basename(file: Union[str, os.PathLike]) -> str:
    return os.fspath(file).rsplit("/", 1)[-1]


def _sys_errno(is_sys_err: Union[bool, int]) -> int:
    if is_sys_err is True:
        exc = sys.exc_info()[1]
        if isinstance(exc, OSError) and exc.errno:
            return exc.errno
        return 0
    if isinstance(is_sys_err, int) and not isinstance(is_sys_err, bool):
        return is_sys_err
    return 0


class Logger:
    """One log line: a header at creation, the message, and a source location.

    The line is written when :meth:`finish` is called or the ``with`` block
    ends.  Lines at ``ERROR`` or above are flushed right away.

    ``is_sys_err`` turns the line into a ``FATAL`` system-error line.  It may
    be an error number, or ``True`` to take the number from the ``OSError``
    being handled.
    """

    def __init__(
        self,
        file: Union[str, os.PathLike],
        line: int,
        level: Union[LogLevel, int] = LogLevel.INFO,
        func: Optional[str] = None,
        is_sys_err: Union[bool, int] = False,
    ) -> None:
        self._source_file = _basename(file)
        self._line = line
        self._level = LogLevel.FATAL if is_sys_err else LogLevel(level)
        self._index = -1
        self._finished = False
        self._stream = LogStream()
        _write_time(self._stream)
        self._stream.append(_LEVEL_NAMES[self._level])
        if func is not None:
            self._stream << "[" << func << "] "
        code = _sys_errno(is_sys_err)
        if code != 0:
            self._stream << strerror_tl(code) << " (errno=" << code << ") "

    @property
    def level(self) -> LogLevel:
        """The level of this line."""
        return self._level

    def set_index(self, index: int) -> Logger:
        """Send this line to the output functions registered under ``index``."""
        self._index = index
        return self

    def stream(self) -> LogStream:
        """The stream the message is written to."""
        return self._stream

    def finish(self) -> None:
        """Complete the line and hand it to the output function; runs once."""
        if self._finished:
            return
        self._finished = True
        self._stream << " - " << self._source_file << ":" << self._line << "\n"
        output, flush = _registry.lookup(self._index)
        if output is None:
            return
        output(self._stream.buffer_data())
        if self._level >= LogLevel.ERROR and flush is not None:
            flush()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *args: object) -> None:
        self.finish()

    @classmethod
    def set_output_function(
        cls,
        output_func: Optional[OutputFunc],
        flush_func: Optional[FlushFunc],
        index: int = -1,
    ) -> None:
        """Set where lines go; a negative index sets the default functions."""
        _registry.assign(output_func, flush_func, index)

    @classmethod
    def set_log_level(cls, level: Union[LogLevel, int]) -> None:
        """Set the lowest level that is written."""
        _registry.level = LogLevel(level)

    @classmethod
    def log_level(cls) -> LogLevel:
        """The lowest level that is written."""
        return _registry.level


class RawLogger:
    """A log line written exactly as given, with no header and no location."""

    def __init__(self) -> None:
        self._stream = LogStream()
        self._index = -1
        self._finished = False

    def set_index(self, index: int) -> RawLogger:
        """Send this line to the output functions registered under ``index``."""
        self._index = index
        return self

    def stream(self) -> LogStream:
        """The stream the text is written to."""
        return self._stream

    def finish(self) -> None:
        """Hand the text to the output function; runs once."""
        if self._finished:
            return
        self._finished = True
        output, _ = _registry.lookup(self._index)
        if output is None:
            return
        output(self._stream.buffer_data())

    def __enter__(self) -> RawLogger:
        return self

    def __exit__(self, *args: object) -> None:
        self.finish()