# trantil

Small building blocks for network services and long-running processes.

## Modules

- `trantil.msg_buffer.MsgBuffer`: a growable byte buffer with a reserved
  area in front of the data. It appends and prepends bytes, text (as UTF-8)
  or another buffer, writes and reads 8, 16, 32 and 64-bit unsigned integers
  in network byte order (`append_int32`, `add_in_front_int16`,
  `read_int64`, `peek_int8`, ...), finds a CRLF with `find_crlf`, and reads
  from a file descriptor with `read_fd`.
- `trantil.date.Date`: a time point in microseconds since the epoch, with
  `now`, `from_local`, `after`, `round_second`, `round_day`, UTC and local
  formatting (`to_formatted_string`, `to_custom_formatted_string`,
  `to_formatted_string_local`, `to_custom_formatted_string_local`) and
  database strings (`to_db_string_local`, `from_db_string_local`).
- `trantil.funcs`: `split_string`, `hton64`, `ntoh64`.
- `trantil.utilities`: `to_utf8`, `from_utf8`, `to_wide_path`,
  `from_wide_path`, `to_native_path`, `from_native_path`. Text (`str`)
  stands for wide strings and `bytes` for UTF-8 paths; on Windows the path
  helpers also swap slashes and backslashes.
- `trantil.log_stream.LogStream` and `Fmt`: an append-only builder for log
  lines, fed with `<<`.
- `trantil.logger.Logger`, `RawLogger`, `LogLevel`, `strerror_tl`: log lines
  with a UTC timestamp, the thread id, the level and the source location.
  Output goes to standard output unless replaced with
  `Logger.set_output_function`, globally or under a numeric index chosen
  with `set_index`. Lines at `ERROR` and above are flushed at once.
- `trantil.task_queue.TaskQueue` and `ConcurrentTaskQueue`: a named pool of
  worker threads; `sync_task_in_queue` runs a task and waits for it,
  re-raising its exception.
- `trantil.mpsc_queue.MpscQueue`: a FIFO queue for many producers and one
  consumer; `dequeue` raises `IndexError` when it is empty.
- `trantil.object_pool.ObjectPool`: hands out idle objects, or new ones from
  a factory, and takes them back with `release`.

## Installation

    pip install trantil

## Examples

    from trantil.msg_buffer import MsgBuffer

    buf = MsgBuffer(100)
    buf.append(b"hello\r\n")
    buf.add_in_front_int32(7)
    assert buf.read_int32() == 7
    assert buf.find_crlf() == 5

    from trantil.date import Date

    d = Date.from_local(2018, 1, 1, 12, 0, 0)
    print(d.to_db_string_local())   # 2018-01-01 12:00:00

    from trantil.funcs import split_string

    split_string("trantor::splitString", "::")  # ['trantor', 'splitString']

    from trantil.logger import Logger, LogLevel

    if Logger.log_level() <= LogLevel.WARN:
        with Logger(__file__, 10, LogLevel.WARN) as log:
            log.stream() << "disk usage at " << 93 << "%"

    lines = []
    Logger.set_output_function(lines.append, None, index=1)
    with Logger(__file__, 20).set_index(1) as log:
        log.stream() << "sent to index 1"

    from trantil.task_queue import ConcurrentTaskQueue

    with ConcurrentTaskQueue(4, "worker") as pool:
        pool.sync_task_in_queue(lambda: print("ran on a worker"))

    from trantil.object_pool import ObjectPool

    pool = ObjectPool(bytearray)
    item = pool.get_object()
    pool.release(item)

`Logger` does not check the log level itself; compare `Logger.log_level()`
with the line's level before building it, as above.

## What it does not do

- It does not write logs to files: lines go to standard output or to
  whatever function is set with `Logger.set_output_function`. There is no
  file rotation.
- There is no event loop, networking or serial (one-at-a-time) task queue;
  `ConcurrentTaskQueue` is the only `TaskQueue` provided.
- It has no command-line program.

## Tests

    pip install "trantil[test]"
    pytest