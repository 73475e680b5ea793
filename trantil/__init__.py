"""Byte buffers, dates, log lines, task queues and object pools for network services."""

__version__ = "1.5.4"