"""
Named Debug Streams for rpnkey

This module provides DebugStreams, a registry mapping names to open text
sinks for diagnostic output. Components receive the registry they should
write to; there is no process-wide instance.

Semantics:
    - Append-only: names can be registered or re-registered, never removed
    - add_file opens the path for writing and owns the file handle
    - get_stream on an unknown name raises NoSuchStreamError
    - handler() adapts a registered sink to the logging module
    - After close() the registry rejects registration and lookups
"""

import logging
import threading
from pathlib import Path
from typing import Optional, TextIO


class NoSuchStreamError(LookupError):
    """Raised when looking up a stream name that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"DebugStreams: No such stream: {name!r}")
        self.name = name


class DebugStreams:
    """
    Registry of named output sinks.

    Usage:
        streams = DebugStreams()
        streams.add_stream("console", sys.stderr)
        streams.add_file("trace", "trace.log")
        print("hello", file=streams.get_stream("trace"))
        streams.close()
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._streams: dict[str, TextIO] = {}
        self._owned: list[TextIO] = []
        self._lock = threading.Lock()
        self._closed = False

    def __enter__(self) -> "DebugStreams":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._streams

    def names(self) -> list[str]:
        """Return registered names in sorted order."""
        with self._lock:
            return sorted(self._streams)

    def add_stream(self, name: str, stream: TextIO) -> None:
        """
        Register an already open sink under name.

        The registry does not take ownership: close() leaves it open.
        Registering an existing name replaces the previous sink.
        """
        with self._lock:
            self._check_open()
            self._streams[name] = stream

    def add_file(self, name: str, path: str | Path) -> TextIO:
        """
        Open path for writing and register it under name.

        Parent directories are created if needed. The registry owns the
        file and closes it in close().

        Returns:
            The opened file object

        Raises:
            OSError: If the file cannot be opened
        """
        with self._lock:
            self._check_open()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        stream = path.open("w", encoding="utf-8")
        with self._lock:
            self._streams[name] = stream
            self._owned.append(stream)
        return stream

    def get_stream(self, name: str) -> TextIO:
        """
        Return the sink registered under name.

        Raises:
            NoSuchStreamError: If name was never registered
            ValueError: If the registry has been closed
        """
        with self._lock:
            self._check_open()
            try:
                return self._streams[name]
            except KeyError:
                raise NoSuchStreamError(name) from None

    def handler(
        self,
        name: str,
        level: int = logging.DEBUG,
        fmt: Optional[str] = "%(levelname)s %(name)s: %(message)s",
    ) -> logging.StreamHandler:
        """
        Create a logging handler writing to the sink registered under name.

        Raises:
            NoSuchStreamError: If name was never registered
        """
        handler = logging.StreamHandler(self.get_stream(name))
        handler.setLevel(level)
        if fmt is not None:
            handler.setFormatter(logging.Formatter(fmt))
        return handler

    def close(self) -> None:
        """
        Flush every sink and close the files opened by add_file.

        Closing twice is harmless.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            for stream in self._streams.values():
                if not stream.closed:
                    stream.flush()
            for stream in self._owned:
                if not stream.closed:
                    stream.close()

    def _check_open(self) -> None:
        # caller holds self._lock
        if self._closed:
            raise ValueError("DebugStreams is closed")
