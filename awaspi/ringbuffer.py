"""Cyclic byte queue between the data receiver and the frame parser."""

from __future__ import annotations

import threading
from typing import Iterator

DEFAULT_CAPACITY = 4096


class RingBuffer:
    """Fixed-size cyclic byte queue.

    Writes never block and never fail for lack of room: as with the
    receiving side of the link, data that outruns the reader overwrites
    bytes that were not read yet. Writing a whole ``capacity`` worth of
    bytes ahead of the reader makes the queue look empty.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if not isinstance(capacity, int) or capacity < 2:
            raise ValueError(f"capacity must be an integer of at least 2, got {capacity!r}")
        self.capacity = capacity
        self._buffer = bytearray(capacity)
        self._current = 0
        self._end = 0
        self._lock = threading.Lock()

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Append ``data`` at the write position, wrapping around; return its length."""
        view = memoryview(data).cast("B")
        size = len(view)
        with self._lock:
            written = 0
            end = self._end
            while written < size:
                chunk = min(size - written, self.capacity - end)
                self._buffer[end:end + chunk] = view[written:written + chunk]
                end = (end + chunk) % self.capacity
                written += chunk
            self._end = end
        return size

    def drain(self) -> Iterator[int]:
        """Yield queued bytes one by one, consuming them as they are yielded.

        Bytes written while the generator runs are yielded too.
        """
        while True:
            with self._lock:
                if self._current == self._end:
                    return
                value = self._buffer[self._current]
                self._current = (self._current + 1) % self.capacity
            yield value

    def clear(self) -> None:
        """Drop everything queued and rewind both positions to the start."""
        with self._lock:
            self._current = 0
            self._end = 0

    def __len__(self) -> int:
        with self._lock:
            return (self._end - self._current) % self.capacity

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"RingBuffer(capacity={self.capacity}, queued={len(self)})"