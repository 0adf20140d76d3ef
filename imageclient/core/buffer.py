from __future__ import annotations


class ResponseBuffer:
    """Receive buffer that doubles its capacity whenever the write cursor reaches the end.

    Responses are terminated by the server closing the connection, so their
    length is unknown up front; the initial capacity is only a sizing hint.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._data = bytearray(capacity)
        self._cursor = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._cursor

    def extend(self, chunk: bytes) -> None:
        end = self._cursor + len(chunk)
        while end > len(self._data):
            self._grow()
        self._data[self._cursor : end] = chunk
        self._cursor = end

    def getvalue(self) -> bytes:
        return bytes(self._data[: self._cursor])

    def _grow(self) -> None:
        self._data.extend(bytes(len(self._data)))
