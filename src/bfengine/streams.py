from __future__ import annotations

import io
from typing import Any, Optional, Protocol, Union


class ByteReader(Protocol):
    def read(self, size: int = -1) -> bytes: ...


class ByteWriter(Protocol):
    def write(self, data: bytes) -> Any: ...


InputLike = Union[ByteReader, bytes, bytearray, str, None]


class _NullWriter:
    def write(self, data: bytes) -> int:
        return len(data)

    def flush(self) -> None:
        pass


class _EncodingReader:
    """UTF-8 byte view of a text stream with no binary buffer, such as io.StringIO."""

    def __init__(self, text: Any, encoding: str = 'utf-8'):
        self._text = text
        self._encoding = encoding
        self._pending = b''

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            data = self._pending + self._text.read().encode(self._encoding)
            self._pending = b''
            return data
        while len(self._pending) < size:
            chunk = self._text.read(1)
            if not chunk:
                break
            self._pending += chunk.encode(self._encoding)
        data, self._pending = self._pending[:size], self._pending[size:]
        return data


def as_reader(source: InputLike) -> ByteReader:
    """Turn bytes, text, a text stream or a binary stream into a byte reader.

    ``None`` gives a reader that is always at end-of-data.
    """
    if source is None:
        return io.BytesIO(b'')
    if isinstance(source, str):
        return io.BytesIO(source.encode('utf-8'))
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    if isinstance(source, io.TextIOBase):
        # sys.stdin and other text wrappers expose the raw bytes on .buffer
        buffer = getattr(source, 'buffer', None)
        if buffer is not None:
            return buffer
        return _EncodingReader(source)
    return source


def as_writer(sink: Optional[ByteWriter]) -> ByteWriter:
    if sink is None:
        return _NullWriter()
    buffer = getattr(sink, 'buffer', None)
    if buffer is not None and isinstance(sink, io.TextIOBase):
        # text layer may hold data written before the switch to bytes
        sink.flush()
        return buffer
    return sink


def flush(sink: ByteWriter) -> None:
    fn = getattr(sink, 'flush', None)
    if fn is not None:
        fn()
