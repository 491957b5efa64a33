"""Streaming binary reader over any object with a ``read`` method."""

from __future__ import annotations

import abc
import copy
import io
from typing import Any, BinaryIO, Callable, List, Optional, TypeVar

from .errors import ParseIOError
from .numeric import NumberKind, unpack_number
from .options import ParseOptions

T = TypeVar("T")
StreamDecodeFn = Callable[["DataReader"], Any]


class StreamDecodable(abc.ABC):
    """A type that knows how to build itself from a DataReader."""

    @classmethod
    @abc.abstractmethod
    def from_stream_parser(cls, reader: DataReader) -> Any:
        """Read and return an instance from ``reader``."""


def _resolve_decoder(decode: Any) -> StreamDecodeFn:
    """Turn a StreamDecodable subclass, ``bool``, a NumberKind or a callable into a decoder."""
    if isinstance(decode, type) and issubclass(decode, StreamDecodable):
        return decode.from_stream_parser
    if decode is bool:
        return lambda r: r.get_bool()
    if isinstance(decode, NumberKind):
        return lambda r: r._get_number(decode)
    if callable(decode):
        return decode
    raise TypeError(f"cannot decode with {decode!r}")


class DataReader:
    """Reads structured binary values from a stream such as a file or socket."""

    def __init__(self, stream: BinaryIO, options: Optional[ParseOptions] = None) -> None:
        self.stream = stream
        self.options = options if options is not None else ParseOptions()

    def _read_exact(self, n: int) -> bytes:
        buf = bytearray()
        try:
            while len(buf) < n:
                chunk = self.stream.read(n - len(buf))
                if not chunk:
                    raise ParseIOError("failed to fill whole buffer")
                buf += chunk
        except OSError as exc:
            raise ParseIOError(exc) from exc
        return bytes(buf)

    def get_bytes(self, n: int) -> bytes:
        """Read exactly ``n`` bytes from the stream."""
        return self._read_exact(n)

    def get_byte(self) -> int:
        """Read a single byte."""
        return self._read_exact(1)[0]

    def get_bool(self) -> bool:
        """Read a byte; any non-zero value is true."""
        return self.get_byte() != 0

    def _read_number(self, kind: NumberKind) -> Any:
        return unpack_number(kind, self._read_exact(kind.size), self.options.endianness)

    def _get_number(self, kind: NumberKind) -> Any:
        if self.options.length_prefixed_fields:
            return self._parse_with_length_prefix(lambda r: r._read_number(kind))
        return self._read_number(kind)

    def _parse_with_length_prefix(self, f: Callable[[DataReader], T]) -> T:
        """Read a u32 length, then run ``f`` on a sub-reader over that many bytes."""
        options = copy.copy(self.options)
        length = self._read_number(NumberKind.U32)
        sub = DataReader(io.BytesIO(self.get_bytes(length)), options)
        return f(sub)

    def get_u8(self) -> int:
        """Read a u8."""
        return self._get_number(NumberKind.U8)

    def get_u16(self) -> int:
        """Read a u16 in the configured byte order."""
        return self._get_number(NumberKind.U16)

    def get_u32(self) -> int:
        """Read a u32 in the configured byte order."""
        return self._get_number(NumberKind.U32)

    def get_u64(self) -> int:
        """Read a u64 in the configured byte order."""
        return self._get_number(NumberKind.U64)

    def get_usize(self) -> int:
        """Read a usize in the configured byte order."""
        return self._get_number(NumberKind.USIZE)

    def get_i8(self) -> int:
        """Read an i8."""
        return self._get_number(NumberKind.I8)

    def get_i16(self) -> int:
        """Read an i16 in the configured byte order."""
        return self._get_number(NumberKind.I16)

    def get_i32(self) -> int:
        """Read an i32 in the configured byte order."""
        return self._get_number(NumberKind.I32)

    def get_i64(self) -> int:
        """Read an i64 in the configured byte order."""
        return self._get_number(NumberKind.I64)

    def get_isize(self) -> int:
        """Read an isize in the configured byte order."""
        return self._get_number(NumberKind.ISIZE)

    def get_f32(self) -> float:
        """Read an f32 in the configured byte order."""
        return self._get_number(NumberKind.F32)

    def get_f64(self) -> float:
        """Read an f64 in the configured byte order."""
        return self._get_number(NumberKind.F64)

    def get_vector(self, decode: Any) -> List[Any]:
        """Read a u32 count, then each item from its own u32-length sub-buffer."""
        decoder = _resolve_decoder(decode)
        count = self.get_u32()
        out = []
        for _ in range(count):
            item_len = self.get_u32()
            item_bytes = self.get_bytes(item_len)
            sub = DataReader(io.BytesIO(item_bytes), copy.copy(self.options))
            out.append(decoder(sub))
        return out

    def get_option(self, decode: Any) -> Any:
        """Read a presence flag, then the value when the flag is set; else None."""
        decoder = _resolve_decoder(decode)
        if self.get_bool():
            return decoder(self)
        return None