"""In-memory binary parser reading structured values from a byte buffer."""

from __future__ import annotations

import abc
import copy
import sys
from typing import Any, Callable, List, Optional, TypeVar

from .crypto import aes_decrypt, aes_encrypt
from .errors import DataParseError, InvalidConversionError, UnexpectedEOFError
from .numeric import NumberKind, unpack_number
from .options import ParseOptions

T = TypeVar("T")
DecodeFn = Callable[["DataParser"], Any]

_NATIVE_UTF16 = "utf-16-le" if sys.byteorder == "little" else "utf-16-be"


class Decodable(abc.ABC):
    """A type that knows how to build itself from a parser."""

    @classmethod
    @abc.abstractmethod
    def from_parser(cls, parser: DataParser) -> Any:
        """Read and return an instance from ``parser``."""


def _resolve_decoder(decode: Any) -> DecodeFn:
    """Turn a Decodable subclass, ``str``, ``bool``, a NumberKind or a callable into a decoder."""
    if isinstance(decode, type) and issubclass(decode, Decodable):
        return decode.from_parser
    if decode is str:
        return lambda p: p.get_string(False)
    if decode is bool:
        return lambda p: p.get_bool()
    if isinstance(decode, NumberKind):
        return lambda p: p._get_number(decode)
    if callable(decode):
        return decode
    raise TypeError(f"cannot decode with {decode!r}")


class DataParser:
    """Reads values from a byte buffer, advancing an internal cursor."""

    def __init__(self, buffer: bytes = b"", options: Optional[ParseOptions] = None) -> None:
        self._buffer = bytes(buffer)
        self._cursor = 0
        self.options = options if options is not None else ParseOptions()

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def cursor(self) -> int:
        """Current read position."""
        return self._cursor

    @property
    def remaining(self) -> int:
        """Number of bytes left after the cursor."""
        return max(len(self._buffer) - self._cursor, 0)

    @property
    def data(self) -> bytes:
        """The whole underlying buffer."""
        return self._buffer

    def take(self, n: int) -> bytes:
        """Consume and return the next ``n`` bytes."""
        if self.remaining < n:
            if self.options.verbose_errors:
                left = list(self._buffer[self._cursor:])
                print(
                    f"Failed to take {n} bytes at offset {self._cursor} — "
                    f"only {self.remaining} bytes left: {left}",
                    file=sys.stderr,
                )
                raise DataParseError(
                    f"Not enough bytes at offset {self._cursor} "
                    f"(needed {n}, have {self.remaining})"
                )
            raise UnexpectedEOFError()
        start = self._cursor
        self._cursor += n
        return self._buffer[start:self._cursor]

    def peek(self, n: int) -> bytes:
        """Return the first ``n`` bytes of the buffer without moving the cursor.

        Fails when fewer than ``n`` bytes remain after the cursor.
        """
        if self.remaining < n:
            raise UnexpectedEOFError()
        return self._buffer[:n]

    def get_bytes(self, n: int) -> bytes:
        """Read the next ``n`` bytes."""
        if self.remaining < n:
            raise UnexpectedEOFError()
        return self.take(n)

    def get_byte(self) -> int:
        """Read a single byte."""
        return self.take(1)[0]

    def get_bool(self) -> bool:
        """Read a byte; any non-zero value is true."""
        return self.get_byte() != 0

    def _read_number(self, kind: NumberKind) -> Any:
        return unpack_number(kind, self.take(kind.size), self.options.endianness)

    def _get_number(self, kind: NumberKind) -> Any:
        if self.options.length_prefixed_fields:
            return self._parse_with_length_prefix(lambda p: p._read_number(kind))
        return self._read_number(kind)

    def _parse_with_length_prefix(self, f: Callable[[DataParser], T]) -> T:
        """Read a u32 length, then run ``f`` on a sub-parser over that many bytes."""
        options = copy.copy(self.options)
        length = self._read_number(NumberKind.U32)
        sub = DataParser(self.take(length), options)
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
            out.append(decoder(DataParser(item_bytes, copy.copy(self.options))))
        return out

    def get_option(self, decode: Any) -> Any:
        """Read a presence flag, then the value when the flag is set; else None."""
        decoder = _resolve_decoder(decode)
        if self.get_bool():
            return decoder(self)
        return None

    def get_raw(self, signed: bool) -> int:
        """Read one byte as a signed (i8) or unsigned (u8) integer."""
        byte = self.take(1)[0]
        if signed and byte >= 0x80:
            return byte - 0x100
        return byte

    def _decode_text(self, raw: bytes, codec: str) -> str:
        errors = "strict" if self.options.strict_encoding else "replace"
        try:
            text = raw.decode(codec, errors)
        except UnicodeDecodeError as exc:
            raise InvalidConversionError(str(exc)) from exc
        if self.options.trim_null_strings:
            text = text.rstrip("\0")
        return text

    def _get_string(self, length: int, utf16: bool) -> str:
        raw = self.take(length)
        if utf16:
            if len(raw) % 2:
                raise InvalidConversionError("UTF-16 input length must be even")
            return self._decode_text(raw, _NATIVE_UTF16)
        return self._decode_text(raw, "utf-8")

    def _get_string_raw(self, utf16: bool) -> str:
        """Read a NUL-terminated string up to the terminator or the end of input."""
        if utf16:
            units = bytearray()
            while self.remaining >= 2:
                pair = self.take(2)
                if pair == b"\x00\x00":
                    break
                units += pair
            text = bytes(units).decode(_NATIVE_UTF16, "replace")
            if self.options.trim_null_strings:
                text = text.rstrip("\0")
            return text
        collected = bytearray()
        while self.remaining > 0:
            byte = self.get_byte()
            if byte == 0:
                break
            collected.append(byte)
        errors = "strict" if self.options.strict_encoding else "replace"
        try:
            return bytes(collected).decode("utf-8", errors)
        except UnicodeDecodeError as exc:
            raise InvalidConversionError(str(exc)) from exc

    def get_string(self, utf16: bool = False) -> str:
        """Read a u32 byte length followed by a UTF-8 or native-order UTF-16 string."""
        length = self.get_u32()
        return self._get_string(length, utf16)

    def parse_with(self, parser: Callable[[DataParser], T]) -> T:
        """Apply a function-style parser to this parser."""
        return parser(self)

    def parse_until(
        self, terminator: Callable[[int], bool], max_len: Optional[int] = None
    ) -> bytes:
        """Collect bytes until ``terminator`` matches one (consumed, not returned) or input ends."""
        collected = bytearray()
        while self.remaining > 0:
            if max_len is not None and len(collected) >= max_len:
                raise DataParseError("parse_until exceeded max_len")
            byte = self.get_byte()
            if terminator(byte):
                break
            collected.append(byte)
        return bytes(collected)

    def encrypt(self) -> None:
        """Replace the buffer with its AES-256-CBC encryption; the cursor is kept."""
        self._buffer = aes_encrypt(self._buffer, self.options.key, self.options.iv)

    def decrypt(self) -> None:
        """Replace the buffer with its AES-256-CBC decryption; the cursor is kept."""
        self._buffer = aes_decrypt(self._buffer, self.options.key, self.options.iv)