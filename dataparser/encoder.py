"""In-memory binary encoder producing a contiguous byte buffer."""

from __future__ import annotations

import abc
from typing import Any, Callable, Iterable, Optional

from .crypto import aes_decrypt, aes_encrypt
from .numeric import NumberKind, pack_number
from .options import EncodingOptions

EncodeFn = Callable[[Any, Any], None]


class Encodable(abc.ABC):
    """A value that knows how to write its own binary representation."""

    @abc.abstractmethod
    def encode_data(self, encoder: Any) -> None:
        """Write this value through ``encoder`` (a DataEncoder or DataWriter)."""


def _encode_value(target: Any, value: Any) -> None:
    """Encode ``value`` with the default rules for its Python type.

    Encodable objects encode themselves, ``bool`` is one byte, ``str`` is a
    length-prefixed UTF-8 string, ``list`` is a counted slice of length-prefixed
    items and ``tuple`` is a fixed-size array written item after item.
    Plain numbers have no single width, so they need an explicit encode function.
    """
    if isinstance(value, Encodable):
        value.encode_data(target)
    elif isinstance(value, bool):
        target.add_bool(value)
    elif isinstance(value, str):
        target.add_string(value)
    elif isinstance(value, list):
        target.add_slice(value)
    elif isinstance(value, tuple):
        for item in value:
            _encode_value(target, item)
    else:
        raise TypeError(
            f"no default encoding for {type(value).__name__}; pass an encode function"
        )


class DataEncoder:
    """Serialises primitives and composite values into an internal buffer."""

    def __init__(self, options: Optional[EncodingOptions] = None) -> None:
        self.options = options if options is not None else EncodingOptions()
        self._buffer = bytearray()

    @property
    def data(self) -> bytes:
        """The bytes written so far."""
        return bytes(self._buffer)

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self._buffer)

    def add_item(self, data: bytes) -> None:
        """Append raw bytes, preceded by a u32 size when size prefixing is on."""
        data = bytes(data)
        if self.options.prepend_data_size:
            self._buffer += pack_number(NumberKind.U32, len(data), self.options.endianness)
        self._buffer += data

    def _add_num(self, kind: NumberKind, n: int | float) -> None:
        self.add_item(pack_number(kind, n, self.options.endianness))

    def add_u8(self, n: int) -> None:
        """Write ``n`` as u8."""
        self._add_num(NumberKind.U8, n)

    def add_u16(self, n: int) -> None:
        """Write ``n`` as u16 in the configured byte order."""
        self._add_num(NumberKind.U16, n)

    def add_u32(self, n: int) -> None:
        """Write ``n`` as u32 in the configured byte order."""
        self._add_num(NumberKind.U32, n)

    def add_u64(self, n: int) -> None:
        """Write ``n`` as u64 in the configured byte order."""
        self._add_num(NumberKind.U64, n)

    def add_usize(self, n: int) -> None:
        """Write ``n`` as usize in the configured byte order."""
        self._add_num(NumberKind.USIZE, n)

    def add_i8(self, n: int) -> None:
        """Write ``n`` as i8."""
        self._add_num(NumberKind.I8, n)

    def add_i16(self, n: int) -> None:
        """Write ``n`` as i16 in the configured byte order."""
        self._add_num(NumberKind.I16, n)

    def add_i32(self, n: int) -> None:
        """Write ``n`` as i32 in the configured byte order."""
        self._add_num(NumberKind.I32, n)

    def add_i64(self, n: int) -> None:
        """Write ``n`` as i64 in the configured byte order."""
        self._add_num(NumberKind.I64, n)

    def add_isize(self, n: int) -> None:
        """Write ``n`` as isize in the configured byte order."""
        self._add_num(NumberKind.ISIZE, n)

    def add_f32(self, n: float) -> None:
        """Write ``n`` as f32 in the configured byte order."""
        self._add_num(NumberKind.F32, n)

    def add_f64(self, n: float) -> None:
        """Write ``n`` as f64 in the configured byte order."""
        self._add_num(NumberKind.F64, n)

    def add_string(self, data: str) -> None:
        """Write a u32 byte length followed by the UTF-8 bytes of ``data``."""
        encoded = str(data).encode("utf-8")
        self.add_u32(len(encoded))
        self.add_item(encoded)

    def add_bool(self, data: bool) -> None:
        """Write one byte: 1 for true, 0 for false."""
        self.add_item(b"\x01" if data else b"\x00")

    def add_slice(self, items: Iterable[Any], encode: Optional[EncodeFn] = None) -> None:
        """Write a u32 count, then each item as a u32 length and its bytes.

        Each item is encoded in isolation by a fresh encoder sharing these
        options; ``encode(encoder, item)`` does the work, or the default rules
        for the item's type when ``encode`` is not given.
        """
        items = list(items)
        encode = encode or _encode_value
        self.add_u32(len(items))
        for item in items:
            temp = DataEncoder(self.options)
            encode(temp, item)
            built = temp.data
            self.add_u32(len(built))
            self.add_item(built)

    def add_option(self, value: Any, encode: Optional[EncodeFn] = None) -> None:
        """Write a presence flag, then the value itself when it is not None."""
        if value is None:
            self.add_bool(False)
            return
        self.add_bool(True)
        (encode or _encode_value)(self, value)

    def encrypt(self) -> None:
        """Replace the buffer with its AES-256-CBC encryption."""
        self._buffer = bytearray(
            aes_encrypt(bytes(self._buffer), self.options.key, self.options.iv)
        )

    def decrypt(self) -> None:
        """Replace the buffer with its AES-256-CBC decryption."""
        self._buffer = bytearray(
            aes_decrypt(bytes(self._buffer), self.options.key, self.options.iv)
        )