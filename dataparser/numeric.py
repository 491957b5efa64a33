"""Fixed-width numeric conversion with configurable byte order."""

from __future__ import annotations

import enum
import struct

from .errors import InvalidConversionError, UnexpectedEOFError
from .options import Endianness


class NumberKind(enum.Enum):
    """Fixed-width numeric types with their struct format codes."""

    U8 = ("u8", "B")
    U16 = ("u16", "H")
    U32 = ("u32", "I")
    U64 = ("u64", "Q")
    USIZE = ("usize", "Q")
    I8 = ("i8", "b")
    I16 = ("i16", "h")
    I32 = ("i32", "i")
    I64 = ("i64", "q")
    ISIZE = ("isize", "q")
    F32 = ("f32", "f")
    F64 = ("f64", "d")

    def __init__(self, label: str, code: str) -> None:
        self.label = label
        self.code = code

    @property
    def size(self) -> int:
        """Width of the encoded value in bytes."""
        return struct.calcsize("<" + self.code)

    @property
    def is_float(self) -> bool:
        return self.code in ("f", "d")


def pack_number(kind: NumberKind, value: int | float, endianness: Endianness) -> bytes:
    """Encode ``value`` as ``kind`` in the given byte order."""
    try:
        return struct.pack(endianness.struct_prefix + kind.code, value)
    except (struct.error, OverflowError, TypeError) as exc:
        raise InvalidConversionError(f"cannot encode {value!r} as {kind.label}: {exc}") from exc


def unpack_number(kind: NumberKind, data: bytes, endianness: Endianness) -> int | float:
    """Decode exactly ``kind.size`` bytes as ``kind`` in the given byte order."""
    data = bytes(data)
    if len(data) < kind.size:
        raise UnexpectedEOFError()
    if len(data) > kind.size:
        raise InvalidConversionError(
            f"{kind.label} needs {kind.size} bytes, got {len(data)}"
        )
    (value,) = struct.unpack(endianness.struct_prefix + kind.code, data)
    return value