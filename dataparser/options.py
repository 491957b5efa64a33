"""Runtime configuration for parsing and encoding."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace


class Endianness(enum.Enum):
    """Byte order used for multi-byte numeric values."""

    BIG = "big"
    LITTLE = "little"
    NATIVE = "native"

    @property
    def struct_prefix(self) -> str:
        """The struct module prefix for this byte order, with standard sizes."""
        return {"big": ">", "little": "<", "native": "="}[self.value]


@dataclass
class ParseOptions:
    """Options controlling how a parser or reader interprets bytes."""

    trim_null_strings: bool = False
    strict_encoding: bool = False
    endianness: Endianness = Endianness.BIG
    length_prefixed_fields: bool = False
    verbose_errors: bool = False
    key: bytes = b""
    iv: bytes = b""

    def with_trim_null_strings(self) -> ParseOptions:
        """Return a copy that trims trailing NUL characters from strings."""
        return replace(self, trim_null_strings=True)

    def with_strict_encoding(self) -> ParseOptions:
        """Return a copy that rejects invalid UTF-8/UTF-16 input."""
        return replace(self, strict_encoding=True)

    def with_verbose_errors(self) -> ParseOptions:
        """Return a copy with detailed error messages enabled."""
        return replace(self, verbose_errors=True)

    def with_length_prefixed_fields(self) -> ParseOptions:
        """Return a copy that expects every number to carry a u32 length prefix."""
        return replace(self, length_prefixed_fields=True)

    def with_endianness(self, endianness: Endianness) -> ParseOptions:
        """Return a copy using the given byte order."""
        return replace(self, endianness=endianness)

    def with_encryption(self, key: bytes, iv: bytes) -> ParseOptions:
        """Return a copy configured with an AES-256 key and IV."""
        return replace(self, key=bytes(key), iv=bytes(iv))


@dataclass
class EncodingOptions:
    """Options controlling how an encoder or writer produces bytes."""

    endianness: Endianness = Endianness.BIG
    prepend_data_size: bool = False
    key: bytes = b""
    iv: bytes = b""

    def with_prepended_data_size(self) -> EncodingOptions:
        """Return a copy that prefixes every written item with its u32 size."""
        return replace(self, prepend_data_size=True)

    def with_endianness(self, endianness: Endianness) -> EncodingOptions:
        """Return a copy using the given byte order."""
        return replace(self, endianness=endianness)

    def with_encryption(self, key: bytes, iv: bytes) -> EncodingOptions:
        """Return a copy configured with an AES-256 key and IV."""
        return replace(self, key=bytes(key), iv=bytes(iv))