"""Streaming binary writer over any object with a ``write`` method."""

from __future__ import annotations

from typing import Any, BinaryIO, Callable, Iterable, Optional

from .encoder import DataEncoder, EncodeFn, _encode_value
from .errors import ParseIOError
from .numeric import NumberKind, pack_number
from .options import Endianness, EncodingOptions


class DataWriter:
    """Writes structured binary data straight to a stream."""

    def __init__(self, stream: BinaryIO, options: Optional[EncodingOptions] = None) -> None:
        self.stream = stream
        self.options = options if options is not None else EncodingOptions()

    def __enter__(self) -> DataWriter:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is None:
            self.flush()

    def _write_all(self, data: bytes) -> None:
        view = memoryview(data)
        try:
            while view:
                written = self.stream.write(bytes(view))
                if written is None:
                    written = len(view)
                if written == 0:
                    raise ParseIOError("failed to write whole buffer")
                view = view[written:]
        except OSError as exc:
            raise ParseIOError(exc) from exc

    def flush(self) -> None:
        """Flush the underlying stream."""
        try:
            self.stream.flush()
        except OSError as exc:
            raise ParseIOError(exc) from exc

    def add_item(self, data: bytes) -> None:
        """Write raw bytes, preceded by a big-endian u32 size when size prefixing is on."""
        data = bytes(data)
        if self.options.prepend_data_size:
            self._write_all(pack_number(NumberKind.U32, len(data), Endianness.BIG))
        self._write_all(data)

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

        Each item is built in a DataEncoder sharing these options, so
        ``encode(encoder, item)`` receives that encoder.
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

    def add_between(
        self, start: bytes, end: bytes, build: Callable[[DataWriter], None]
    ) -> None:
        """Write ``start``, let ``build`` write the body, then write ``end``."""
        self.add_item(start)
        build(self)
        self.add_item(end)