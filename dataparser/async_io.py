"""Asynchronous binary writer and a helper that builds a parser from an async reader."""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from .encoder import DataEncoder, Encodable
from .errors import ParseIOError
from .numeric import NumberKind, pack_number
from .options import EncodingOptions, Endianness, ParseOptions
from .parser import DataParser

AsyncEncodeFn = Callable[[Any, Any], Union[None, Awaitable[None]]]

_READ_CHUNK = 64 * 1024


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class _BytesSink:
    """In-memory write target used to build items in isolation."""

    def __init__(self) -> None:
        self.data = bytearray()

    def write(self, data: bytes) -> None:
        self.data += data


async def _encode_value(writer: AsyncDataWriter, value: Any) -> None:
    """Encode ``value`` with the default rules for its Python type.

    Encodable objects are built in a DataEncoder sharing the writer's options and
    their bytes are written as they are; ``bool`` is one byte, ``str`` is a
    length-prefixed UTF-8 string, ``list`` is a counted slice and ``tuple`` is a
    fixed-size array written item after item.
    """
    if isinstance(value, Encodable):
        temp = DataEncoder(writer.options)
        value.encode_data(temp)
        await writer._write_all(temp.data)
    elif isinstance(value, bool):
        await writer.add_bool(value)
    elif isinstance(value, str):
        await writer.add_string(value)
    elif isinstance(value, list):
        await writer.add_slice(value)
    elif isinstance(value, tuple):
        for item in value:
            await _encode_value(writer, item)
    else:
        raise TypeError(
            f"no default encoding for {type(value).__name__}; pass an encode function"
        )


class AsyncDataWriter:
    """Writes structured binary data to an asynchronous stream.

    The target needs a ``write`` method, which may be a coroutine function;
    if it also has ``drain`` (as asyncio.StreamWriter does) that is awaited
    after every write.
    """

    def __init__(self, writer: Any, options: Optional[EncodingOptions] = None) -> None:
        self.writer = writer
        self.options = options if options is not None else EncodingOptions()

    async def _write_all(self, data: bytes) -> None:
        try:
            await _maybe_await(self.writer.write(bytes(data)))
            drain = getattr(self.writer, "drain", None)
            if callable(drain):
                await _maybe_await(drain())
        except OSError as exc:
            raise ParseIOError(exc) from exc

    async def add_item(self, data: bytes) -> None:
        """Write raw bytes, preceded by a big-endian u32 size when size prefixing is on."""
        data = bytes(data)
        if self.options.prepend_data_size:
            await self._write_all(pack_number(NumberKind.U32, len(data), Endianness.BIG))
        await self._write_all(data)

    async def _add_num(self, kind: NumberKind, n: int | float) -> None:
        await self.add_item(pack_number(kind, n, self.options.endianness))

    async def add_u8(self, n: int) -> None:
        """Write ``n`` as u8."""
        await self._add_num(NumberKind.U8, n)

    async def add_u16(self, n: int) -> None:
        """Write ``n`` as u16 in the configured byte order."""
        await self._add_num(NumberKind.U16, n)

    async def add_u32(self, n: int) -> None:
        """Write ``n`` as u32 in the configured byte order."""
        await self._add_num(NumberKind.U32, n)

    async def add_u64(self, n: int) -> None:
        """Write ``n`` as u64 in the configured byte order."""
        await self._add_num(NumberKind.U64, n)

    async def add_usize(self, n: int) -> None:
        """Write ``n`` as usize in the configured byte order."""
        await self._add_num(NumberKind.USIZE, n)

    async def add_i8(self, n: int) -> None:
        """Write ``n`` as i8."""
        await self._add_num(NumberKind.I8, n)

    async def add_i16(self, n: int) -> None:
        """Write ``n`` as i16 in the configured byte order."""
        await self._add_num(NumberKind.I16, n)

    async def add_i32(self, n: int) -> None:
        """Write ``n`` as i32 in the configured byte order."""
        await self._add_num(NumberKind.I32, n)

    async def add_i64(self, n: int) -> None:
        """Write ``n`` as i64 in the configured byte order."""
        await self._add_num(NumberKind.I64, n)

    async def add_isize(self, n: int) -> None:
        """Write ``n`` as isize in the configured byte order."""
        await self._add_num(NumberKind.ISIZE, n)

    async def add_f32(self, n: float) -> None:
        """Write ``n`` as f32 in the configured byte order."""
        await self._add_num(NumberKind.F32, n)

    async def add_f64(self, n: float) -> None:
        """Write ``n`` as f64 in the configured byte order."""
        await self._add_num(NumberKind.F64, n)

    async def add_string(self, data: str) -> None:
        """Write a u32 byte length followed by the UTF-8 bytes of ``data``."""
        encoded = str(data).encode("utf-8")
        await self.add_u32(len(encoded))
        await self.add_item(encoded)

    async def add_bool(self, data: bool) -> None:
        """Write one byte: 1 for true, 0 for false."""
        await self.add_item(b"\x01" if data else b"\x00")

    async def add_slice(
        self, items: Iterable[Any], encode: Optional[AsyncEncodeFn] = None
    ) -> None:
        """Write a u32 count, then each item as a u32 length and its bytes.

        Each item is built by a temporary AsyncDataWriter over an in-memory
        buffer with these options; ``encode(writer, item)`` may be a plain or
        a coroutine function.
        """
        items = list(items)
        encode = encode or _encode_value
        await self.add_u32(len(items))
        for item in items:
            sink = _BytesSink()
            temp = AsyncDataWriter(sink, self.options)
            await _maybe_await(encode(temp, item))
            built = bytes(sink.data)
            await self.add_u32(len(built))
            await self.add_item(built)

    async def add_option(self, value: Any, encode: Optional[AsyncEncodeFn] = None) -> None:
        """Write a presence flag, then the value itself when it is not None."""
        if value is None:
            await self.add_bool(False)
            return
        await self.add_bool(True)
        await _maybe_await((encode or _encode_value)(self, value))

    async def add_between(
        self,
        start: bytes,
        end: bytes,
        build: Callable[[AsyncDataWriter], Union[None, Awaitable[None]]],
    ) -> None:
        """Write ``start``, let ``build`` write the body, then write ``end``."""
        await self.add_item(start)
        await _maybe_await(build(self))
        await self.add_item(end)


async def parser_from_async_reader(
    reader: Any, options: Optional[ParseOptions] = None
) -> DataParser:
    """Read ``reader`` to its end and return a DataParser over the bytes."""
    buf = bytearray()
    try:
        while True:
            chunk = await _maybe_await(reader.read(_READ_CHUNK))
            if not chunk:
                break
            buf += chunk
    except OSError as exc:
        raise ParseIOError(exc) from exc
    return DataParser(bytes(buf), options)