# dataparser

A small library for reading and writing structured binary data.

It offers:

- fixed-width numbers (`u8`, `u16`, `u32`, `u64`, `usize`, `i8`, `i16`,
  `i32`, `i64`, `isize`, `f32`, `f64`; `usize` and `isize` are 8 bytes) in
  big-, little- or native-endian byte order;
- length-prefixed strings, booleans, optional values and counted sequences
  of length-prefixed items;
- parsing from an in-memory buffer (`dataparser.parser.DataParser`) or from
  a binary stream (`dataparser.reader.DataReader`);
- encoding into memory (`dataparser.encoder.DataEncoder`), into a stream
  (`dataparser.writer.DataWriter`) or into an asynchronous writer
  (`dataparser.async_io.AsyncDataWriter`);
- parser combinators in `dataparser.combinators`: `delim_extract`,
  `map_parser` and `parse_between`;
- AES-256-CBC encryption with PKCS7 padding of a whole encoder or parser
  buffer.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Wire format

Numbers are big-endian unless the options say otherwise. A string is a `u32`
byte length followed by its UTF-8 bytes. A boolean is one byte, `0x01` or
`0x00`; when reading, any non-zero byte is true. An optional value is a
boolean flag followed by the value when present. A sequence is a `u32` item
count, and then for every item a `u32` length followed by that item's own
encoding.

The value `123` as `i32`, the string `"Hello, world!"` and the `u8`
sequence `[1, 2, 3]` encode to:

```
0 0 0 123 | 0 0 0 13 H e l l o , ␠ w o r l d ! | 0 0 0 3 | 0 0 0 1 1 | 0 0 0 1 2 | 0 0 0 1 3
```

## Encoding into memory

```python
from dataparser.encoder import DataEncoder

encoder = DataEncoder()
encoder.add_i32(123)
encoder.add_string("Hello, world!")
encoder.add_slice([1, 2, 3], lambda enc, item: enc.add_u8(item))
print(list(encoder.data))
```

`encoder.data` (or `bytes(encoder)`) returns what has been written so far,
and `len(encoder)` its size.

`add_slice(items, encode)` and `add_option(value, encode)` take an optional
function `encode(encoder, item)`. Without it, items are encoded by their
Python type: an `Encodable` subclass calls its own `encode_data(encoder)`,
`bool` is one byte, `str` a length-prefixed string, `list` a nested
sequence and `tuple` its items one after another with no count. Plain
numbers have no single width, so they always need an `encode` function;
otherwise `TypeError` is raised. `add_option(None)` writes only the `0x00`
flag.

```python
from dataparser.encoder import DataEncoder, Encodable

class Header(Encodable):
    def __init__(self, ident, flag):
        self.ident = ident
        self.flag = flag

    def encode_data(self, encoder):
        encoder.add_u32(self.ident)
        encoder.add_bool(self.flag)

encoder = DataEncoder()
Header(42, True).encode_data(encoder)
assert encoder.data == b"\x00\x00\x00\x2a\x01"
```

A value that does not fit the chosen width raises `InvalidConversionError`.

## Writing to a stream

```python
import io

from dataparser.writer import DataWriter

stream = io.BytesIO()
with DataWriter(stream) as writer:
    writer.add_i32(123)
    writer.add_string("Hello, world!")
    writer.add_bool(True)

print(list(stream.getvalue()))
```

`DataWriter` has the same `add_*` methods as `DataEncoder`, plus `flush()`
(also called when a `with` block ends without an error) and
`add_between(start, end, build)`, which writes `start`, calls `build(writer)`
and then writes `end`. Items of `add_slice` are built in a `DataEncoder`
with the writer's options, so the `encode` function receives that encoder.

## Writing asynchronously

`AsyncDataWriter(writer, options)` wraps any object with a `write` method,
which may be a plain or a coroutine function; when the object also has
`drain` (as `asyncio.StreamWriter` does) it is awaited after every write.
Every `add_*` method, `add_slice`, `add_option` and `add_between` is a
coroutine, and the `encode` and `build` callbacks may be plain or
coroutine functions. `add_slice` builds each item with a temporary
`AsyncDataWriter` over an in-memory buffer. By default, an `Encodable`
value is encoded in a `DataEncoder` with the writer's options and its bytes
are written as they are.

`parser_from_async_reader(reader, options)` reads an object with a `read`
method (plain or coroutine) to its end and returns a `DataParser` over the
bytes.

```python
import asyncio
import io

from dataparser.async_io import AsyncDataWriter, parser_from_async_reader

async def main():
    sink = io.BytesIO()
    writer = AsyncDataWriter(sink)
    await writer.add_u16(7)
    await writer.add_string("hi")
    parser = await parser_from_async_reader(io.BytesIO(sink.getvalue()))
    print(parser.get_u16(), parser.get_string(False))

asyncio.run(main())
```

## Parsing a buffer

```python
from dataparser.numeric import NumberKind
from dataparser.parser import DataParser

data = bytes([
    0, 0, 0, 123,
    0, 0, 0, 13, *b"Hello, world!",
    0, 0, 0, 3, 0, 0, 0, 1, 1, 0, 0, 0, 1, 2, 0, 0, 0, 1, 3,
])
parser = DataParser(data)
number = parser.get_i32()                # 123
text = parser.get_string(False)          # "Hello, world!"
values = parser.get_vector(NumberKind.U8)  # [1, 2, 3]
```

`DataParser` has a `get_*` method for every number type, and also:

- `take(n)` and `get_bytes(n)` return the next `n` bytes; `get_byte()` one
  byte as an `int`; `get_bool()` a boolean;
- `get_raw(signed)` reads one byte as an `i8` or a `u8`;
- `peek(n)` returns the first `n` bytes of the whole buffer without moving
  the cursor, and fails when fewer than `n` bytes remain after the cursor;
- `get_string(utf16)` reads a `u32` byte length and then UTF-8 text, or
  UTF-16 in the machine's native byte order when `utf16` is true (the
  length must then be even);
- `get_vector(decode)` and `get_option(decode)`, where `decode` is a
  `Decodable` subclass (its `from_parser(parser)` class method is called),
  `str`, `bool`, a `NumberKind` member or any function taking the parser;
  each vector item is decoded from its own sub-parser;
- `parse_with(fn)` calls `fn(parser)`; `parse_until(terminator, max_len)`
  collects bytes until `terminator(byte)` is true (that byte is consumed
  but not returned) or the input ends, raising `DataParseError` once
  `max_len` bytes have been collected without a match;
- `cursor`, `remaining`, `data` and `len(parser)`.

### Combinators

```python
from dataparser.combinators import delim_extract, map_parser, parse_between
from dataparser.parser import DataParser

parser = DataParser(b"\xde\xad(\x00\x05)")
delim_extract(b"\xde\xad")(parser)                              # b"\xde\xad"
doubled = map_parser(lambda p: p.get_u16(), lambda n: n * 2)
parse_between(doubled, ord("("), ord(")"))(parser)              # 10
```

A mismatched tag or delimiter raises `DataParseError`.

## Reading from a stream

`DataReader(stream, options)` reads from any object with a binary `read`
method. It offers `get_bytes`, `get_byte`, `get_bool`, every numeric
`get_*` method, and `get_vector(decode)` / `get_option(decode)`, where
`decode` is a `StreamDecodable` subclass (its `from_stream_parser(reader)`
class method is called), `bool`, a `NumberKind` member or a function taking
the reader.

## Numbers

`dataparser.numeric` exposes the conversions used throughout:
`pack_number(kind, value, endianness)` and
`unpack_number(kind, data, endianness)`, with `NumberKind` members `U8`,
`U16`, `U32`, `U64`, `USIZE`, `I8`, `I16`, `I32`, `I64`, `ISIZE`, `F32` and
`F64`. Each member has `label`, `size` and `is_float`.

## Options

Parsing is configured with `ParseOptions` (a dataclass); each `with_*`
method returns a modified copy:

```python
from dataparser.options import Endianness, ParseOptions

options = (
    ParseOptions()
    .with_strict_encoding()       # invalid UTF-8/UTF-16 raises instead of being replaced
    .with_trim_null_strings()     # trailing NUL characters are stripped from strings
    .with_verbose_errors()        # detailed messages for short reads
    .with_endianness(Endianness.LITTLE)
)
```

`with_length_prefixed_fields()` makes every number, including the length
of a string or the count of a sequence, be read from its own
`u32`-length-prefixed block. `Endianness` has `BIG` (the default),
`LITTLE` and `NATIVE`.

With verbose errors, a short read in `DataParser.take` prints the offset
and the remaining bytes to standard error and raises `DataParseError` with
the offset and counts; without them it raises `UnexpectedEOFError`.

Encoding is configured with `EncodingOptions`: `with_prepended_data_size()`
writes a `u32` length before every item written (numbers, string bodies,
flags and so on), and `with_endianness(...)` picks the byte order. In
`DataEncoder` that length prefix follows the chosen byte order; in
`DataWriter` and `AsyncDataWriter` it is always big-endian.

## Encryption

Both option classes have `with_encryption(key, iv)`, taking a 32-byte key
and a 16-byte IV. `DataEncoder.encrypt()` / `decrypt()` and
`DataParser.encrypt()` / `decrypt()` then replace the whole buffer with its
AES-256-CBC transformation, using PKCS7 padding; a parser's cursor is left
where it was. The underlying functions are `aes_encrypt(data, key, iv)` and
`aes_decrypt(data, key, iv)` in `dataparser.crypto`.

```python
import os

from dataparser.encoder import DataEncoder
from dataparser.options import EncodingOptions

encoder = DataEncoder(EncodingOptions().with_encryption(os.urandom(32), os.urandom(16)))
encoder.add_string("hidden")
encoder.encrypt()
```

## Errors

Failures raise `DataParseError` or a subclass from `dataparser.errors`:

- `UnexpectedEOFError` when a buffer runs out;
- `InvalidConversionError` for text that fails strict decoding, odd-length
  UTF-16 input and numbers that do not fit their type;
- `ParseIOError` when a stream fails, including a `DataReader` stream that
  ends before the requested bytes arrive;
- `CryptoError` for a wrong key or IV length, a ciphertext that is not a
  whole number of blocks, or bad padding.

## What it does not do

`DataReader` has no string reader and no encryption; read a length with
`get_u32()` and the bytes with `get_bytes()` instead. Only `DataEncoder`
and `DataParser` can encrypt. There is no command-line tool; the package
is a library only.