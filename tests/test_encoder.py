import struct

import pytest

from dataparser.encoder import DataEncoder, Encodable
from dataparser.errors import CryptoError, InvalidConversionError
from dataparser.numeric import NumberKind, unpack_number
from dataparser.options import EncodingOptions, Endianness


class Header(Encodable):
    def __init__(self, ident, flag):
        self.ident = ident
        self.flag = flag

    def encode_data(self, encoder):
        encoder.add_u32(self.ident)
        encoder.add_bool(self.flag)


def split_items(data):
    """Split a counted slice of length-prefixed items into their payloads."""
    count = int.from_bytes(data[:4], "big")
    pos = 4
    out = []
    for _ in range(count):
        size = int.from_bytes(data[pos:pos + 4], "big")
        pos += 4
        out.append(data[pos:pos + size])
        pos += size
    return out, pos


def test_basic_encoding_example():
    enc = DataEncoder()
    enc.add_i32(123)
    enc.add_string("Hello, world!")
    enc.add_slice([0x01, 0x02, 0x03], DataEncoder.add_u8)
    assert list(enc.data) == [
        0, 0, 0, 123, 0, 0, 0, 13, 72, 101, 108, 108, 111, 44, 32, 119, 111, 114, 108,
        100, 33, 0, 0, 0, 3, 0, 0, 0, 1, 1, 0, 0, 0, 1, 2, 0, 0, 0, 1, 3,
    ]


def test_encodable_header():
    enc = DataEncoder()
    Header(42, True).encode_data(enc)
    assert enc.data == bytes([0x00, 0x00, 0x00, 0x2A, 0x01])


def test_encodable_is_abstract():
    with pytest.raises(TypeError):
        Encodable()


def test_bools():
    enc = DataEncoder()
    enc.add_bool(True)
    enc.add_bool(False)
    assert enc.data == b"\x01\x00"


def test_little_endian_round_trip():
    enc = DataEncoder(EncodingOptions().with_endianness(Endianness.LITTLE))
    enc.add_u32(0x12345678)
    assert int.from_bytes(enc.data, "little") == 0x12345678


def test_float_round_trip():
    enc = DataEncoder()
    enc.add_f64(1.5)
    assert unpack_number(NumberKind.F64, enc.data, Endianness.BIG) == 1.5
    assert len(enc) == 8


def test_signed_round_trip():
    enc = DataEncoder()
    enc.add_i16(-2)
    assert struct.unpack(">h", enc.data)[0] == -2


def test_prepend_data_size():
    enc = DataEncoder(EncodingOptions().with_prepended_data_size())
    enc.add_u16(5)
    data = enc.data
    assert int.from_bytes(data[:4], "big") == 2
    assert int.from_bytes(data[4:], "big") == 5


def test_string_layout():
    text = "héllo"
    enc = DataEncoder()
    enc.add_string(text)
    data = enc.data
    assert int.from_bytes(data[:4], "big") == len(text.encode("utf-8"))
    assert data[4:].decode("utf-8") == text


def test_option_none_and_some():
    enc = DataEncoder()
    enc.add_option(None, DataEncoder.add_u8)
    assert enc.data == b"\x00"
    enc2 = DataEncoder()
    enc2.add_option(7, DataEncoder.add_u8)
    assert enc2.data[0] == 1
    assert enc2.data[1:] == bytes([7])


def test_slice_of_strings_default_dispatch():
    enc = DataEncoder()
    enc.add_slice(["ab", "cde"])
    items, end = split_items(enc.data)
    assert end == len(enc.data)
    assert [item[4:].decode() for item in items] == ["ab", "cde"]


def test_slice_of_encodables():
    enc = DataEncoder()
    enc.add_slice([Header(1, False), Header(2, True)])
    items, _ = split_items(enc.data)
    single = DataEncoder()
    Header(2, True).encode_data(single)
    assert items[1] == single.data


def test_nested_list():
    enc = DataEncoder()
    enc.add_slice([["x"], []])
    items, _ = split_items(enc.data)
    inner, _ = split_items(items[0])
    assert inner[0][4:] == b"x"
    assert split_items(items[1])[0] == []


def test_tuple_has_no_length_prefix():
    enc = DataEncoder()
    enc.add_option((True, False))
    assert enc.data == b"\x01\x01\x00"


def test_int_without_encode_fn_rejected():
    with pytest.raises(TypeError):
        DataEncoder().add_slice([1, 2])


def test_overflow_rejected():
    with pytest.raises(InvalidConversionError):
        DataEncoder().add_u8(256)


def test_encrypt_decrypt_round_trip():
    options = EncodingOptions().with_encryption(bytes(range(32)), bytes(16))
    enc = DataEncoder(options)
    enc.add_string("some payload")
    plain = enc.data
    enc.encrypt()
    assert len(enc.data) % 16 == 0
    assert enc.data[: len(plain)] != plain
    enc.decrypt()
    assert enc.data == plain


def test_encrypt_without_key_fails():
    enc = DataEncoder()
    enc.add_u8(1)
    with pytest.raises(CryptoError):
        enc.encrypt()


def test_decrypt_plaintext_fails():
    enc = DataEncoder(EncodingOptions().with_encryption(bytes(range(32)), bytes(16)))
    enc.add_u8(1)
    with pytest.raises(CryptoError):
        enc.decrypt()