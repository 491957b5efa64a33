from dataparser.options import EncodingOptions, Endianness, ParseOptions


def test_parse_options_defaults():
    opts = ParseOptions()
    assert opts.endianness is Endianness.BIG
    assert not opts.trim_null_strings
    assert not opts.strict_encoding
    assert not opts.length_prefixed_fields
    assert not opts.verbose_errors
    assert opts.key == b"" and opts.iv == b""


def test_parse_options_builder_chain():
    opts = (
        ParseOptions()
        .with_strict_encoding()
        .with_trim_null_strings()
        .with_length_prefixed_fields()
        .with_verbose_errors()
    )
    assert opts.strict_encoding
    assert opts.trim_null_strings
    assert opts.length_prefixed_fields
    assert opts.verbose_errors


def test_parse_options_builder_leaves_original():
    base = ParseOptions()
    derived = base.with_strict_encoding().with_endianness(Endianness.LITTLE)
    assert not base.strict_encoding
    assert base.endianness is Endianness.BIG
    assert derived.endianness is Endianness.LITTLE


def test_parse_options_encryption():
    key = bytes(32)
    iv = bytes(16)
    opts = ParseOptions().with_encryption(key, iv)
    assert opts.key == key
    assert opts.iv == iv


def test_encoding_options_defaults_and_builders():
    base = EncodingOptions()
    assert base.endianness is Endianness.BIG
    assert not base.prepend_data_size
    opts = base.with_prepended_data_size().with_endianness(Endianness.LITTLE)
    assert opts.prepend_data_size
    assert opts.endianness is Endianness.LITTLE
    assert not base.prepend_data_size


def test_encoding_options_encryption():
    key = bytes(range(32))
    iv = bytes(range(16))
    opts = EncodingOptions().with_encryption(bytearray(key), iv)
    assert opts.key == key
    assert opts.iv == iv


def test_options_are_mutable_in_place():
    opts = ParseOptions()
    opts.trim_null_strings = True
    assert opts.with_strict_encoding().trim_null_strings


def test_struct_prefixes_via_options():
    assert ParseOptions().with_endianness(Endianness.BIG).endianness.struct_prefix == ">"
    assert EncodingOptions().with_endianness(Endianness.LITTLE).endianness.struct_prefix == "<"
    assert ParseOptions().with_endianness(Endianness.NATIVE).endianness.struct_prefix == "="


def test_option_equality():
    assert ParseOptions().with_verbose_errors() == ParseOptions(verbose_errors=True)
    assert EncodingOptions() == EncodingOptions()