import pytest

from dataparser.crypto import aes_decrypt, aes_encrypt
from dataparser.errors import CryptoError

KEY = bytes(range(32))
IV = bytes(16)


@pytest.mark.parametrize("plaintext", [b"", b"Hello, world!", bytes(16), bytes(range(100))])
def test_round_trip(plaintext):
    ciphertext = aes_encrypt(plaintext, KEY, IV)
    assert len(ciphertext) % 16 == 0
    assert len(ciphertext) > len(plaintext)
    assert aes_decrypt(ciphertext, KEY, IV) == plaintext


def test_full_block_gets_extra_padding_block():
    assert len(aes_encrypt(bytes(16), KEY, IV)) == 32


def test_empty_input_is_one_block():
    assert len(aes_encrypt(b"", KEY, IV)) == 16


def test_ciphertext_hides_plaintext():
    plaintext = b"Hello, world!!!!"
    ciphertext = aes_encrypt(plaintext, KEY, IV)
    assert len(ciphertext) == 32
    assert plaintext not in ciphertext
    assert aes_decrypt(ciphertext, KEY, IV) == plaintext


def test_iv_changes_ciphertext():
    other_iv = bytes([1] * 16)
    assert aes_encrypt(b"Hello", KEY, IV) != aes_encrypt(b"Hello", KEY, other_iv)


@pytest.mark.parametrize("bad_key", [b"", bytes(16), bytes(31), bytes(33)])
def test_wrong_key_length_raises(bad_key):
    with pytest.raises(CryptoError):
        aes_encrypt(b"data", bad_key, IV)
    with pytest.raises(CryptoError):
        aes_decrypt(bytes(16), bad_key, IV)


def test_wrong_iv_length_raises():
    with pytest.raises(CryptoError):
        aes_encrypt(b"data", KEY, bytes(8))


@pytest.mark.parametrize("bad", [b"", bytes(15), bytes(17)])
def test_decrypt_bad_length_raises(bad):
    with pytest.raises(CryptoError):
        aes_decrypt(bad, KEY, IV)


def test_decrypt_corrupted_padding_raises():
    ciphertext = aes_encrypt(b"Hello, world!", KEY, IV)
    # Flipping a byte of the IV-chained block flips the last plaintext byte (padding).
    tampered_iv = IV[:15] + bytes([IV[15] ^ 0x10])
    with pytest.raises(CryptoError):
        aes_decrypt(ciphertext, KEY, tampered_iv)