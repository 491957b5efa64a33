"""AES-256-CBC encryption with PKCS7 padding."""

from __future__ import annotations

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import CryptoError

_KEY_SIZE = 32
_BLOCK_SIZE = 16


def _cipher(key: bytes, iv: bytes) -> Cipher:
    if len(key) != _KEY_SIZE:
        raise CryptoError(f"invalid key length {len(key)}, expected {_KEY_SIZE}")
    if len(iv) != _BLOCK_SIZE:
        raise CryptoError(f"invalid IV length {len(iv)}, expected {_BLOCK_SIZE}")
    return Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv)))


def aes_encrypt(data: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt ``data`` with a 32-byte key and 16-byte IV."""
    cipher = _cipher(key, iv)
    padder = padding.PKCS7(_BLOCK_SIZE * 8).padder()
    padded = padder.update(bytes(data)) + padder.finalize()
    encryptor = cipher.encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def aes_decrypt(data: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt ``data`` with a 32-byte key and 16-byte IV and strip the padding."""
    cipher = _cipher(key, iv)
    data = bytes(data)
    if not data or len(data) % _BLOCK_SIZE:
        raise CryptoError("ciphertext length is not a positive multiple of the block size")
    decryptor = cipher.decryptor()
    padded = decryptor.update(data) + decryptor.finalize()
    unpadder = padding.PKCS7(_BLOCK_SIZE * 8).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise CryptoError("invalid padding") from exc