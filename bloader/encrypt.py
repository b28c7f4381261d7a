"""AES encryption with a random IV and the encrypters built from configuration."""

from __future__ import annotations

import base64
import binascii
import secrets
from collections.abc import Iterable
from enum import StrEnum
from typing import Protocol

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from bloader.config.encrypt import EncryptRespectiveConfig, EncryptType

BLOCK_SIZE = 16
DYNAMIC_KEY_SIZE = 32


class CipherMode(StrEnum):
    CBC = "CBC"
    CFB = "CFB"
    CTR = "CTR"


class EncryptionError(Exception):
    """Encrypting or decrypting failed."""


class ObjectStore(Protocol):
    """The part of a store that dynamic encrypters keep their keys in."""

    def get_object(self, bucket_id: str, key: str) -> bytes | None:
        """Return the stored value, or an empty value when there is none."""

    def put_object(self, bucket_id: str, key: str, value: bytes) -> None:
        """Store ``value`` under ``key`` in the bucket."""


_MODE_FACTORIES = {
    CipherMode.CBC: modes.CBC,
    CipherMode.CFB: modes.CFB,
    CipherMode.CTR: modes.CTR,
}


def pkcs7_pad(data: bytes, block_size: int) -> bytes:
    """Pad ``data`` to a multiple of ``block_size``; a full block is added when aligned."""
    if not 0 < block_size < 256:
        raise ValueError(f"block size must be between 1 and 255, got {block_size}")
    padding = block_size - len(data) % block_size
    return bytes(data) + bytes([padding]) * padding


def pkcs7_unpad(data: bytes) -> bytes:
    """Remove the padding that the last byte announces."""
    if not data:
        raise EncryptionError("cannot remove padding from empty data")
    padding = data[-1]
    if padding > len(data):
        raise EncryptionError("invalid padding length")
    return bytes(data[: len(data) - padding])


def _mode(mode: str, action: str) -> CipherMode:
    try:
        return CipherMode(mode)
    except ValueError as exc:
        raise EncryptionError(f"unsupported {action} method: {mode}") from exc


def _cipher(key: bytes, mode: CipherMode, iv: bytes) -> Cipher:
    try:
        algorithm = algorithms.AES(bytes(key))
    except ValueError as exc:
        raise EncryptionError(f"failed to create cipher block: {exc}") from exc
    return Cipher(algorithm, _MODE_FACTORIES[mode](iv))


def encrypt(plaintext: bytes | str, key: bytes, mode: str) -> str:
    """Encrypt ``plaintext`` and return base64 of the IV followed by the ciphertext."""
    cipher_mode = _mode(mode, "encryption")
    data = plaintext.encode() if isinstance(plaintext, str) else bytes(plaintext)
    iv = secrets.token_bytes(BLOCK_SIZE)
    encryptor = _cipher(key, cipher_mode, iv).encryptor()
    if cipher_mode is CipherMode.CBC:
        data = pkcs7_pad(data, BLOCK_SIZE)
    ciphertext = encryptor.update(data) + encryptor.finalize()
    return base64.b64encode(iv + ciphertext).decode("ascii")


def decrypt(ciphertext_b64: str, key: bytes, mode: str) -> bytes:
    """Decrypt base64 text made by :func:`encrypt` with the same key and mode."""
    try:
        combined = base64.b64decode(ciphertext_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncryptionError(f"failed to decode base64 ciphertext: {exc}") from exc
    cipher_mode = _mode(mode, "decryption")
    if len(combined) < BLOCK_SIZE:
        raise EncryptionError("invalid ciphertext length")
    iv, ciphertext = combined[:BLOCK_SIZE], combined[BLOCK_SIZE:]
    decryptor = _cipher(key, cipher_mode, iv).decryptor()
    if cipher_mode is CipherMode.CBC:
        if len(ciphertext) % BLOCK_SIZE:
            raise EncryptionError("ciphertext is not a multiple of the block size")
        return pkcs7_unpad(decryptor.update(ciphertext) + decryptor.finalize())
    return decryptor.update(ciphertext) + decryptor.finalize()


class StaticEncrypter:
    """Encrypter with a key fixed in the configuration."""

    def __init__(self, key: bytes, mode: str) -> None:
        self._key = bytes(key)
        self._mode = _mode(mode, "encryption")

    def encrypt(self, plaintext: bytes | str) -> str:
        """Encrypt to base64 text."""
        return encrypt(plaintext, self._key, self._mode)

    def decrypt(self, ciphertext_b64: str) -> bytes:
        """Decrypt base64 text."""
        return decrypt(ciphertext_b64, self._key, self._mode)


class DynamicEncrypter:
    """Encrypter whose key lives in a store and is generated on first use."""

    def __init__(self, store: ObjectStore, bucket_id: str, store_key: str, mode: str) -> None:
        self._mode = _mode(mode, "encryption")
        try:
            key = store.get_object(bucket_id, store_key)
        except Exception as exc:
            raise EncryptionError(f"failed to get key from store: {exc}") from exc
        if not key:
            key = secrets.token_bytes(DYNAMIC_KEY_SIZE)
            try:
                store.put_object(bucket_id, store_key, key)
            except Exception as exc:
                raise EncryptionError(f"failed to store key: {exc}") from exc
        self._key = bytes(key)

    def encrypt(self, plaintext: bytes | str) -> str:
        """Encrypt to base64 text."""
        return encrypt(plaintext, self._key, self._mode)

    def decrypt(self, ciphertext_b64: str) -> bytes:
        """Decrypt base64 text."""
        return decrypt(ciphertext_b64, self._key, self._mode)


_STATIC_MODES = {
    EncryptType.STATIC_CBC: CipherMode.CBC,
    EncryptType.STATIC_CFB: CipherMode.CFB,
    EncryptType.STATIC_CTR: CipherMode.CTR,
}
_DYNAMIC_MODES = {
    EncryptType.DYNAMIC_CBC: CipherMode.CBC,
    EncryptType.DYNAMIC_CFB: CipherMode.CFB,
    EncryptType.DYNAMIC_CTR: CipherMode.CTR,
}


def build_encrypters(
    store: ObjectStore | None, configs: Iterable[EncryptRespectiveConfig]
) -> dict[str, StaticEncrypter | DynamicEncrypter]:
    """Create one encrypter per configured id."""
    encrypters: dict[str, StaticEncrypter | DynamicEncrypter] = {}
    for config in configs:
        if config.type in _STATIC_MODES:
            encrypters[config.id] = StaticEncrypter(config.key, _STATIC_MODES[config.type])
            continue
        if store is None or config.store is None:
            raise EncryptionError(f"encrypter {config.id!r} needs a store for its key")
        encrypters[config.id] = DynamicEncrypter(
            store, config.store.bucket_id, config.store.key, _DYNAMIC_MODES[config.type]
        )
    return encrypters