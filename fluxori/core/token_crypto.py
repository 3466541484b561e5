"""
Refresh-token encryption.

AES-256-CBC with PKCS7 padding and a random IV per message. Ciphertext
is stored as "<iv hex>:<ciphertext hex>".

Dependencies: cryptography, fluxori.configs
System role: Protects vendor refresh tokens at rest
"""

import binascii
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from fluxori.configs import get_settings
from fluxori.core.exceptions import InvalidInputError

IV_LENGTH = 16
KEY_LENGTH = 32


def parse_key(raw_key: str) -> bytes:
    """
    Turn a configured key string into 32 key bytes.

    Args:
        raw_key: 64 hex characters, or a 32 character string used verbatim

    Returns:
        bytes: AES-256 key

    Raises:
        InvalidInputError: If the key has any other shape
    """
    if not raw_key:
        raise InvalidInputError("Encryption key is not configured", field="encryption_key")
    if len(raw_key) == KEY_LENGTH * 2:
        try:
            return bytes.fromhex(raw_key)
        except ValueError:
            pass
    encoded = raw_key.encode("utf-8")
    if len(encoded) == KEY_LENGTH:
        return encoded
    raise InvalidInputError(
        "Encryption key must be 64 hex characters or 32 bytes",
        field="encryption_key",
    )


class TokenCipher:
    """Symmetric cipher for short secrets such as OAuth refresh tokens."""

    def __init__(self, key: str | bytes) -> None:
        if isinstance(key, bytes):
            if len(key) != KEY_LENGTH:
                raise InvalidInputError(
                    "Encryption key must be 32 bytes", field="encryption_key"
                )
            self._key = key
        else:
            self._key = parse_key(key)

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a token.

        Args:
            plaintext: Non-empty secret

        Returns:
            str: "iv:ciphertext" in lowercase hex
        """
        if not plaintext:
            raise InvalidInputError("Cannot encrypt an empty token", field="plaintext")

        iv = os.urandom(IV_LENGTH)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return f"{iv.hex()}:{ciphertext.hex()}"

    def decrypt(self, token: str) -> str:
        """
        Decrypt a value produced by encrypt().

        Raises:
            InvalidInputError: If the value is malformed or was not produced with this key
        """
        iv_hex, sep, body_hex = (token or "").partition(":")
        if not sep or not iv_hex or not body_hex:
            raise InvalidInputError("Encrypted token is malformed", field="token")

        try:
            iv = binascii.unhexlify(iv_hex)
            ciphertext = binascii.unhexlify(body_hex)
        except (binascii.Error, ValueError) as e:
            raise InvalidInputError("Encrypted token is not valid hex", field="token") from e

        if len(iv) != IV_LENGTH or not ciphertext or len(ciphertext) % IV_LENGTH:
            raise InvalidInputError("Encrypted token has an invalid length", field="token")

        decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        try:
            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            data = unpadder.update(padded) + unpadder.finalize()
            return data.decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise InvalidInputError("Encrypted token could not be decrypted", field="token") from e


def build_token_cipher() -> TokenCipher:
    """Build a cipher from the configured FLUXORI_ENCRYPTION_KEY."""
    return TokenCipher(get_settings().security.encryption_key)
