"""Email API key resolution.

The SendGrid key is configured either in plain text, or as an embedded
``"<iv-hex>:<ciphertext-hex>"`` pair (AES-256-CBC, PKCS7 padding) decrypted at
startup with a 32-byte secret held in the environment.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import KeyMaterialError

logger = logging.getLogger(__name__)

KEY_LENGTH = 32
IV_LENGTH = 16


def _secret_bytes(secret: str) -> bytes:
    key = secret.encode("utf-8")
    if len(key) != KEY_LENGTH:
        raise KeyMaterialError(
            f"Encryption key must be exactly {KEY_LENGTH} bytes, got {len(key)}"
        )
    return key


def encrypt_api_key(api_key: str, secret: str, iv: Optional[bytes] = None) -> str:
    """Return ``api_key`` in the ``iv:ciphertext`` hex form read by :func:`decrypt_api_key`."""
    key = _secret_bytes(secret)
    iv = iv or os.urandom(IV_LENGTH)
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    data = padder.update(api_key.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(data) + encryptor.finalize()
    return f"{iv.hex()}:{ciphertext.hex()}"


def decrypt_api_key(encrypted: str, secret: str) -> str:
    """Decrypt an ``iv:ciphertext`` hex pair with ``secret``.

    Raises :class:`KeyMaterialError` for a wrong-length secret, a malformed
    value, or a ciphertext that does not decrypt cleanly.
    """
    key = _secret_bytes(secret)
    try:
        iv_hex, ct_hex = encrypted.strip().split(":", 1)
        iv = bytes.fromhex(iv_hex)
        ciphertext = bytes.fromhex(ct_hex)
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except ValueError as e:
        # Covers bad hex, wrong IV size, misaligned ciphertext, bad padding and bad UTF-8.
        raise KeyMaterialError(f"Could not decrypt API key: {e}") from e


def resolve_api_key(
    plain: Optional[str],
    encrypted: Optional[str] = None,
    secret: Optional[str] = None,
) -> Optional[str]:
    """Return the usable API key, or None when email must stay disabled."""
    if plain:
        return plain
    if not encrypted:
        logger.warning("No email API key configured")
        return None
    if not secret:
        logger.error("Encrypted API key is set but ENCRYPTION_KEY is missing")
        return None
    try:
        return decrypt_api_key(encrypted, secret)
    except KeyMaterialError as e:
        logger.error("Email notifications disabled: %s", e)
        return None


__all__ = ["encrypt_api_key", "decrypt_api_key", "resolve_api_key"]
