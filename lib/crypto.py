# =============================================================================
# lib/crypto.py - API Key Encryption at Rest
# =============================================================================
# Symmetric encryption for third-party API keys stored in user_api_keys.
#
# Stored format (three colon-separated hex fields):
#
#     <nonce: 16 bytes> ":" <auth tag: 16 bytes> ":" <ciphertext>
#
# - Cipher: AES-256-GCM, no associated data
# - Key: scrypt(ENCRYPTION_KEY, salt=b"salt", n=2**14, r=8, p=1), 32 bytes,
#   derived once per passphrase and cached for the process lifetime
# - Decryption fails closed: any malformed record or tag mismatch raises
#   CipherError, never returns partial plaintext
#
# Usage:
#   from lib.crypto import encrypt_secret, decrypt_secret
#   stored = encrypt_secret("sk-live-...")
#   plaintext = decrypt_secret(stored)
# =============================================================================

from __future__ import annotations

import logging
import os
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

NONCE_SIZE = 16
TAG_SIZE = 16
KEY_SIZE = 32

# Fixed salt and scrypt cost parameters; changing any of them makes every
# previously stored key unreadable.
KDF_SALT = b"salt"
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1

FIELD_SEPARATOR = ":"


class CipherError(ApplicationError):
    """Raised when a stored secret cannot be encrypted or decrypted."""

    def __init__(self, message: str, code: str = "CIPHER_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


@lru_cache(maxsize=4)
def derive_key(passphrase: str) -> bytes:
    """
    Derive the 32-byte AES key from a passphrase.

    scrypt is deliberately slow, so results are cached per passphrase.
    """
    kdf = Scrypt(
        salt=KDF_SALT,
        length=KEY_SIZE,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
    )
    key = kdf.derive(passphrase.encode("utf-8"))
    logger.debug("Derived API key encryption key")
    return key


def reset_key_cache() -> None:
    """Forget all derived keys."""
    derive_key.cache_clear()


def _default_passphrase() -> str:
    from app.config import settings

    return settings.ENCRYPTION_KEY


def encrypt_secret(plaintext: str, passphrase: str | None = None) -> str:
    """
    Encrypt a secret into the nonce:tag:ciphertext hex format.

    A fresh random nonce is drawn on every call, so encrypting the same
    plaintext twice yields different records.

    Args:
        plaintext: The secret to protect (e.g. a provider API key)
        passphrase: Override for ENCRYPTION_KEY (mainly for tests)

    Returns:
        The stored representation
    """
    key = derive_key(passphrase if passphrase is not None else _default_passphrase())
    nonce = os.urandom(NONCE_SIZE)

    # AESGCM appends the tag to the ciphertext
    sealed = AESGCM(key).encrypt(nonce, plaintext.encode("utf-8"), None)
    ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]

    return FIELD_SEPARATOR.join((nonce.hex(), tag.hex(), ciphertext.hex()))


def decrypt_secret(stored: str, passphrase: str | None = None) -> str:
    """
    Decrypt a record produced by encrypt_secret().

    Args:
        stored: The nonce:tag:ciphertext record
        passphrase: Override for ENCRYPTION_KEY (mainly for tests)

    Returns:
        The decrypted plaintext

    Raises:
        CipherError: If the record is malformed or fails authentication
    """
    parts = stored.split(FIELD_SEPARATOR) if isinstance(stored, str) else []
    if len(parts) != 3:
        raise CipherError(
            "Invalid encrypted API key format",
            code="INVALID_FORMAT",
            suggestion="Stored keys must be three colon-separated hex fields",
        )

    try:
        nonce, tag, ciphertext = (bytes.fromhex(part) for part in parts)
    except ValueError:
        raise CipherError(
            "Encrypted API key contains non-hex data",
            code="INVALID_FORMAT",
        )

    if len(nonce) != NONCE_SIZE or len(tag) != TAG_SIZE:
        raise CipherError(
            f"Encrypted API key has wrong nonce/tag length ({len(nonce)}/{len(tag)})",
            code="INVALID_FORMAT",
        )

    key = derive_key(passphrase if passphrase is not None else _default_passphrase())

    try:
        plaintext = AESGCM(key).decrypt(nonce, ciphertext + tag, None)
    except InvalidTag:
        raise CipherError(
            "Encrypted API key failed authentication",
            code="AUTHENTICATION_FAILED",
            suggestion="Check that ENCRYPTION_KEY matches the key used when the secret was stored",
        )

    return plaintext.decode("utf-8")
