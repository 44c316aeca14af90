"""AES-256-GCM authenticated encryption for token payloads.

The 96-bit nonce is drawn from ``os.urandom`` on every call and prepended
to the output, so a sealed blob is self-contained::

    nonce (12 bytes) || ciphertext || tag (16 bytes)
"""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from pysecureid._constants import KEY_SIZE, NONCE_SIZE, TAG_SIZE
from pysecureid.exceptions import AuthenticationError, SecureIdConfigError


def _check_key(key: bytes) -> None:
    if not isinstance(key, bytes) or len(key) != KEY_SIZE:
        raise SecureIdConfigError(f"AEAD key must be {KEY_SIZE} bytes")


def aead_encrypt(key: bytes, plaintext: bytes, associated_data: bytes | None = None) -> bytes:
    """Encrypt *plaintext* under *key* with a fresh random nonce.

    Parameters
    ----------
    key : bytes
        32-byte AES key.
    plaintext : bytes
        Data to seal.
    associated_data : bytes or None
        Authenticated but unencrypted context (the key version).

    Returns
    -------
    bytes
        ``nonce || ciphertext || tag``.
    """
    _check_key(key)
    nonce = os.urandom(NONCE_SIZE)
    return nonce + AESGCM(key).encrypt(nonce, plaintext, associated_data)


def aead_decrypt(key: bytes, sealed: bytes, associated_data: bytes | None = None) -> bytes:
    """Open a blob produced by :func:`aead_encrypt`.

    Raises
    ------
    AuthenticationError
        If the blob is too short or the tag does not verify (wrong key,
        wrong associated data, or any altered byte).
    """
    _check_key(key)
    if len(sealed) < NONCE_SIZE + TAG_SIZE:
        raise AuthenticationError(f"sealed blob too short ({len(sealed)} bytes)")
    nonce, body = sealed[:NONCE_SIZE], sealed[NONCE_SIZE:]
    try:
        return AESGCM(key).decrypt(nonce, body, associated_data)
    except InvalidTag as exc:
        raise AuthenticationError("AEAD tag verification failed") from exc
