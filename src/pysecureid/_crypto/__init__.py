"""Cryptographic primitives for token sealing."""

from __future__ import annotations

from pysecureid._crypto.aead import aead_decrypt, aead_encrypt

__all__ = [
    "aead_decrypt",
    "aead_encrypt",
]
