"""Envelope codec: ``(key version, sealed bytes)`` <-> URL-safe token text.

Token layout::

    base64url_nopad( {"v": "<version>", "d": "<base64(nonce || ct || tag)>"} )
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from pysecureid.exceptions import DecodeError
from pysecureid.models._base import b64decode_canonical, b64encode_text
from pysecureid.models.envelope import OuterEnvelope


def encode_envelope(version: str, ciphertext: bytes) -> str:
    """Serialize *version* and *ciphertext* into a token string.

    Parameters
    ----------
    version : str
        Key version that sealed *ciphertext*.
    ciphertext : bytes
        AEAD output.

    Returns
    -------
    str
        URL-safe, padding-free token text.
    """
    envelope = OuterEnvelope(version=version, ciphertext=ciphertext)
    return b64encode_text(envelope.model_dump_json(by_alias=True).encode("utf-8"), urlsafe=True)


def decode_envelope(token: Any) -> tuple[str, bytes]:
    """Inverse of :func:`encode_envelope`.

    Raises
    ------
    DecodeError
        If *token* is not a string, not canonical URL-safe base64, not a
        JSON object, or lacks a valid ``v``/``d`` pair.
    """
    if not isinstance(token, str):
        raise DecodeError(f"token must be str, got {type(token).__name__}")
    if not token:
        raise DecodeError("token is empty")
    try:
        raw = b64decode_canonical(token, urlsafe=True).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError("envelope is not UTF-8") from exc
    except ValueError as exc:
        raise DecodeError("token is not URL-safe base64") from exc
    try:
        envelope = OuterEnvelope.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"invalid envelope ({exc.error_count()} errors)") from exc
    return envelope.version, envelope.ciphertext
