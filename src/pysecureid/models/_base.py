"""Shared pieces for the token wire models.

Both wire models are frozen pydantic models with short wire aliases and
``populate_by_name`` so Python code can use descriptive attribute names.
"""

from __future__ import annotations

import base64
import binascii
import string
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

_STD_ALPHABET = frozenset(string.ascii_letters + string.digits + "+/")
_URLSAFE_ALPHABET = frozenset(string.ascii_letters + string.digits + "-_")


def parse_epoch_seconds(value: Any) -> datetime | None:
    """Coerce an epoch-seconds number (or a datetime) to an aware UTC datetime.

    Naive datetimes are taken to be UTC. Anything else raises
    :class:`ValueError` so pydantic reports a validation error.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"expected epoch seconds, got {type(value).__name__}")
    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"timestamp out of range: {value!r}") from exc


def to_epoch_seconds(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.timestamp())


EpochTimestamp = Annotated[
    datetime | None,
    BeforeValidator(parse_epoch_seconds),
    PlainSerializer(to_epoch_seconds, return_type=int | None),
]
"""UTC datetime carried on the wire as integer Unix seconds."""


def b64encode_text(data: bytes, *, urlsafe: bool = False) -> str:
    """Base64 text: standard alphabet padded, or URL-safe alphabet unpadded."""
    if urlsafe:
        return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
    return base64.b64encode(data).decode("ascii")


def b64decode_canonical(text: str, *, urlsafe: bool = False) -> bytes:
    """Strict inverse of :func:`b64encode_text`.

    Only the exact output of :func:`b64encode_text` is accepted: no foreign
    characters, no whitespace, the expected padding, and zero unused
    trailing bits. Two different strings therefore never decode to the
    same bytes.

    Raises
    ------
    ValueError
        If *text* is not the canonical encoding of some byte string.
    """
    body = text if urlsafe else text.rstrip("=")
    alphabet = _URLSAFE_ALPHABET if urlsafe else _STD_ALPHABET
    if not body or not set(body) <= alphabet or len(body) % 4 == 1:
        raise ValueError("invalid base64 text")
    padded = body + "=" * (-len(body) % 4)
    try:
        if urlsafe:
            data = base64.urlsafe_b64decode(padded)
        else:
            data = base64.b64decode(padded, validate=True)
    except binascii.Error as exc:
        raise ValueError("invalid base64 text") from exc
    if b64encode_text(data, urlsafe=urlsafe) != text:
        raise ValueError("non-canonical base64 text")
    return data


def to_b64_text(value: bytes) -> str:
    return b64encode_text(value)


def parse_b64_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected base64 text, got {type(value).__name__}")
    return b64decode_canonical(value)


Base64Blob = Annotated[
    bytes,
    BeforeValidator(parse_b64_bytes),
    PlainSerializer(to_b64_text, return_type=str),
]
"""Raw bytes carried on the wire as standard, padded base64 text."""
