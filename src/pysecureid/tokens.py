"""Function-style shortcuts for one-off issuing and resolving."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pysecureid.generator import TokenGenerator
from pysecureid.keyring import KeyRing, KeyRingSource
from pysecureid.models.payload import RecordId
from pysecureid.resolver import Clock, TokenResolver


def generate(
    keyring: KeyRing | KeyRingSource,
    model_name: str,
    record_id: RecordId,
    scope: str,
    expires_at: datetime | None = None,
) -> str:
    """See :meth:`TokenGenerator.generate`."""
    return TokenGenerator(keyring).generate(model_name, record_id, scope, expires_at)


def resolve(
    keyring: KeyRing | KeyRingSource,
    token: Any,
    expected_model_name: str,
    expected_scope: str,
    *,
    clock: Clock | None = None,
) -> RecordId | None:
    """See :meth:`TokenResolver.resolve`."""
    return TokenResolver(keyring, clock=clock).resolve(token, expected_model_name, expected_scope)
