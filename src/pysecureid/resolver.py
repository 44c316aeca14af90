"""Token resolution.

Every way a token can be wrong (malformed, unknown key version, altered,
issued for another model or scope, expired) ends in the same ``None``
result from :meth:`TokenResolver.resolve`. Reasons are only ever visible in
DEBUG logs on the server side.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from pysecureid._crypto.aead import aead_decrypt
from pysecureid._redact import redact_token
from pysecureid.envelope import decode_envelope
from pysecureid.exceptions import (
    Expired,
    ModelMismatch,
    PayloadError,
    ScopeMismatch,
    TokenRejected,
    UnknownKeyVersion,
)
from pysecureid.generator import version_aad
from pysecureid.keyring import KeyRing, KeyRingSource, snapshot
from pysecureid.models.payload import InnerPayload, RecordId

_logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenResolver:
    """Recover identifiers from tokens issued by :class:`TokenGenerator`.

    Parameters
    ----------
    keyring : KeyRing or KeyRingSource
        Ring holding the current and retired keys, or a callable returning
        a fresh ring per call.
    clock : callable or None
        Returns the current time. Defaults to ``datetime.now(UTC)``.
        Naive results are treated as UTC.
    """

    def __init__(self, keyring: KeyRing | KeyRingSource, clock: Clock | None = None) -> None:
        self._keyring = keyring
        self._clock = clock or utc_now

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            return now.replace(tzinfo=UTC)
        return now

    def unseal(self, token: Any) -> InnerPayload:
        """Decode, decrypt and parse *token* without checking model or scope.

        Raises
        ------
        TokenRejected
            One of its subclasses, naming the first check that failed.
        """
        version, sealed = decode_envelope(token)

        key = snapshot(self._keyring).key_for_version(version)
        if key is None:
            raise UnknownKeyVersion(f"key version {version!r} is not retained")

        plaintext = aead_decrypt(key, sealed, version_aad(version))
        try:
            return InnerPayload.from_bytes(plaintext)
        except ValidationError as exc:
            raise PayloadError(f"payload does not validate ({exc.error_count()} errors)") from exc

    def verify(self, token: Any, expected_model_name: str, expected_scope: str) -> RecordId:
        """Like :meth:`resolve`, but raises the specific rejection.

        Intended for diagnostics and tests. Do not surface the exception
        type to untrusted callers.
        """
        payload = self.unseal(token)
        if payload.model_name != expected_model_name:
            raise ModelMismatch(f"token model {payload.model_name!r} != {expected_model_name!r}")
        if payload.scope != expected_scope:
            raise ScopeMismatch("token scope does not match")
        if payload.is_expired(self._now()):
            raise Expired(f"token expired at {payload.expires_at.isoformat()}")
        return payload.record_id

    def resolve(self, token: Any, expected_model_name: str, expected_scope: str) -> RecordId | None:
        """Return the wrapped identifier, or ``None`` for any invalid token.

        Never raises for bad token input: malformed, tampered, unknown-version,
        wrong-model, wrong-scope and expired tokens are indistinguishable.
        """
        try:
            return self.verify(token, expected_model_name, expected_scope)
        except TokenRejected as exc:
            _logger.debug(
                "Token rejected reason=%s model=%s token=%s",
                exc.reason,
                expected_model_name,
                redact_token(token),
            )
            return None
