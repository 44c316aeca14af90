"""Token issuance."""

from __future__ import annotations

import logging
from datetime import datetime

from pydantic import ValidationError

from pysecureid._crypto.aead import aead_encrypt
from pysecureid.envelope import encode_envelope
from pysecureid.exceptions import InvalidTokenRequest
from pysecureid.keyring import KeyRing, KeyRingSource, snapshot
from pysecureid.models.payload import InnerPayload, RecordId

_logger = logging.getLogger(__name__)


def version_aad(version: str) -> bytes:
    """Associated data binding the sealed payload to its envelope version."""
    return f"pysecureid:v={version}".encode()


class TokenGenerator:
    """Issue tokens under the primary key of a key ring.

    Parameters
    ----------
    keyring : KeyRing or KeyRingSource
        Ring to use, or a callable returning a fresh ring per call.
    """

    def __init__(self, keyring: KeyRing | KeyRingSource) -> None:
        self._keyring = keyring

    def generate(
        self,
        model_name: str,
        record_id: RecordId,
        scope: str,
        expires_at: datetime | None = None,
    ) -> str:
        """Seal *record_id* for *model_name* and *scope*.

        Parameters
        ----------
        model_name : str
            Record type tag, compared verbatim on resolution.
        record_id : int or str
            Identifier to wrap.
        scope : str
            Purpose the token may be used for.
        expires_at : datetime or None
            Optional absolute expiry. Naive values are treated as UTC.

        Returns
        -------
        str
            URL-safe token text.

        Raises
        ------
        KeyNotFound
            If the primary key version has no key.
        InvalidTokenRequest
            If the arguments do not form a valid payload.
        """
        try:
            payload = InnerPayload(
                model_name=model_name,
                record_id=record_id,
                scope=scope,
                expires_at=expires_at,
            )
        except ValidationError as exc:
            raise InvalidTokenRequest(f"cannot issue token: {exc.error_count()} invalid field(s)") from exc
        plaintext = payload.to_bytes()

        version, key = snapshot(self._keyring).primary_key()
        sealed = aead_encrypt(key, plaintext, version_aad(version))
        token = encode_envelope(version, sealed)
        _logger.debug(
            "Issued token model=%s scope=%s version=%s expiring=%s",
            model_name,
            scope,
            version,
            payload.expires_at is not None,
        )
        return token
