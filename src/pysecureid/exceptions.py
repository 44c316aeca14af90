"""Custom exception hierarchy for pysecureid."""

from __future__ import annotations


class SecureIdError(Exception):
    """Base exception for all pysecureid errors."""


class SecureIdConfigError(SecureIdError):
    """Invalid or missing key ring configuration."""


class KeyNotFound(SecureIdConfigError):
    """The configured primary key version has no matching key.

    Raised while issuing tokens. This signals deployment drift between
    ``primary_key_version`` and the provisioned keys and is never
    collapsed into a silent result.
    """

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Primary key version {version!r} not found in key ring")


class InvalidTokenRequest(SecureIdError, ValueError):
    """Arguments passed to ``generate`` cannot form a valid payload."""


class TokenRejected(SecureIdError):
    """Base for every reason a token fails to resolve.

    Subclasses only exist for diagnostics and tests.
    :meth:`pysecureid.TokenResolver.resolve` maps all of them to ``None``
    so callers cannot tell one failure from another.
    """

    reason = "rejected"


class DecodeError(TokenRejected):
    """Token is not a string, not URL-safe base64, or not a valid envelope."""

    reason = "malformed"


class UnknownKeyVersion(TokenRejected):
    """Envelope names a key version that is not in the key ring."""

    reason = "unknown_version"


class AuthenticationError(TokenRejected):
    """AEAD tag did not verify (wrong key or altered bytes)."""

    reason = "authentication"


class PayloadError(TokenRejected):
    """Decrypted payload does not match the expected structure."""

    reason = "payload"


class ModelMismatch(TokenRejected):
    """Token was issued for a different record type."""

    reason = "model"


class ScopeMismatch(TokenRejected):
    """Token was issued for a different scope."""

    reason = "scope"


class Expired(TokenRejected):
    """Token expiry is at or before the current time."""

    reason = "expired"
