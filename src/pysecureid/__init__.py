"""pysecureid - URL-safe, scoped, expiring tokens for internal record identifiers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysecureid")
except PackageNotFoundError:
    __version__ = "0+local"
from pysecureid.binding import SecureIdBinding
from pysecureid.config import KeyRingConfig
from pysecureid.exceptions import (
    AuthenticationError,
    DecodeError,
    Expired,
    InvalidTokenRequest,
    KeyNotFound,
    ModelMismatch,
    PayloadError,
    ScopeMismatch,
    SecureIdConfigError,
    SecureIdError,
    TokenRejected,
    UnknownKeyVersion,
)
from pysecureid.generator import TokenGenerator
from pysecureid.keyring import KeyRing, KeyRingSource, env_key_ring_source
from pysecureid.models import InnerPayload, OuterEnvelope, RecordId
from pysecureid.resolver import TokenResolver
from pysecureid.tokens import generate, resolve

__all__ = [
    "__version__",
    "AuthenticationError",
    "DecodeError",
    "Expired",
    "InnerPayload",
    "InvalidTokenRequest",
    "KeyNotFound",
    "KeyRing",
    "KeyRingConfig",
    "KeyRingSource",
    "ModelMismatch",
    "OuterEnvelope",
    "PayloadError",
    "RecordId",
    "ScopeMismatch",
    "SecureIdBinding",
    "SecureIdConfigError",
    "SecureIdError",
    "TokenGenerator",
    "TokenRejected",
    "TokenResolver",
    "UnknownKeyVersion",
    "env_key_ring_source",
    "generate",
    "resolve",
]
