"""Versioned symmetric key ring.

A :class:`KeyRing` is an immutable snapshot of the keys currently retained
plus the version used to issue new tokens. Generators and resolvers take
either a ring or a zero-argument *source* returning a fresh ring; a source
is called exactly once per operation so configuration changes are picked up
by the next call and never half-way through one.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType

from pysecureid._redact import redact_for_log
from pysecureid.config import KeyRingConfig, parse_key
from pysecureid.exceptions import KeyNotFound, SecureIdConfigError

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class KeyRing:
    """Mapping of key version to 32-byte key, with a primary version.

    Parameters
    ----------
    primary_version : str
        Version used by :meth:`primary_key`. It is *not* required to be
        present in ``keys`` at construction time; the mismatch is reported
        as :class:`KeyNotFound` when a primary key is actually requested.
    keys : Mapping[str, bytes]
        Key per version. Key text is accepted and decoded with
        :func:`pysecureid.config.parse_key`.
    """

    primary_version: str
    keys: Mapping[str, bytes] = dataclasses.field(default_factory=dict, repr=False, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.primary_version, str) or not self.primary_version:
            raise SecureIdConfigError("primary_version must be a non-empty string")
        checked: dict[str, bytes] = {}
        for version, key in self.keys.items():
            if not isinstance(version, str) or not version:
                raise SecureIdConfigError(f"key version must be a non-empty string (got {version!r})")
            checked[version] = parse_key(key, name=f"key {version!r}")
        object.__setattr__(self, "keys", MappingProxyType(checked))

    @classmethod
    def from_config(cls, config: KeyRingConfig) -> KeyRing:
        """Build a ring from configuration, decoding every key."""
        keys = {str(version): value for version, value in config.keys.items()}
        return cls(primary_version=str(config.primary_key_version), keys=keys)

    @classmethod
    def from_mapping(cls, primary_version: str, keys: Mapping[str, str | bytes]) -> KeyRing:
        """Shortcut for ``from_config(KeyRingConfig(primary_version, keys))``."""
        return cls.from_config(KeyRingConfig(primary_key_version=primary_version, keys=keys))

    @property
    def versions(self) -> tuple[str, ...]:
        """Retained key versions, sorted."""
        return tuple(sorted(self.keys))

    def primary_key(self) -> tuple[str, bytes]:
        """Return ``(primary_version, key)``.

        Raises
        ------
        KeyNotFound
            If no key is stored under the primary version.
        """
        key = self.keys.get(self.primary_version)
        if key is None:
            _logger.error(
                "Primary key version %s missing; ring=%s",
                self.primary_version,
                redact_for_log(self.describe()),
            )
            raise KeyNotFound(self.primary_version)
        return self.primary_version, key

    def describe(self) -> dict[str, object]:
        """Descriptor in the ``KeyRingConfig.from_mapping`` shape.

        Holds raw key bytes; pass it through ``redact_for_log`` before logging.
        """
        return {
            "primary_key_version": self.primary_version,
            "versions": list(self.versions),
            "keys": dict(self.keys),
        }

    def key_for_version(self, version: str) -> bytes | None:
        """Key stored under *version*, or ``None`` when it is not retained."""
        return self.keys.get(version)

    # ------------------------------------------------------------------
    # Rotation helpers. Each returns a new ring.
    # ------------------------------------------------------------------

    def with_key(self, version: str, key: str | bytes) -> KeyRing:
        keys = dict(self.keys)
        keys[version] = key
        return KeyRing(primary_version=self.primary_version, keys=keys)

    def with_primary(self, version: str) -> KeyRing:
        return KeyRing(primary_version=version, keys=dict(self.keys))

    def without_key(self, version: str) -> KeyRing:
        keys = {v: k for v, k in self.keys.items() if v != version}
        return KeyRing(primary_version=self.primary_version, keys=keys)


KeyRingSource = Callable[[], KeyRing]
"""Zero-argument callable returning a fresh :class:`KeyRing` snapshot."""


def snapshot(keyring: KeyRing | KeyRingSource) -> KeyRing:
    """Return the ring to use for one operation."""
    if isinstance(keyring, KeyRing):
        return keyring
    ring = keyring()
    if not isinstance(ring, KeyRing):
        raise SecureIdConfigError(f"key ring source returned {type(ring).__name__}, expected KeyRing")
    return ring


def env_key_ring_source(environ: Mapping[str, str] | None = None) -> KeyRingSource:
    """Source that re-reads the environment on every call.

    See :meth:`KeyRingConfig.from_env` for the variables consulted.
    """

    def _load() -> KeyRing:
        return KeyRing.from_config(KeyRingConfig.from_env(environ))

    return _load
