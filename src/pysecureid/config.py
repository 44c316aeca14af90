"""Key ring configuration for pysecureid."""

from __future__ import annotations

import base64
import binascii
import dataclasses
import json
import os
from collections.abc import Mapping
from typing import Any

from pysecureid._constants import (
    ENV_KEY_PREFIX,
    ENV_KEYS,
    ENV_PRIMARY_KEY_VERSION,
    KEY_PREFIX_BASE64,
    KEY_PREFIX_HEX,
    KEY_SIZE,
)
from pysecureid.exceptions import SecureIdConfigError


def parse_key(value: str | bytes, *, name: str = "key") -> bytes:
    """Turn configured key text into raw key bytes.

    Parameters
    ----------
    value : str or bytes
        ``bytes`` are used as-is. Strings prefixed with ``base64:`` or
        ``hex:`` are decoded accordingly; any other string is taken as
        its UTF-8 bytes.
    name : str
        Label used in error messages.

    Returns
    -------
    bytes
        Exactly 32 bytes of key material.

    Raises
    ------
    SecureIdConfigError
        If the value cannot be decoded or has the wrong length.
    """
    if isinstance(value, bytes):
        data = value
    elif isinstance(value, str):
        text = value.strip()
        if text.startswith(KEY_PREFIX_BASE64):
            try:
                data = base64.b64decode(text[len(KEY_PREFIX_BASE64) :], validate=True)
            except (binascii.Error, ValueError) as exc:
                raise SecureIdConfigError(f"{name} must be valid base64") from exc
        elif text.startswith(KEY_PREFIX_HEX):
            try:
                data = bytes.fromhex(text[len(KEY_PREFIX_HEX) :])
            except ValueError as exc:
                raise SecureIdConfigError(f"{name} must be hex-encoded") from exc
        else:
            data = value.encode("utf-8")
    else:
        raise SecureIdConfigError(f"{name} must be str or bytes (got {type(value).__name__})")

    if len(data) != KEY_SIZE:
        raise SecureIdConfigError(f"{name} must be {KEY_SIZE} bytes (got {len(data)})")
    return data


@dataclasses.dataclass(frozen=True)
class KeyRingConfig:
    """Key ring descriptor as supplied by an external secret store.

    Parameters
    ----------
    primary_key_version : str
        Version used to issue new tokens.
    keys : Mapping[str, str | bytes]
        Key text (see :func:`parse_key`) per version. Retired versions
        stay here for as long as their tokens must keep resolving.
    """

    primary_key_version: str
    keys: Mapping[str, str | bytes] = dataclasses.field(default_factory=dict, repr=False)

    @classmethod
    def from_mapping(cls, descriptor: Mapping[str, Any]) -> KeyRingConfig:
        """Build configuration from a ``{primary_key_version, keys}`` mapping."""
        primary = descriptor.get("primary_key_version")
        if primary is None:
            raise SecureIdConfigError("primary_key_version is missing")
        keys = descriptor.get("keys") or {}
        if not isinstance(keys, Mapping):
            raise SecureIdConfigError("keys must be a mapping of version to key")
        return cls(
            primary_key_version=str(primary),
            keys={str(version): key for version, key in keys.items()},
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> KeyRingConfig:
        """Create configuration from environment variables.

        Reads ``SECUREID_PRIMARY_KEY_VERSION`` and the keys from
        ``SECUREID_KEYS`` (a JSON object) and ``SECUREID_KEY_<VERSION>``
        variables. Individual variables win over JSON entries, explicit
        keyword arguments win over both.

        Parameters
        ----------
        environ : Mapping or None
            Environment to read. Defaults to ``os.environ``.
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        KeyRingConfig
            Populated configuration.
        """
        env = os.environ if environ is None else environ

        keys: dict[str, str | bytes] = {}
        keys_json = env.get(ENV_KEYS)
        if keys_json:
            try:
                parsed = json.loads(keys_json)
            except json.JSONDecodeError as exc:
                raise SecureIdConfigError(f"{ENV_KEYS} is not valid JSON") from exc
            if not isinstance(parsed, dict):
                raise SecureIdConfigError(f"{ENV_KEYS} must be a JSON object")
            for version, key in parsed.items():
                if not isinstance(key, str):
                    raise SecureIdConfigError(f"{ENV_KEYS}[{version!r}] must be a string")
                keys[str(version)] = key

        for env_key, val in env.items():
            if env_key.startswith(ENV_KEY_PREFIX) and len(env_key) > len(ENV_KEY_PREFIX):
                keys[env_key[len(ENV_KEY_PREFIX) :]] = val

        config_kwargs: dict[str, Any] = {"keys": keys}
        primary = env.get(ENV_PRIMARY_KEY_VERSION)
        if primary is not None:
            config_kwargs["primary_key_version"] = primary.strip()

        config_kwargs.update(overrides)

        if not config_kwargs.get("primary_key_version"):
            raise SecureIdConfigError(f"{ENV_PRIMARY_KEY_VERSION} is not set")
        return cls(**config_kwargs)
