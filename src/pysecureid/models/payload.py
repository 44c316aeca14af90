"""Inner token payload: the fact being protected."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from pysecureid.models._base import EpochTimestamp

RecordId = StrictInt | StrictStr
"""Identifier wrapped by a token. Bools and floats are rejected."""


class InnerPayload(BaseModel):
    """Plaintext sealed inside every token.

    Wire form is compact JSON ``{"model", "id", "scp", "exp"}``; ``exp`` is
    omitted when the token does not expire.

    Parameters
    ----------
    model_name : str
        Record type the identifier belongs to.
    record_id : int or str
        The wrapped identifier.
    scope : str
        Caller-chosen purpose; must match exactly on resolution.
    expires_at : datetime or None
        Absolute expiry, stored with one-second precision.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        protected_namespaces=(),
    )

    model_name: StrictStr = Field(alias="model", min_length=1)
    record_id: RecordId = Field(alias="id")
    scope: StrictStr = Field(alias="scp")
    expires_at: EpochTimestamp = Field(default=None, alias="exp")

    def to_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> InnerPayload:
        return cls.model_validate_json(data)

    def is_expired(self, now: datetime) -> bool:
        """Whether *now* is at or past the expiry. Never true without one."""
        return self.expires_at is not None and now >= self.expires_at
