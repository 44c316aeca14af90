"""Outer token envelope: key version plus sealed payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from pysecureid.models._base import Base64Blob


class OuterEnvelope(BaseModel):
    """Versioned wrapper serialized as ``{"v": version, "d": base64}``.

    ``ciphertext`` is the full AEAD output (nonce, ciphertext and tag).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    version: StrictStr = Field(alias="v", min_length=1)
    ciphertext: Base64Blob = Field(alias="d", min_length=1)
