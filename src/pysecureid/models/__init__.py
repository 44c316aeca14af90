"""Wire models for pysecureid tokens."""

from pysecureid.models.envelope import OuterEnvelope
from pysecureid.models.payload import InnerPayload, RecordId

__all__ = [
    "InnerPayload",
    "OuterEnvelope",
    "RecordId",
]
