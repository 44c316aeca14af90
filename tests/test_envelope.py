"""Envelope codec and wire models."""

from __future__ import annotations

import base64
import json
from datetime import UTC, datetime

import pytest

from pysecureid.envelope import decode_envelope, encode_envelope
from pysecureid.exceptions import DecodeError
from pysecureid.models import InnerPayload, OuterEnvelope
from pysecureid.models._base import b64decode_canonical, b64encode_text


def _token_for(obj: object) -> str:
    raw = json.dumps(obj, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


class TestEnvelopeCodec:
    def test_round_trip(self) -> None:
        token = encode_envelope("7", b"\x00\xff" * 20)
        assert "=" not in token
        assert decode_envelope(token) == ("7", b"\x00\xff" * 20)

    def test_wire_shape(self) -> None:
        token = encode_envelope("1", b"abc")
        outer = json.loads(b64decode_canonical(token, urlsafe=True))
        assert outer == {"v": "1", "d": "YWJj"}

    @pytest.mark.parametrize(
        "obj",
        [
            {"v": "1"},
            {"d": "YWJj"},
            {"v": 1, "d": "YWJj"},
            {"v": "", "d": "YWJj"},
            {"v": "1", "d": ""},
            {"v": "1", "d": 5},
            {"v": "1", "d": "not base64!"},
            {"v": "1", "d": "YWJ"},
            {"v": "1", "d": "YWJj", "x": 1},
            ["1", "YWJj"],
            "string",
        ],
    )
    def test_invalid_structures(self, obj: object) -> None:
        with pytest.raises(DecodeError):
            decode_envelope(_token_for(obj))

    @pytest.mark.parametrize("token", [None, 123, b"abc", "", "a", "ab cd", "ab+/", "YWJj=="])
    def test_invalid_text(self, token: object) -> None:
        with pytest.raises(DecodeError):
            decode_envelope(token)

    def test_non_utf8_envelope(self) -> None:
        token = base64.urlsafe_b64encode(b"\xff\xfe{}").decode().rstrip("=")
        with pytest.raises(DecodeError):
            decode_envelope(token)


class TestCanonicalBase64:
    def test_unused_bits_must_be_zero(self) -> None:
        # "QQ" encodes b"A"; "QR" differs only in unused bits.
        assert b64decode_canonical("QQ", urlsafe=True) == b"A"
        with pytest.raises(ValueError):
            b64decode_canonical("QR", urlsafe=True)

    def test_standard_alphabet_requires_padding(self) -> None:
        assert b64decode_canonical("QQ==") == b"A"
        with pytest.raises(ValueError):
            b64decode_canonical("QQ")

    def test_encode_forms(self) -> None:
        assert b64encode_text(b"\xfb\xff") == "+/8="
        assert b64encode_text(b"\xfb\xff", urlsafe=True) == "-_8"


class TestInnerPayload:
    def test_wire_aliases_and_no_exp(self) -> None:
        payload = InnerPayload(model_name="Product", record_id=42, scope="receipt")
        assert json.loads(payload.to_bytes()) == {"model": "Product", "id": 42, "scp": "receipt"}

    def test_exp_is_epoch_seconds(self) -> None:
        expires = datetime(2030, 1, 1, tzinfo=UTC)
        payload = InnerPayload(model_name="User", record_id="x", scope="s", expires_at=expires)
        wire = json.loads(payload.to_bytes())
        assert wire["exp"] == int(expires.timestamp())
        assert InnerPayload.from_bytes(payload.to_bytes()).expires_at == expires

    def test_is_expired(self) -> None:
        expires = datetime(2030, 1, 1, tzinfo=UTC)
        payload = InnerPayload(model_name="User", record_id=1, scope="s", expires_at=expires)
        assert not payload.is_expired(datetime(2029, 12, 31, 23, 59, 59, tzinfo=UTC))
        assert payload.is_expired(expires)
        assert not InnerPayload(model_name="User", record_id=1, scope="s").is_expired(expires)

    @pytest.mark.parametrize(
        "raw",
        [
            b'{"model":"User","id":1}',
            b'{"model":"User","id":1.5,"scp":"s"}',
            b'{"model":"User","id":true,"scp":"s"}',
            b'{"model":"User","id":1,"scp":"s","exp":"tomorrow"}',
            b'{"model":"User","id":1,"scp":"s","extra":1}',
            b'{"model":"","id":1,"scp":"s"}',
        ],
    )
    def test_rejects_bad_payloads(self, raw: bytes) -> None:
        with pytest.raises(ValueError):
            InnerPayload.from_bytes(raw)

    def test_outer_envelope_dump(self) -> None:
        envelope = OuterEnvelope(version="1", ciphertext=b"abc")
        assert envelope.model_dump(by_alias=True, mode="json") == {"v": "1", "d": "YWJj"}
