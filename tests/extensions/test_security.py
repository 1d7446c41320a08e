"""Tests for the publicKey and signature extensions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
from pydantic import ValidationError

from ldext.domain.documents import ApActor
from ldext.domain.errors import MalformedFieldError
from ldext.extensions.security import PublicKey, Signature


class TestPublicKeyAccessors:
    def test_getters_return_held_values(self, actor_data: dict[str, Any], pem: str) -> None:
        extended = PublicKey.from_json(actor_data)
        assert extended.key_id == "https://example.com/users/alice#main-key"
        assert extended.key_owner == "https://example.com/users/alice"
        assert extended.key_pem == pem
        assert extended.key_pem is extended.fields.public_key_pem

    def test_public_key_ref_is_fields(self, actor_data: dict[str, Any]) -> None:
        extended = PublicKey.from_json(actor_data)
        assert extended.public_key_ref() is extended.fields

    def test_setters_chain(self, actor_data: dict[str, Any]) -> None:
        extended = PublicKey.from_json(actor_data)
        result = (
            extended.set_key_id("https://example.com/keys/2")
            .set_key_owner("https://example.com/users/bob")
            .set_key_pem("NEW PEM")
        )
        assert result is extended
        assert extended.to_json()["publicKey"] == {
            "id": "https://example.com/keys/2",
            "owner": "https://example.com/users/bob",
            "publicKeyPem": "NEW PEM",
        }

    def test_set_key_pem_accepts_bytes(self, actor_data: dict[str, Any]) -> None:
        extended = PublicKey.from_json(actor_data).set_key_pem(b"-----BEGIN-----")
        assert extended.key_pem == "-----BEGIN-----"

    def test_set_key_id_validates_iri(self, actor_data: dict[str, Any]) -> None:
        extended = PublicKey.from_json(actor_data)
        with pytest.raises(ValidationError):
            extended.set_key_id("not an iri")
        assert extended.key_id == "https://example.com/users/alice#main-key"

    def test_forwarded_fields_alongside_accessors(self, actor_data: dict[str, Any]) -> None:
        extended = PublicKey.from_json(actor_data)
        assert extended.preferred_username == "alice"
        assert extended.key_owner == extended.id


class TestSignature:
    def test_decodes_created_as_datetime(self, signed_actor_data: dict[str, Any]) -> None:
        extended = Signature.from_json(signed_actor_data)
        assert extended.signature_type == "RsaSignature2017"
        assert extended.signature_created == datetime(2017, 9, 23, 20, 21, 34, tzinfo=UTC)
        assert extended.signature_creator == "https://example.com/users/alice#main-key"

    def test_round_trip_keeps_timestamp_text(self, signed_actor_data: dict[str, Any]) -> None:
        extended = Signature.from_json(signed_actor_data)
        assert extended.to_json() == signed_actor_data

    def test_absent_type_stays_absent(
        self, actor_data: dict[str, Any], signature_data: dict[str, Any]
    ) -> None:
        del signature_data["type"]
        actor_data["signature"] = signature_data
        assert Signature.from_json(actor_data).to_json() == actor_data

    def test_set_created_from_string(self, signed_actor_data: dict[str, Any]) -> None:
        extended = Signature.from_json(signed_actor_data)
        extended.set_signature_created("2024-01-02T03:04:05Z").set_signature_value("c2ln")
        data = extended.to_json()["signature"]
        assert data["created"] == "2024-01-02T03:04:05Z"
        assert data["signatureValue"] == "c2ln"

    def test_set_created_from_datetime(self, signed_actor_data: dict[str, Any]) -> None:
        extended = Signature.from_json(signed_actor_data)
        extended.set_signature_created(datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC))
        assert extended.to_json()["signature"]["created"] == "2024-01-02T03:04:05+00:00"


class TestSignatureCreated:
    @pytest.mark.parametrize(
        "created,expected",
        [
            ("2017-09-23T20:21:34Z", datetime(2017, 9, 23, 20, 21, 34, tzinfo=UTC)),
            ("2017-09-23T20:21:34+00:00", datetime(2017, 9, 23, 20, 21, 34, tzinfo=UTC)),
            ("2017-09-23T20:21:34.000Z", datetime(2017, 9, 23, 20, 21, 34, tzinfo=UTC)),
            ("2017-09-23T22:21:34+02:00", datetime(2017, 9, 23, 20, 21, 34, tzinfo=UTC)),
            ("2017-09-23T20:21:34", datetime(2017, 9, 23, 20, 21, 34)),
        ],
        ids=["zulu", "offset", "fractional", "non-utc", "naive"],
    )
    def test_wire_text_survives_round_trip(
        self, signed_actor_data: dict[str, Any], created: str, expected: datetime
    ) -> None:
        signed_actor_data["signature"]["created"] = created
        extended = Signature.from_json(signed_actor_data)
        assert extended.signature_created == expected
        assert extended.to_json() == signed_actor_data

    def test_unparseable_created_is_malformed(self, signed_actor_data: dict[str, Any]) -> None:
        signed_actor_data["signature"]["created"] = "yesterday"
        with pytest.raises(MalformedFieldError) as exc_info:
            Signature.from_json(signed_actor_data)
        assert exc_info.value.errors[0]["loc"] == ("created",)

    def test_set_created_validates(self, signed_actor_data: dict[str, Any]) -> None:
        extended = Signature.from_json(signed_actor_data)
        with pytest.raises(ValidationError):
            extended.set_signature_created("yesterday")
        assert extended.fields.created == "2017-09-23T20:21:34Z"


class TestNestedExtensions:
    @pytest.mark.parametrize(
        "order",
        [(PublicKey, Signature), (Signature, PublicKey)],
        ids=["key-then-signature", "signature-then-key"],
    )
    def test_either_order_recovers_both(
        self, signed_actor_data: dict[str, Any], order: tuple[type, type]
    ) -> None:
        first, second = order
        nested = second.extends(first.extends(ApActor.model_validate(signed_actor_data)))
        assert nested.key_id == signed_actor_data["publicKey"]["id"]
        assert nested.signature_value == signed_actor_data["signature"]["signatureValue"]
        assert nested.to_json() == signed_actor_data

    def test_outer_mutates_inner_extension(self, signed_actor_data: dict[str, Any]) -> None:
        nested = Signature.extends(PublicKey.from_json(signed_actor_data))
        nested.set_key_pem("ROTATED").set_signature_value("bmV3")
        data = nested.to_json()
        assert data["publicKey"]["publicKeyPem"] == "ROTATED"
        assert data["signature"]["signatureValue"] == "bmV3"

    def test_retract_outermost_first(self, signed_actor_data: dict[str, Any]) -> None:
        inner = PublicKey.from_json(signed_actor_data)
        nested = Signature.extends(inner)
        assert nested.retracts() is inner
        assert "signature" in inner.unparsed()
        assert isinstance(inner.retracts(), ApActor)
