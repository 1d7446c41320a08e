"""Tests for document models, serialization, and type detection."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from ldext.domain.capabilities import AsActor, AsBase, AsObject, HasUnparsed
from ldext.domain.documents import ApActor, Base, Object, document_type_for, own_fields


class TestDecode:
    def test_well_known_fields_are_typed(self, actor_data: dict[str, Any]) -> None:
        actor = ApActor.model_validate(actor_data)
        assert actor.id == "https://example.com/users/alice"
        assert actor.kind == "Person"
        assert actor.preferred_username == "alice"
        assert actor.inbox == "https://example.com/users/alice/inbox"
        assert actor.endpoints == {"sharedInbox": "https://example.com/inbox"}
        assert actor.context == actor_data["@context"]

    def test_unknown_properties_land_in_bag(self, actor_data: dict[str, Any]) -> None:
        actor = ApActor.model_validate(actor_data)
        assert actor.unparsed().keys() == [
            "manuallyApprovesFollowers",
            "discoverable",
            "publicKey",
            "featured",
        ]

    def test_invalid_iri_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Object.model_validate({"id": "not an iri"})

    def test_python_names_accepted(self) -> None:
        note = Object(kind="Note", media_type="text/html", attributed_to="https://x/a")
        assert note.to_dict() == {
            "type": "Note",
            "mediaType": "text/html",
            "attributedTo": "https://x/a",
        }


class TestToDict:
    def test_round_trip_without_extensions(self, actor_data: dict[str, Any]) -> None:
        assert ApActor.model_validate(actor_data).to_dict() == actor_data

    def test_absent_fields_stay_absent(self) -> None:
        data = Object.model_validate({"type": "Note"}).to_dict()
        assert data == {"type": "Note"}

    def test_explicit_null_preserved(self) -> None:
        data = {"type": "Note", "summary": None, "custom": None}
        assert Object.model_validate(data).to_dict() == data

    def test_assigned_field_is_serialized(self) -> None:
        note = Object.model_validate({"type": "Note"})
        note.content = "hello"
        assert note.to_dict() == {"type": "Note", "content": "hello"}

    def test_bag_follows_well_known_fields(self) -> None:
        note = Object.model_validate({"zzz": 1, "type": "Note"})
        assert list(note.to_dict()) == ["type", "zzz"]


class TestCapabilities:
    @pytest.mark.parametrize(
        "model,expected",
        [
            (Base, {AsBase, HasUnparsed}),
            (Object, {AsBase, AsObject, HasUnparsed}),
            (ApActor, {AsBase, AsObject, AsActor, HasUnparsed}),
        ],
    )
    def test_capability_set(self, model: type[Base], expected: set[type]) -> None:
        document = model()
        caps = (AsBase, AsObject, AsActor, HasUnparsed)
        assert {cap for cap in caps if isinstance(document, cap)} == expected

    def test_refs_return_self(self) -> None:
        actor = ApActor()
        assert actor.base_ref() is actor
        assert actor.object_ref() is actor
        assert actor.actor_ref() is actor

    def test_own_fields(self) -> None:
        assert "id" in own_fields(Base)
        assert "url" in own_fields(Object)
        assert "id" not in own_fields(Object)
        assert set(own_fields(ApActor)) == {
            "inbox",
            "outbox",
            "following",
            "followers",
            "liked",
            "streams",
            "preferred_username",
            "endpoints",
        }


class TestDocumentTypeFor:
    @pytest.mark.parametrize(
        "data,expected",
        [
            ({"type": "Person"}, ApActor),
            ({"type": ["Service", "Object"]}, ApActor),
            ({"type": "Note", "inbox": "https://x/inbox"}, ApActor),
            ({"type": "Note"}, Object),
            ({}, Object),
            ({"type": 42}, Object),
        ],
    )
    def test_detection(self, data: dict[str, Any], expected: type[Base]) -> None:
        assert document_type_for(data) is expected


class TestFromDict:
    def test_matches_wire_keys(self, actor_data: dict[str, Any]) -> None:
        actor = ApActor.from_dict(actor_data)
        assert actor.preferred_username == "alice"
        assert actor.context == actor_data["@context"]

    def test_bare_context_stays_in_bag(self) -> None:
        data = {"context": "https://www.w3.org/ns/activitystreams", "type": "Note"}
        note = Object.from_dict(data)
        assert note.context is None
        assert note.unparsed()["context"] == data["context"]
        assert note.to_dict() == data

    def test_snake_case_keys_stay_in_bag(self) -> None:
        data = {"type": "Note", "in_reply_to": "https://x/1", "media_type": "text/plain"}
        note = Object.from_dict(data)
        assert note.in_reply_to is None
        assert note.media_type is None
        assert note.unparsed().keys() == ["in_reply_to", "media_type"]
        assert note.to_dict() == data
