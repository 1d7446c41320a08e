"""Security vocabulary extensions: ``publicKey`` and ``signature``.

Each extension comes in three parts:

1. a fields model (``PublicKeyValues``) describing the bag value,
2. a minimal accessor ABC (``AsPublicKey``) plus a helper mixin
   (``PublicKeyExt``) with named getters and chaining setters built
   only on that accessor,
3. the ``Extended`` subclass (``PublicKey``) tying the reserved key to
   the fields model.

The accessor ABCs are registered as capabilities, so an outer
extension wrapping a ``PublicKey`` still exposes ``key_id`` and friends.

Usage::

    actor = PublicKey.from_json(data)
    actor.set_key_pem(new_pem).set_key_id("https://example.com/actor#main-key")
    actor.inbox  # forwarded from the inner ApActor
    data = actor.to_json()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Self

from pydantic import Field

from ldext.domain.iri import Iri
from ldext.domain.timestamps import Timestamp, parse_timestamp
from ldext.extensions.extended import Extended
from ldext.extensions.fields import ExtensionFields
from ldext.extensions.forwarding import register_capability

# ---------------------------------------------------------------------------
# publicKey
# ---------------------------------------------------------------------------


class PublicKeyValues(ExtensionFields):
    """The ``publicKey`` block of an actor."""

    id: Iri
    owner: Iri
    public_key_pem: str


class AsPublicKey(ABC):
    """Anything that can hand out its public key fields."""

    @abstractmethod
    def public_key_ref(self) -> PublicKeyValues: ...


class PublicKeyExt(AsPublicKey):
    """Named accessors for public key fields.

    Getters return the stored objects themselves. Setters replace the
    field in place and return ``self`` for chaining.
    """

    @property
    def key_id(self) -> str:
        """The public key's IRI."""
        return self.public_key_ref().id

    def set_key_id(self, key_id: str) -> Self:
        self.public_key_ref().id = key_id
        return self

    @property
    def key_owner(self) -> str:
        """IRI of the actor owning the key."""
        return self.public_key_ref().owner

    def set_key_owner(self, owner: str) -> Self:
        self.public_key_ref().owner = owner
        return self

    @property
    def key_pem(self) -> str:
        """PEM-encoded key material."""
        return self.public_key_ref().public_key_pem

    def set_key_pem(self, pem: str | bytes) -> Self:
        """Replace the PEM value. Bytes are decoded as ASCII."""
        if isinstance(pem, bytes):
            pem = pem.decode("ascii")
        self.public_key_ref().public_key_pem = str(pem)
        return self


class PublicKey[D](Extended[PublicKeyValues, D], PublicKeyExt):
    """An inner document extended with its ``publicKey`` block."""

    reserved_key = "publicKey"
    fields_model = PublicKeyValues

    def public_key_ref(self) -> PublicKeyValues:
        return self.fields


register_capability(AsPublicKey, "public_key_ref", helpers=PublicKeyExt)


# ---------------------------------------------------------------------------
# signature
# ---------------------------------------------------------------------------


class SignatureValues(ExtensionFields):
    """A linked-data ``signature`` block."""

    kind: str | None = Field(default=None, alias="type")
    creator: Iri
    created: Timestamp
    signature_value: str


class AsSignature(ABC):
    @abstractmethod
    def signature_ref(self) -> SignatureValues: ...


class SignatureExt(AsSignature):
    """Named accessors for signature fields."""

    @property
    def signature_type(self) -> str | None:
        return self.signature_ref().kind

    def set_signature_type(self, kind: str | None) -> Self:
        self.signature_ref().kind = kind
        return self

    @property
    def signature_creator(self) -> str:
        """IRI of the key that produced the signature."""
        return self.signature_ref().creator

    def set_signature_creator(self, creator: str) -> Self:
        self.signature_ref().creator = creator
        return self

    @property
    def signature_created(self) -> datetime:
        """Creation time, parsed from the stored wire text."""
        return parse_timestamp(self.signature_ref().created)

    def set_signature_created(self, created: datetime | str) -> Self:
        if isinstance(created, datetime):
            created = created.isoformat()
        self.signature_ref().created = created
        return self

    @property
    def signature_value(self) -> str:
        """Base64 signature bytes, as received."""
        return self.signature_ref().signature_value

    def set_signature_value(self, value: str) -> Self:
        self.signature_ref().signature_value = value
        return self


class Signature[D](Extended[SignatureValues, D], SignatureExt):
    """An inner document extended with its ``signature`` block."""

    reserved_key = "signature"
    fields_model = SignatureValues

    def signature_ref(self) -> SignatureValues:
        return self.fields


register_capability(AsSignature, "signature_ref", helpers=SignatureExt)
