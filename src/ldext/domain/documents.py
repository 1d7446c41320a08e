"""Document models — well-known properties plus an open property bag.

Three levels of the ActivityStreams hierarchy are modelled, each adding
its own well-known properties and one capability:

  Base   : @context, id, type, name, mediaType, preview
  Object : url, timestamps, audience, content, ...
  ApActor: inbox, outbox, following, followers, liked, ...

Any property not declared on the model lands in the property bag
(pydantic ``extra="allow"``), reachable through :meth:`Base.unparsed`.

Serialization (:meth:`Base.to_dict`) emits well-known properties that
were present on input or assigned since, then the bag in insertion
order. Absent properties stay absent; explicit ``null`` stays ``null``.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, JsonValue
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

from ldext.domain.capabilities import AsActor, AsBase, AsObject, HasUnparsed
from ldext.domain.iri import Iri
from ldext.domain.types import ActorKind
from ldext.domain.unparsed import Unparsed


class Base(BaseModel, AsBase, HasUnparsed):
    """Identity properties shared by every linked-data document."""

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        validate_by_alias=True,
        validate_by_name=True,
    )

    context: JsonValue = Field(default=None, alias="@context")
    id: Iri | None = None
    kind: JsonValue = Field(default=None, alias="type")
    name: JsonValue = None
    media_type: str | None = None
    preview: JsonValue = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Decode wire *data*, matching well-known properties by wire key only.

        A wire key that merely equals an attribute name (AS2 ``context``,
        ``media_type``) is not a well-known property and stays in the bag.
        Keyword construction still accepts attribute names.
        """
        return cls.model_validate(data, by_alias=True, by_name=False)

    def base_ref(self) -> Base:
        return self

    def unparsed(self) -> Unparsed:
        return Unparsed(self.__pydantic_extra__)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape (aliased keys, bag last)."""
        data: dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            if name not in self.model_fields_set:
                continue
            data[field.alias or name] = to_jsonable_python(getattr(self, name))
        data.update(self.unparsed().to_dict())
        return data


class Object(Base, AsObject):
    """Generic ActivityStreams object."""

    url: JsonValue = None
    generator: JsonValue = None
    icon: JsonValue = None
    image: JsonValue = None
    location: JsonValue = None
    tag: JsonValue = None
    attachment: JsonValue = None
    attributed_to: JsonValue = None
    audience: JsonValue = None
    content: str | None = None
    summary: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    duration: str | None = None
    published: str | None = None
    updated: str | None = None
    in_reply_to: JsonValue = None
    replies: JsonValue = None
    to: JsonValue = None
    bto: JsonValue = None
    cc: JsonValue = None
    bcc: JsonValue = None

    def object_ref(self) -> Object:
        return self


class ApActor(Object, AsActor):
    """ActivityPub actor: an object with inbox/outbox collections."""

    inbox: Iri | None = None
    outbox: Iri | None = None
    following: Iri | None = None
    followers: Iri | None = None
    liked: Iri | None = None
    streams: JsonValue = None
    preferred_username: str | None = None
    endpoints: JsonValue = None

    def actor_ref(self) -> ApActor:
        return self


_ACTOR_KINDS = frozenset(kind.value for kind in ActorKind)


def own_fields(model: type[Base]) -> tuple[str, ...]:
    """Field names *model* declares beyond its nearest document parent."""
    parent = next(
        (cls for cls in model.__mro__[1:] if isinstance(cls, type) and issubclass(cls, Base)),
        None,
    )
    inherited = set(parent.model_fields) if parent is not None else set()
    return tuple(name for name in model.model_fields if name not in inherited)


def document_type_for(data: dict[str, Any]) -> type[Base]:
    """Pick the most specific document model for raw *data*.

    Actors are recognised by an actor ``type`` or an ``inbox`` property;
    everything else decodes as an :class:`Object`.
    """
    kinds = data.get("type")
    if isinstance(kinds, str):
        kinds = [kinds]
    if isinstance(kinds, list) and any(k in _ACTOR_KINDS for k in kinds if isinstance(k, str)):
        return ApActor
    if "inbox" in data:
        return ApActor
    return Object
