"""Capability contracts a document may satisfy.

Each capability is one facet of document behaviour, exposed through a
single accessor that returns the model holding that facet's fields:

- :class:`AsBase`: identity fields (``@context``, id, type, name, ...)
- :class:`AsObject`: generic object fields (url, timestamps, audience, ...)
- :class:`AsActor`: ActivityPub actor fields (inbox, outbox, ...)
- :class:`HasUnparsed`: the open property bag

Documents implement these directly by returning ``self``. Extension
wrappers implement them by delegating to their inner document; see
:mod:`ldext.extensions.forwarding`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ldext.domain.documents import ApActor, Base, Object
    from ldext.domain.unparsed import Unparsed


class AsBase(ABC):
    """Identity capability."""

    @abstractmethod
    def base_ref(self) -> Base: ...


class AsObject(ABC):
    """Generic object capability."""

    @abstractmethod
    def object_ref(self) -> Object: ...


class AsActor(ABC):
    """ActivityPub actor capability."""

    @abstractmethod
    def actor_ref(self) -> ApActor: ...


class HasUnparsed(ABC):
    """Access to the open property bag.

    Every document an extension can be applied to must satisfy this.
    """

    @abstractmethod
    def unparsed(self) -> Unparsed: ...
