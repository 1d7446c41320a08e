"""Capability forwarding for extension wrappers.

A wrapper must satisfy every capability its inner document satisfies,
and no others. Each registered capability gets one *forwarder* mixin:
a subclass of the capability whose accessor delegates to
``self.inner`` and whose field attributes proxy onto the accessor's
result. :func:`forwarders_for` picks the mixins matching an inner type.

INVARIANT: forwarding depends only on the inner type, never on the
extension's own fields.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ldext.domain.capabilities import AsActor, AsBase, AsObject, HasUnparsed
from ldext.domain.documents import ApActor, Base, Object, own_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Forwarder:
    """A registered capability and the mixin that forwards it."""

    capability: type
    accessor: str
    mixin: type


_FORWARDERS: list[Forwarder] = []
_listeners: list[Callable[[], None]] = []


def _proxy(accessor: str, name: str) -> property:
    def fget(self: Any) -> Any:
        return getattr(getattr(self, accessor)(), name)

    def fset(self: Any, value: Any) -> None:
        setattr(getattr(self, accessor)(), name, value)

    return property(fget, fset, doc=f"``{name}`` of the inner document.")


def _delegate(accessor: str) -> Callable[[Any], Any]:
    def method(self: Any) -> Any:
        return getattr(self.inner, accessor)()

    method.__name__ = accessor
    return method


def register_capability(
    capability: type,
    accessor: str,
    fields: Iterable[str] = (),
    *,
    helpers: type | None = None,
) -> Forwarder:
    """Register *capability* for automatic forwarding through wrappers.

    Args:
        capability: ABC the inner document may satisfy.
        accessor: Name of the capability's abstract accessor method.
        fields: Attribute names to proxy onto the accessor's result.
        helpers: Subclass of *capability* carrying accessor-based helper
            methods; the mixin derives from it instead of *capability*.
    """
    if helpers is not None and not issubclass(helpers, capability):
        msg = f"{helpers.__name__} must subclass {capability.__name__}"
        raise TypeError(msg)
    for existing in _FORWARDERS:
        if existing.capability is capability:
            return existing

    namespace: dict[str, Any] = {accessor: _delegate(accessor)}
    namespace.update({name: _proxy(accessor, name) for name in fields})
    mixin = types.new_class(
        f"Forward{capability.__name__}",
        (helpers or capability,),
        exec_body=lambda ns: ns.update(namespace, __module__=__name__),
    )
    forwarder = Forwarder(capability=capability, accessor=accessor, mixin=mixin)
    _FORWARDERS.append(forwarder)
    logger.debug("Registered capability %s via %s()", capability.__name__, accessor)
    for listener in _listeners:
        listener()
    return forwarder


def on_register(listener: Callable[[], None]) -> None:
    """Call *listener* whenever a capability is registered."""
    _listeners.append(listener)


def forwarders_for(inner_type: type, wrapper_type: type = object) -> tuple[type, ...]:
    """Forwarding mixins for every capability *inner_type* satisfies.

    Capabilities *wrapper_type* already implements itself are skipped.
    """
    return tuple(
        f.mixin
        for f in _FORWARDERS
        if issubclass(inner_type, f.capability) and not issubclass(wrapper_type, f.capability)
    )


def registered_capabilities() -> list[type]:
    return [f.capability for f in _FORWARDERS]


register_capability(AsBase, "base_ref", own_fields(Base))
register_capability(AsObject, "object_ref", own_fields(Object))
register_capability(AsActor, "actor_ref", own_fields(ApActor))
register_capability(HasUnparsed, "unparsed")
