"""Extended — typed extension fields layered over an inner document.

An extension owns exactly one reserved key in the property bag. The
protocol moves that key's value between two representations:

  extends()   bag[reserved_key] -> validated fields model  (decompose)
  retracts()  fields model -> bag[reserved_key]            (compose)

Only one representation exists at a time: ``extends`` pops the key,
``retracts`` reinserts it and marks the wrapper consumed. The
reinserted key is appended at the end of the bag, so the document's
property order may change across a round trip; its content does not.

Defining an extension::

    class PublicKey[D](Extended[PublicKeyValues, D]):
        reserved_key = "publicKey"
        fields_model = PublicKeyValues

Instances are always created as a per-inner-type subclass that also
implements every capability the inner document has (see
:mod:`ldext.extensions.forwarding`). Extensions nest:
``Signature.extends(PublicKey.extends(doc))``.
"""

from __future__ import annotations

import functools
import logging
import types
from typing import Any, ClassVar, Self

from pydantic import BaseModel

from ldext.domain.capabilities import HasUnparsed
from ldext.domain.documents import Base, document_type_for
from ldext.domain.errors import ExtensionConsumedError, MissingFieldError
from ldext.domain.types import CollisionPolicy
from ldext.extensions.forwarding import forwarders_for, on_register, registered_capabilities

logger = logging.getLogger(__name__)


class Extended[F: BaseModel, D]:
    """A decomposed extension: typed ``fields`` plus the ``inner`` document.

    Subclasses must set :attr:`reserved_key` and :attr:`fields_model`.
    """

    reserved_key: ClassVar[str]
    fields_model: ClassVar[type[BaseModel]]
    _extension: ClassVar[type[Extended[Any, Any]]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("_bound", False):
            return
        key = getattr(cls, "reserved_key", None)
        if not isinstance(key, str) or not key:
            msg = f"{cls.__name__} must define a non-empty reserved_key"
            raise TypeError(msg)
        model = getattr(cls, "fields_model", None)
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            msg = f"{cls.__name__} must define fields_model as a pydantic model"
            raise TypeError(msg)
        cls._extension = cls

    def __new__(cls, fields: F | dict[str, Any], inner: D) -> Self:
        extension = getattr(cls, "_extension", None)
        if extension is None:
            msg = "Extended cannot be instantiated directly; subclass it"
            raise TypeError(msg)
        if not isinstance(inner, HasUnparsed):
            msg = f"{type(inner).__name__} has no property bag to extend"
            raise TypeError(msg)
        return object.__new__(_bind(extension, type(inner)))

    def __init__(self, fields: F | dict[str, Any], inner: D) -> None:
        if not isinstance(fields, self.fields_model):
            fields = self.fields_model.model_validate(fields)
        self._fields: F | None = fields  # type: ignore[assignment]
        self._inner: D | None = inner
        self._consumed = False

    # ------------------------------------------------------------------
    # Decompose
    # ------------------------------------------------------------------

    @classmethod
    def extends(cls, document: D) -> Self:
        """Pull :attr:`reserved_key` out of *document*'s bag into typed fields.

        *document* is moved into the returned wrapper.

        Raises:
            MissingFieldError: the key is absent.
            MalformedFieldError: the value does not fit :attr:`fields_model`.
            TypeError: *document* has no property bag.
        """
        if not isinstance(document, HasUnparsed):
            msg = f"{type(document).__name__} has no property bag to extend"
            raise TypeError(msg)
        fields = document.unparsed().remove(cls.reserved_key, cls.fields_model)
        logger.debug("Extended %s with %r", type(document).__name__, cls.reserved_key)
        return cls(fields, document)

    @classmethod
    def try_extends(cls, document: D) -> Self | None:
        """Like :meth:`extends`, but return None when the key is absent.

        A malformed value still raises.
        """
        try:
            return cls.extends(document)
        except MissingFieldError:
            return None

    @classmethod
    def from_json(cls, data: dict[str, Any], inner: type[Base] | None = None) -> Self:
        """Validate raw *data* into a document, then extend it.

        The document model defaults to :func:`document_type_for`.
        """
        model = inner or document_type_for(data)
        return cls.extends(model.from_dict(data))  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Compose
    # ------------------------------------------------------------------

    def retracts(self, *, policy: CollisionPolicy | str = CollisionPolicy.ERROR) -> D:
        """Fold the typed fields back into the inner bag and return the inner document.

        The wrapper is consumed afterwards. On a collision under
        ``CollisionPolicy.ERROR`` nothing changes and the wrapper stays
        usable.

        Raises:
            KeyCollisionError: the key is already present and *policy* is ERROR.
            ExtensionConsumedError: the wrapper was already retracted.
        """
        fields, inner = self.fields, self.inner
        overwrite = CollisionPolicy(policy) is CollisionPolicy.OVERWRITE
        bag = inner.unparsed()  # type: ignore[attr-defined]
        if overwrite and self.reserved_key in bag:
            logger.warning(
                "Overwriting existing %r while retracting %s",
                self.reserved_key,
                type(self).__name__,
            )
        bag.insert(self.reserved_key, fields, overwrite=overwrite)
        self._fields = None
        self._inner = None
        self._consumed = True
        logger.debug("Retracted %r into %s", self.reserved_key, type(inner).__name__)
        return inner

    def to_json(self, *, policy: CollisionPolicy | str = CollisionPolicy.ERROR) -> dict[str, Any]:
        """Retract every nested layer and serialize the resulting document."""
        return retract_all(self, policy=policy).to_dict()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def fields(self) -> F:
        self._check_live()
        return self._fields  # type: ignore[return-value]

    @property
    def inner(self) -> D:
        self._check_live()
        return self._inner  # type: ignore[return-value]

    @property
    def consumed(self) -> bool:
        return self._consumed

    def capabilities(self) -> list[str]:
        """Names of the registered capabilities this wrapper satisfies."""
        return [cap.__name__ for cap in registered_capabilities() if isinstance(self, cap)]

    def _check_live(self) -> None:
        if self._consumed:
            raise ExtensionConsumedError(self.reserved_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extended):
            return NotImplemented
        if self._extension is not other._extension:
            return False
        return (self._consumed, self._fields, self._inner) == (
            other._consumed,
            other._fields,
            other._inner,
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._consumed:
            return f"<{type(self).__name__} {self.reserved_key!r} (retracted)>"
        return f"{type(self).__name__}(fields={self._fields!r}, inner={self._inner!r})"


@functools.cache
def _bind(extension: type[Extended[Any, Any]], inner_type: type) -> type[Extended[Any, Any]]:
    """Subclass *extension* with forwarders for every capability of *inner_type*."""
    mixins = forwarders_for(inner_type, extension)
    return types.new_class(
        extension.__name__,
        (extension, *mixins),
        exec_body=lambda ns: ns.update(
            _bound=True,
            __module__=extension.__module__,
            __qualname__=extension.__qualname__,
        ),
    )


on_register(_bind.cache_clear)


def retract_all(value: Any, *, policy: CollisionPolicy | str = CollisionPolicy.ERROR) -> Any:
    """Retract nested extensions outermost-first until a plain document remains."""
    while isinstance(value, Extended):
        value = value.retracts(policy=policy)
    return value
