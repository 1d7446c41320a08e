"""Unparsed — the open property bag of a document.

Holds every property a document's typed model does not capture.
The bag is the single source of truth for extension data on the wire;
typed extension fields only exist while an extension is decomposed.

INVARIANT: ``remove`` and ``insert`` either succeed completely or leave
the bag untouched.
"""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from typing import Any, overload

from pydantic import BaseModel, ValidationError

from ldext.domain.errors import KeyCollisionError, MalformedFieldError, MissingFieldError


def dump_value(value: Any) -> Any:
    """Convert *value* to its structural (JSON) shape.

    Pydantic models dump by alias, keeping only fields that were given on
    input or assigned since, so explicit ``null`` survives and absent
    stays absent. Anything else is stored as given.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return value


class Unparsed:
    """Ordered view over a document's unmodeled properties.

    Wraps the mapping it is given rather than copying it, so mutations
    are visible to the owning document.
    """

    __slots__ = ("_data",)

    def __init__(self, data: MutableMapping[str, Any] | None = None) -> None:
        self._data: MutableMapping[str, Any] = data if data is not None else {}

    @overload
    def remove(self, key: str) -> Any: ...

    @overload
    def remove[M: BaseModel](self, key: str, model: type[M]) -> M: ...

    def remove(self, key: str, model: type[BaseModel] | None = None) -> Any:
        """Pop *key*, optionally validating its value into *model*.

        Raises:
            MissingFieldError: *key* is not in the bag.
            MalformedFieldError: the value does not validate against *model*.
                The bag is left unchanged.
        """
        try:
            raw = self._data[key]
        except KeyError:
            raise MissingFieldError(key) from None

        value = raw
        if model is not None:
            try:
                value = model.model_validate(raw, by_alias=True, by_name=False)
            except ValidationError as exc:
                errors = exc.errors(include_url=False, include_context=False, include_input=False)
                raise MalformedFieldError(key, list(errors)) from exc

        del self._data[key]
        return value

    def insert(self, key: str, value: Any, *, overwrite: bool = False) -> None:
        """Store *value* under *key*, appended at the end of the bag.

        Raises:
            KeyCollisionError: *key* exists and *overwrite* is False.
        """
        if key in self._data and not overwrite:
            raise KeyCollisionError(key)
        self._data[key] = dump_value(value)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def items(self) -> list[tuple[str, Any]]:
        return list(self._data.items())

    def to_dict(self) -> dict[str, Any]:
        """Shallow copy of the bag contents in insertion order."""
        return dict(self._data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Unparsed):
            return dict(self._data) == dict(other._data)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Unparsed({dict(self._data)!r})"
