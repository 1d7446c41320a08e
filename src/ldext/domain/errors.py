"""Error taxonomy for the extend/retract protocol.

All errors are local and recoverable. The core raises them to the
immediate caller and never swallows them; the service layer maps
``code`` onto :class:`~ldext.services.result.ServiceError`.
"""

from __future__ import annotations

from typing import Any, ClassVar


class ExtensionError(Exception):
    """Base class for every extension protocol failure.

    Attributes:
        key: The reserved property key the failure concerns.
        code: Stable machine-readable error code.
    """

    code: ClassVar[str] = "EXTENSION_ERROR"

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or self.default_message())

    def default_message(self) -> str:
        return f"Extension error on {self.key!r}"


class MissingFieldError(ExtensionError):
    """The reserved key is absent from the property bag."""

    code = "MISSING_FIELD"

    def default_message(self) -> str:
        return f"Missing field {self.key!r}"


class MalformedFieldError(ExtensionError):
    """The reserved key is present but its value does not match the fields model."""

    code = "MALFORMED_FIELD"

    def __init__(
        self,
        key: str,
        errors: list[dict[str, Any]] | None = None,
        message: str | None = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(key, message)

    def default_message(self) -> str:
        if not self.errors:
            return f"Malformed field {self.key!r}"
        first = self.errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        where = f"{self.key}.{loc}" if loc else self.key
        return f"Malformed field {where!r}: {first.get('msg', 'invalid value')}"


class KeyCollisionError(ExtensionError):
    """The reserved key is already occupied when composing."""

    code = "KEY_COLLISION"

    def default_message(self) -> str:
        return f"Field {self.key!r} is already present; refusing to overwrite"


class ExtensionConsumedError(ExtensionError):
    """The extended value was already retracted into its inner document."""

    code = "CONSUMED"

    def default_message(self) -> str:
        return f"Extension {self.key!r} was already retracted"
