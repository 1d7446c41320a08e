"""ExtensionService — inspect, round-trip, and edit extensions in documents.

Every method decodes a document, runs it through the extend/retract
protocol, and reports the outcome as a ``ServiceResult``. Extension
errors surface as failed results carrying the error's code.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ldext.domain.errors import ExtensionError
from ldext.domain.unparsed import dump_value
from ldext.extensions.extended import Extended, retract_all
from ldext.extensions.security import PublicKey
from ldext.services.base import BaseService, DocumentLoadError
from ldext.services.contracts import (
    ExtensionListData,
    InspectData,
    RoundtripData,
    SetKeyData,
    dump_validated,
)
from ldext.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from ldext.config.settings import LdextSettings

logger = logging.getLogger(__name__)


def _key_moves(before: dict[str, Any], after: dict[str, Any]) -> list[str]:
    """Keys present in both dicts whose position changed."""
    before_keys = list(before)
    after_keys = list(after)
    return [
        key
        for key in after_keys
        if key in before and before_keys.index(key) != after_keys.index(key)
    ]


def _differing_keys(before: dict[str, Any], after: dict[str, Any]) -> list[str]:
    keys = list(before) + [key for key in after if key not in before]
    return [key for key in keys if before.get(key, ...) != after.get(key, ...)]


class ExtensionService(BaseService):
    """Document operations over a set of named extensions."""

    def __init__(
        self,
        settings: LdextSettings,
        extensions: Mapping[str, type[Extended[Any, Any]]],
    ) -> None:
        super().__init__(settings)
        self._extensions = dict(extensions)

    def list_extensions(self) -> ServiceResult:
        """Describe every registered extension."""
        items = [
            {
                "name": name,
                "reserved_key": extension.reserved_key,
                "fields": [
                    field.alias or field_name
                    for field_name, field in extension.fields_model.model_fields.items()
                ],
            }
            for name, extension in sorted(self._extensions.items())
        ]
        data = dump_validated(ExtensionListData, {"count": len(items), "items": items})
        return ServiceResult(ok=True, op="list_extensions", data=data)

    def inspect(self, path: Path, name: str) -> ServiceResult:
        """Decompose extension *name* from the document at *path* and describe it."""
        op = "inspect"
        extension = self._extensions.get(name)
        if extension is None:
            return self._unknown_extension(op, name)

        try:
            _, document = self._load_document(path)
            extended = extension.extends(document)
        except DocumentLoadError as exc:
            return ServiceResult.failure(op, exc.code, str(exc), path=str(path))
        except ExtensionError as exc:
            return ServiceResult(ok=False, op=op, error=ServiceError.from_extension_error(exc))

        data = dump_validated(
            InspectData,
            {
                "path": str(path),
                "extension": name,
                "reserved_key": extension.reserved_key,
                "document_type": type(document).__name__,
                "fields": dump_value(extended.fields),
                "capabilities": extended.capabilities(),
                "unparsed": extended.inner.unparsed().keys(),
            },
        )
        return ServiceResult(ok=True, op=op, data=data)

    def roundtrip(self, path: Path, names: Sequence[str]) -> ServiceResult:
        """Decompose each named extension (nested in order), then compose them all.

        Succeeds when the recomposed document is structurally equal to the
        original. Key order may differ; moved keys are reported.
        """
        op = "roundtrip"
        if not names:
            return ServiceResult.failure(op, "NO_EXTENSIONS", "Name at least one extension")
        resolved: list[type[Extended[Any, Any]]] = []
        for name in names:
            extension = self._extensions.get(name)
            if extension is None:
                return self._unknown_extension(op, name)
            resolved.append(extension)

        try:
            original, value = self._load_document(path)
            for extension in resolved:
                value = extension.extends(value)
            document = retract_all(value, policy=self.settings.compose.collision_policy)
        except DocumentLoadError as exc:
            return ServiceResult.failure(op, exc.code, str(exc), path=str(path))
        except ExtensionError as exc:
            return ServiceResult(ok=False, op=op, error=ServiceError.from_extension_error(exc))

        recomposed = document.to_dict()
        differing = _differing_keys(original, recomposed)
        data = dump_validated(
            RoundtripData,
            {
                "path": str(path),
                "extensions": list(names),
                "unchanged": not differing,
                "moved_keys": _key_moves(original, recomposed),
                "differing_keys": differing,
            },
        )
        if differing:
            logger.warning("Round trip of %s changed keys %s", path, differing)
            return ServiceResult.failure(
                op,
                "ROUNDTRIP_MISMATCH",
                f"Recomposed document differs at {', '.join(differing)}",
                data=data,
            )
        return ServiceResult(ok=True, op=op, data=data)

    def set_key(
        self,
        path: Path,
        *,
        key_id: str | None = None,
        owner: str | None = None,
        pem: str | None = None,
        output: Path | None = None,
    ) -> ServiceResult:
        """Edit the ``publicKey`` block of the document at *path*.

        Writes the recomposed document to *output* (default: *path*).
        Nothing is written if any step fails.
        """
        op = "set_key"
        target = output or path
        changed: list[str] = []
        try:
            _, document = self._load_document(path)
            public_key = PublicKey.extends(document)
            if key_id is not None:
                public_key.set_key_id(key_id)
                changed.append("id")
            if owner is not None:
                public_key.set_key_owner(owner)
                changed.append("owner")
            if pem is not None:
                public_key.set_key_pem(pem)
                changed.append("publicKeyPem")
            new_id, new_owner = public_key.key_id, public_key.key_owner
            document = public_key.retracts(policy=self.settings.compose.collision_policy)
            self._write_document(target, document.to_dict())
        except DocumentLoadError as exc:
            return ServiceResult.failure(op, exc.code, str(exc), path=str(path))
        except ExtensionError as exc:
            return ServiceResult(ok=False, op=op, error=ServiceError.from_extension_error(exc))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            return ServiceResult.failure(op, "INVALID_VALUE", first["msg"], field=field)
        except OSError as exc:
            return ServiceResult.failure(op, "IO_ERROR", f"Cannot write {target}: {exc}")

        logger.debug("Updated publicKey fields %s in %s", changed, target)
        warnings = [] if changed else ["No fields changed; document rewritten as-is"]
        data = dump_validated(
            SetKeyData,
            {"path": str(target), "key_id": new_id, "key_owner": new_owner, "changed": changed},
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _unknown_extension(self, op: str, name: str) -> ServiceResult:
        known = ", ".join(sorted(self._extensions)) or "none"
        return ServiceResult.failure(
            op,
            "UNKNOWN_EXTENSION",
            f"Unknown extension {name!r} (known: {known})",
            name=name,
        )
