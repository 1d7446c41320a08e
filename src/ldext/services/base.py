"""BaseService — shared document loading for ldext services.

Services read JSON documents from disk, hand them to the extension
layer, and translate every failure into a ``ServiceResult``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ldext.domain.documents import Base, document_type_for

if TYPE_CHECKING:
    from ldext.config.settings import LdextSettings

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """A document could not be read or decoded."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        super().__init__(message)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ExtensionService(BaseService):
            def inspect(self, path: Path, name: str) -> ServiceResult:
                data, document = self._load_document(path)
                ...
    """

    def __init__(self, settings: LdextSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> LdextSettings:
        return self._settings

    def _load_document(self, path: Path) -> tuple[dict[str, Any], Base]:
        """Read *path* and decode it into the most specific document model.

        Returns the raw JSON object alongside the document.

        Raises:
            DocumentLoadError: unreadable file, invalid JSON, non-object
                JSON, or a well-known property with an invalid value.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DocumentLoadError("IO_ERROR", f"Cannot read {path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DocumentLoadError("INVALID_JSON", f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise DocumentLoadError("INVALID_DOCUMENT", f"{path} does not hold a JSON object")

        model = document_type_for(data)
        try:
            document = model.from_dict(data)
        except ValidationError as exc:
            msg = f"{path} is not a valid {model.__name__}: {exc.error_count()} error(s)"
            raise DocumentLoadError("INVALID_DOCUMENT", msg) from exc
        logger.debug("Loaded %s as %s", path, model.__name__)
        return data, document

    def _write_document(self, path: Path, data: dict[str, Any]) -> None:
        text = json.dumps(data, indent=self._settings.output.indent or None, ensure_ascii=False)
        path.write_text(text + "\n", encoding="utf-8")
