"""Typed payload contracts for service boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class ExtensionItem(BaseModel):
    """One registered extension."""

    name: str
    reserved_key: str
    fields: list[str]


class ExtensionListData(BaseModel):
    """Payload contract for ``ExtensionService.list_extensions``."""

    count: int
    items: list[ExtensionItem]


class InspectData(BaseModel):
    """Payload contract for ``ExtensionService.inspect``."""

    path: str
    extension: str
    reserved_key: str
    document_type: str
    fields: dict[str, Any]
    capabilities: list[str]
    unparsed: list[str]


class RoundtripData(BaseModel):
    """Payload contract for ``ExtensionService.roundtrip``."""

    path: str
    extensions: list[str]
    unchanged: bool
    moved_keys: list[str]
    differing_keys: list[str]


class SetKeyData(BaseModel):
    """Payload contract for ``ExtensionService.set_key``."""

    path: str
    key_id: str
    key_owner: str
    changed: list[str]
